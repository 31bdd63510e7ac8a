"""Structured output for classified triples.

A triple encodes to a flat dict of its enum tokens plus the original
string; JSON and MessagePack carry that same dict.
"""
from __future__ import annotations

import json
from typing import Any, Mapping

import msgpack

from platform_triple.targets.triple import ABI, OS, Arch, Triple, TripleError, Vendor

FIELDS = ("triple", "arch", "vendor", "os", "abi")


class EncodingError(TripleError):
    pass


def triple_to_dict(triple: Triple) -> dict[str, str]:
    return {
        "triple": triple.triple_string,
        "arch": triple.arch.value,
        "vendor": triple.vendor.value,
        "os": triple.os.value,
        "abi": triple.abi.value,
    }


def _member(enum_cls, field: str, value: Any):
    try:
        return enum_cls(value)
    except ValueError:
        raise EncodingError("TE1005", field=field, value=value) from None


def triple_from_dict(data: Mapping[str, Any]) -> Triple:
    """Rebuild a triple from its encoded tokens without reparsing the string.

    Raises:
        EncodingError: a field is missing or carries an unknown token.
    """
    for field in FIELDS:
        if field not in data:
            raise EncodingError("TE1006", field=field)

    triple_string = data["triple"]
    if not isinstance(triple_string, str):
        raise EncodingError("TE1005", field="triple", value=triple_string)

    return Triple(
        triple_string=triple_string,
        arch=_member(Arch, "arch", data["arch"]),
        vendor=_member(Vendor, "vendor", data["vendor"]),
        os=_member(OS, "os", data["os"]),
        abi=_member(ABI, "abi", data["abi"]),
    )


def dumps_json(triple: Triple, indent: int | None = None) -> str:
    return json.dumps(triple_to_dict(triple), indent=indent)


def loads_json(text: str) -> Triple:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise EncodingError("TE1007", reason=str(e)) from e
    if not isinstance(data, dict):
        raise EncodingError("TE1007", reason="expected a JSON object")
    return triple_from_dict(data)


def packb(triple: Triple) -> bytes:
    """MessagePack-encode a triple."""
    return msgpack.packb(triple_to_dict(triple), use_bin_type=True)


def unpackb(blob: bytes) -> Triple:
    try:
        data = msgpack.unpackb(blob, raw=False)
    except (ValueError, msgpack.UnpackException) as e:
        raise EncodingError("TE1007", reason=str(e)) from e
    if not isinstance(data, dict):
        raise EncodingError("TE1007", reason="expected a MessagePack map")
    return triple_from_dict(data)
