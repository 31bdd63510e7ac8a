# internals/errors.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, NoReturn, Optional

from platform_triple.internals.report import Span, Reporter


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ErrorMessage:
    code: str
    severity: Severity
    text: str
    doc: str = ""


REGISTRY: Dict[str, ErrorMessage] = {}

class _ErrorCatalog:
    def __init__(self, backing: Dict[str, ErrorMessage]) -> None:
        self._registry = backing

    def __getattr__(self, name: str) -> ErrorMessage:
        try:
            return self._registry[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __getitem__(self, code: str) -> ErrorMessage:
        return self._registry[code]


ERR = _ErrorCatalog(REGISTRY)

def emit(r: Reporter, em: ErrorMessage, span: Optional[Span], **kwargs) -> None:
    text = _fmt(em.code, **kwargs)
    if em.severity == Severity.ERROR:
        r.error(em.code, text, span, note=em.doc or None)
    else:
        r.warn(em.code, text, span, note=em.doc or None)

def raise_internal_error(code: str, **kwargs) -> NoReturn:
    """Raise a RuntimeError for internal errors.

    Internal errors (TE0xxx codes) indicate a caller bug or a broken
    built-in table, never bad user input.

    Raises:
        RuntimeError: Always raises with formatted error message
    """
    text = _fmt(code, **kwargs)
    raise RuntimeError(f"{code}: {text}")


#
# --- Helpers
#

def _add(msg: ErrorMessage) -> None:
    if msg.code in REGISTRY:
        raise ValueError(f"duplicate error code {REGISTRY[msg.code]} in {msg}")
    REGISTRY[msg.code] = msg

def _get(code: str) -> ErrorMessage:
    try:
        return REGISTRY[code]
    except KeyError:
        raise KeyError(f"unknown error code: {code}")

def _fmt(code: str, **kwargs) -> str:
    msg = _get(code)
    try:
        return msg.text.format(**kwargs)
    except KeyError as key_error:
        missing = key_error.args[0]
        raise KeyError(f"missing text key '{missing}' for {code} "
                       f"(needed by: {msg.text!r})") from None

#
# --- Registry population
#

# Internal errors - TE0xxx range
_add(ErrorMessage("TE0100", Severity.ERROR,
    "platform version requested for non-Darwin triple '{triple}'",
    "Platform versions apply to Apple (Darwin-family) triples only; check is_darwin first."))

_add(ErrorMessage("TE0101", Severity.ERROR,
    "preset triple '{triple}' failed to parse: {reason}",
    "A built-in preset literal is not accepted by the classifier."))

# Classification errors - TE10xx range
_add(ErrorMessage("TE1001", Severity.ERROR,
    "malformed triple '{triple}': expected 3 or 4 '-' separated fields, found {count}",
    "A triple has the form <arch>-<vendor>-<os>[-<abi>]."))

_add(ErrorMessage("TE1002", Severity.ERROR,
    "unknown architecture '{arch}'",
    "The first field must exactly match a known architecture (case-sensitive)."))

_add(ErrorMessage("TE1003", Severity.ERROR,
    "unknown operating system '{os}'",
    "The third field must start with darwin, macosx, linux, windows or none."))

_add(ErrorMessage("TE1004", Severity.ERROR,
    "no preset matches host target '{target}'",
    "Set PLATFORM_TRIPLE_HOST to a supported target triple."))

# Encoding errors
_add(ErrorMessage("TE1005", Severity.ERROR,
    "invalid encoded {field} '{value}'"))

_add(ErrorMessage("TE1006", Severity.ERROR,
    "encoded triple is missing field '{field}'"))

_add(ErrorMessage("TE1007", Severity.ERROR,
    "cannot decode triple: {reason}"))

# Warnings - TW2xxx range
_add(ErrorMessage("TW2001", Severity.WARNING,
    "unrecognized vendor '{vendor}', treated as 'unknown'"))

_add(ErrorMessage("TW2002", Severity.WARNING,
    "unrecognized ABI '{abi}', treated as 'unknown'"))
