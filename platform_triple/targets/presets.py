"""
Well-known platform presets and host selection.

Presets are fixed triples parsed once at import. The host preset is picked
from the default target triple LLVM was configured for, which plays the
role of a build-time target check; it is never derived from probing the
running OS.
"""
from __future__ import annotations

import os
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional

from lark import UnexpectedInput

from platform_triple.internals.errors import raise_internal_error
from platform_triple.internals.parser import split_fields
from platform_triple.targets.triple import Arch, Triple, TripleError, parse_triple

# Overrides the LLVM default triple used for host selection.
HOST_ENV_VAR = "PLATFORM_TRIPLE_HOST"


class UnsupportedHostError(TripleError):
    def __init__(self, target: str):
        super().__init__("TE1004", None, target=target)


def _preset(string: str) -> Triple:
    try:
        return parse_triple(string)
    except TripleError as e:
        raise_internal_error("TE0101", triple=string, reason=e.message)


MACOS = _preset("x86_64-apple-macosx")
X86_64_LINUX = _preset("x86_64-unknown-linux-gnu")
I686_LINUX = _preset("i686-unknown-linux")
PPC64LE_LINUX = _preset("powerpc64le-unknown-linux")
S390X_LINUX = _preset("s390x-unknown-linux")
ARM64_LINUX = _preset("aarch64-unknown-linux-gnu")
ARM_LINUX = _preset("armv7-unknown-linux-gnueabihf")
ARM_ANDROID = _preset("armv7-unknown-linux-androideabi")
ARM64_ANDROID = _preset("aarch64-unknown-linux-android")
X86_64_ANDROID = _preset("x86_64-unknown-linux-android")
I686_ANDROID = _preset("i686-unknown-linux-android")
WINDOWS = _preset("x86_64-unknown-windows-msvc")

PRESETS: Mapping[str, Triple] = MappingProxyType({
    "macOS": MACOS,
    "x86_64Linux": X86_64_LINUX,
    "i686Linux": I686_LINUX,
    "ppc64leLinux": PPC64LE_LINUX,
    "s390xLinux": S390X_LINUX,
    "arm64Linux": ARM64_LINUX,
    "armLinux": ARM_LINUX,
    "armAndroid": ARM_ANDROID,
    "arm64Android": ARM64_ANDROID,
    "x86_64Android": X86_64_ANDROID,
    "i686Android": I686_ANDROID,
    "windows": WINDOWS,
})

_LINUX_HOSTS: Mapping[Arch, Triple] = MappingProxyType({
    Arch.X86_64: X86_64_LINUX,
    Arch.I686: I686_LINUX,
    Arch.POWERPC64LE: PPC64LE_LINUX,
    Arch.S390X: S390X_LINUX,
    Arch.AARCH64: ARM64_LINUX,
    Arch.ARM: ARM_LINUX,
})

_ANDROID_HOSTS: Mapping[Arch, Triple] = MappingProxyType({
    Arch.ARM: ARM_ANDROID,
    Arch.AARCH64: ARM64_ANDROID,
    Arch.X86_64: X86_64_ANDROID,
    Arch.I686: I686_ANDROID,
})


def _host_arch(token: str) -> Optional[Arch]:
    """Fold LLVM architecture spellings onto the preset architectures."""
    if token in ("x86_64", "amd64"):
        return Arch.X86_64
    if token in ("i386", "i486", "i586", "i686"):
        return Arch.I686
    if token in ("aarch64", "arm64"):
        return Arch.AARCH64
    if token in ("powerpc64le", "s390x"):
        return Arch(token)
    if token.startswith(("arm", "thumb")):
        return Arch.ARM
    return None


def select_host_preset(target: str) -> Triple:
    """Map an LLVM target triple onto one of the fixed presets.

    Accepts LLVM spellings (``arm64-apple-darwin23.1.0``,
    ``x86_64-pc-windows-msvc``, ``aarch64-unknown-linux-android21``), which
    the strict classifier would reject.

    Raises:
        UnsupportedHostError: no preset corresponds to the target.
    """
    try:
        fields = [str(f) for f in split_fields(target)]
    except UnexpectedInput:
        raise UnsupportedHostError(target) from None

    rest = fields[1:]
    if any(f.startswith(("darwin", "macos")) for f in rest):
        return MACOS
    if any(f.startswith(("windows", "win32")) for f in rest):
        return WINDOWS

    arch = _host_arch(fields[0])
    if arch is not None and any(f.startswith("linux") for f in rest):
        if any(f.startswith("android") for f in rest):
            table = _ANDROID_HOSTS
        else:
            table = _LINUX_HOSTS
        if arch in table:
            return table[arch]

    raise UnsupportedHostError(target)


def host_target_triple() -> str:
    """The raw triple host selection is based on."""
    override = os.environ.get(HOST_ENV_VAR)
    if override:
        return override

    from llvmlite import binding as llvm
    return llvm.get_default_triple()


@lru_cache(maxsize=None)
def host_triple() -> Triple:
    """The preset the toolchain is built for; computed once per process."""
    return select_host_preset(host_target_triple())
