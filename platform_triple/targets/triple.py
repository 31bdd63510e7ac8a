"""
Target triple parsing.

Parses values such as ``x86_64-apple-macosx10.10`` into a set of enums for
os/arch/abi based conditions in a build plan, and answers the per-platform
questions a build needs (file extensions, platform family).
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from lark import UnexpectedInput

from platform_triple.internals.errors import ERR, raise_internal_error
from platform_triple.internals.parser import split_fields
from platform_triple.internals.report import Span, span_of, whole_span


class TripleError(Exception):
    """Base exception for triple classification errors."""

    def __init__(self, code: str, span: Optional[Span] = None, **kwargs):
        self.code = code
        self.span = span
        self.kwargs = kwargs
        msg = ERR[code]
        self.message = msg.text.format(**kwargs)
        super().__init__(f"{code}: {self.message}")


class BadFormatError(TripleError):
    """Identifier does not have 3 or 4 fields."""

    def __init__(self, triple: str, count: int):
        super().__init__("TE1001", whole_span(triple), triple=triple, count=count)


class UnknownArchError(TripleError):
    def __init__(self, arch: str, span: Optional[Span] = None):
        super().__init__("TE1002", span, arch=arch)


class UnknownOSError(TripleError):
    def __init__(self, os: str, span: Optional[Span] = None):
        super().__init__("TE1003", span, os=os)


class Arch(str, Enum):
    X86_64 = "x86_64"
    I686 = "i686"
    POWERPC64LE = "powerpc64le"
    S390X = "s390x"
    AARCH64 = "aarch64"
    ARMV7 = "armv7"
    THUMBV7M = "thumbv7m"
    THUMBV7EM = "thumbv7em"
    ARM = "arm"


class Vendor(str, Enum):
    UNKNOWN = "unknown"
    APPLE = "apple"


class OS(str, Enum):
    DARWIN = "darwin"
    MACOS = "macosx"
    LINUX = "linux"
    WINDOWS = "windows"
    NONE = "none"


class ABI(str, Enum):
    UNKNOWN = "unknown"
    ANDROID = "android"
    EABI = "eabi"


# Prefix matching priority: the first candidate whose token starts the
# os field wins.
OS_CANDIDATES: tuple[OS, ...] = (
    OS.DARWIN,
    OS.MACOS,
    OS.LINUX,
    OS.WINDOWS,
    OS.NONE,
)

_ARCHS = {a.value: a for a in Arch}
_VENDORS = {v.value: v for v in Vendor}

_DYNAMIC_LIBRARY_EXTENSIONS: dict[OS, str] = {
    OS.DARWIN: ".dylib",
    OS.MACOS: ".dylib",
    OS.LINUX: ".so",
    OS.NONE: ".so",
    OS.WINDOWS: ".dll",
}

_EXECUTABLE_EXTENSIONS: dict[OS, str] = {
    OS.DARWIN: "",
    OS.MACOS: "",
    OS.LINUX: "",
    OS.NONE: "",
    OS.WINDOWS: ".exe",
}

# Non-Apple platforms use Foundation's FHS bundle layout.
_NSBUNDLE_EXTENSIONS: dict[OS, str] = {
    OS.DARWIN: ".bundle",
    OS.MACOS: ".bundle",
    OS.LINUX: ".resources",
    OS.NONE: ".resources",
    OS.WINDOWS: ".resources",
}


@dataclass(frozen=True)
class Triple:
    """A classified platform identifier."""
    triple_string: str
    arch: Arch
    vendor: Vendor
    os: OS
    abi: ABI

    @classmethod
    def parse(cls, string: str) -> Triple:
        return parse_triple(string)

    def __str__(self) -> str:
        return self.triple_string

    @property
    def is_android(self) -> bool:
        return self.os == OS.LINUX and self.abi == ABI.ANDROID

    @property
    def is_darwin(self) -> bool:
        """True for Apple vendor or any Darwin-family OS."""
        return self.vendor == Vendor.APPLE or self.os == OS.MACOS or self.os == OS.DARWIN

    @property
    def is_linux(self) -> bool:
        return self.os == OS.LINUX

    @property
    def is_windows(self) -> bool:
        return self.os == OS.WINDOWS

    def triple_string_for_platform_version(self, version: str) -> str:
        """Return the triple string for the given platform version.

        Only meant for Apple platforms; calling it on anything else is a
        caller bug and raises RuntimeError.
        """
        if not self.is_darwin:
            raise_internal_error("TE0100", triple=self.triple_string)
        return self.triple_string + version

    @property
    def dynamic_library_extension(self) -> str:
        """The file extension for dynamic libraries (eg. `.dll`, `.so`, or `.dylib`)."""
        return _DYNAMIC_LIBRARY_EXTENSIONS[self.os]

    @property
    def executable_extension(self) -> str:
        return _EXECUTABLE_EXTENSIONS[self.os]

    @property
    def nsbundle_extension(self) -> str:
        """The file extension for Foundation-style bundles."""
        return _NSBUNDLE_EXTENSIONS[self.os]


def parse_os(field: str) -> Optional[OS]:
    for candidate in OS_CANDIDATES:
        if field.startswith(candidate.value):
            return candidate
    return None


def parse_abi(field: str) -> ABI:
    # Only android is recognized from the abi field.
    if field.startswith(ABI.ANDROID.value):
        return ABI.ANDROID
    return ABI.UNKNOWN


def parse_triple(string: str) -> Triple:
    """
    Classify a platform identifier.

    Examples:
        x86_64-apple-macosx10.10 -> Triple(x86_64, apple, macosx, unknown)
        aarch64-unknown-linux-android -> Triple(aarch64, unknown, linux, android)

    Raises:
        BadFormatError: not 3 or 4 fields.
        UnknownArchError: first field is not a known architecture.
        UnknownOSError: third field starts with no known OS token.
    """
    try:
        fields = split_fields(string)
    except UnexpectedInput:
        raise BadFormatError(string, 0) from None

    if len(fields) not in (3, 4):
        raise BadFormatError(string, len(fields))

    arch = _ARCHS.get(str(fields[0]))
    if arch is None:
        raise UnknownArchError(str(fields[0]), span_of(fields[0]))

    vendor = _VENDORS.get(str(fields[1]), Vendor.UNKNOWN)

    operating_system = parse_os(str(fields[2]))
    if operating_system is None:
        raise UnknownOSError(str(fields[2]), span_of(fields[2]))

    abi = parse_abi(str(fields[3])) if len(fields) > 3 else ABI.UNKNOWN

    return Triple(
        triple_string=string,
        arch=arch,
        vendor=vendor,
        os=operating_system,
        abi=abi,
    )
