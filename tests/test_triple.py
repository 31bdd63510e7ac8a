import pytest

from platform_triple.targets.triple import (
    ABI,
    OS,
    OS_CANDIDATES,
    Arch,
    BadFormatError,
    Triple,
    UnknownArchError,
    UnknownOSError,
    Vendor,
    parse_triple,
)


def test_parse_macos_with_version_suffix() -> None:
    triple = parse_triple("x86_64-apple-macosx10.10")
    assert triple.arch == Arch.X86_64
    assert triple.vendor == Vendor.APPLE
    assert triple.os == OS.MACOS
    assert triple.abi == ABI.UNKNOWN
    assert triple.triple_string == "x86_64-apple-macosx10.10"
    assert str(triple) == "x86_64-apple-macosx10.10"


def test_parse_android() -> None:
    triple = parse_triple("aarch64-unknown-linux-android")
    assert triple.arch == Arch.AARCH64
    assert triple.vendor == Vendor.UNKNOWN
    assert triple.os == OS.LINUX
    assert triple.abi == ABI.ANDROID
    assert triple.is_android


def test_parse_classmethod() -> None:
    assert Triple.parse("s390x-unknown-linux") == parse_triple("s390x-unknown-linux")


@pytest.mark.parametrize("text, count", [
    ("bogus", 1),
    ("x86_64-apple", 2),
    ("x86_64-unknown-linux-gnu-extra", 5),
])
def test_parse_bad_format(text: str, count: int) -> None:
    with pytest.raises(BadFormatError) as info:
        parse_triple(text)
    assert info.value.code == "TE1001"
    assert info.value.kwargs["count"] == count


@pytest.mark.parametrize("text", ["", "-", "---"])
def test_parse_no_fields(text: str) -> None:
    with pytest.raises(BadFormatError) as info:
        parse_triple(text)
    assert info.value.kwargs["count"] == 0


def test_empty_fields_are_dropped() -> None:
    triple = parse_triple("-x86_64--apple-macosx-")
    assert triple.arch == Arch.X86_64
    assert triple.vendor == Vendor.APPLE
    assert triple.os == OS.MACOS
    assert triple.triple_string == "-x86_64--apple-macosx-"


@pytest.mark.parametrize("arch", ["zzz", "X86_64", "amd64", "armv7a", "x86_64h"])
def test_parse_unknown_arch(arch: str) -> None:
    with pytest.raises(UnknownArchError) as info:
        parse_triple(f"{arch}-unknown-linux")
    assert info.value.code == "TE1002"
    assert info.value.kwargs["arch"] == arch
    assert info.value.span.col == 1


def test_parse_unknown_os() -> None:
    with pytest.raises(UnknownOSError) as info:
        parse_triple("x86_64-unknown-zzz")
    assert info.value.code == "TE1003"
    assert info.value.span.col == 16
    assert info.value.span.end_col == 19


@pytest.mark.parametrize("os_field", ["Linux", "mac", "win32", "freebsd"])
def test_parse_os_is_case_sensitive_prefix(os_field: str) -> None:
    with pytest.raises(UnknownOSError):
        parse_triple(f"x86_64-unknown-{os_field}")


@pytest.mark.parametrize("os_field, expected", [
    ("darwin", OS.DARWIN),
    ("darwin19.6.0", OS.DARWIN),
    ("macosx", OS.MACOS),
    ("macosx10.15", OS.MACOS),
    ("linux", OS.LINUX),
    ("linuxfoo", OS.LINUX),
    ("windows", OS.WINDOWS),
    ("none", OS.NONE),
])
def test_parse_os_prefix(os_field: str, expected: OS) -> None:
    assert parse_triple(f"arm-unknown-{os_field}").os == expected


def test_os_candidate_order() -> None:
    assert OS_CANDIDATES == (OS.DARWIN, OS.MACOS, OS.LINUX, OS.WINDOWS, OS.NONE)


@pytest.mark.parametrize("vendor, expected", [
    ("apple", Vendor.APPLE),
    ("unknown", Vendor.UNKNOWN),
    ("pc", Vendor.UNKNOWN),
    ("Apple", Vendor.UNKNOWN),
])
def test_parse_vendor_never_fails(vendor: str, expected: Vendor) -> None:
    assert parse_triple(f"x86_64-{vendor}-linux").vendor == expected


@pytest.mark.parametrize("abi, expected", [
    ("android", ABI.ANDROID),
    ("androideabi", ABI.ANDROID),
    ("android21", ABI.ANDROID),
    ("eabi", ABI.UNKNOWN),
    ("gnu", ABI.UNKNOWN),
    ("gnueabihf", ABI.UNKNOWN),
])
def test_parse_abi_never_fails(abi: str, expected: ABI) -> None:
    assert parse_triple(f"armv7-unknown-linux-{abi}").abi == expected


def test_missing_abi_is_unknown() -> None:
    assert parse_triple("thumbv7em-unknown-none").abi == ABI.UNKNOWN


def test_triple_is_immutable() -> None:
    triple = parse_triple("x86_64-unknown-linux")
    with pytest.raises(AttributeError):
        triple.os = OS.WINDOWS  # type: ignore[misc]


def test_is_android_requires_linux() -> None:
    assert not parse_triple("aarch64-unknown-none-android").is_android


@pytest.mark.parametrize("text", [
    "x86_64-apple-linux",
    "aarch64-apple-none",
    "x86_64-unknown-darwin",
    "x86_64-unknown-macosx",
    "aarch64-apple-macosx11.0",
])
def test_is_darwin(text: str) -> None:
    assert parse_triple(text).is_darwin


@pytest.mark.parametrize("text", [
    "x86_64-unknown-linux",
    "x86_64-unknown-windows",
    "thumbv7m-unknown-none-eabi",
])
def test_is_not_darwin(text: str) -> None:
    assert not parse_triple(text).is_darwin


def test_is_linux_and_windows() -> None:
    linux = parse_triple("powerpc64le-unknown-linux")
    windows = parse_triple("x86_64-unknown-windows-msvc")
    assert linux.is_linux and not linux.is_windows
    assert windows.is_windows and not windows.is_linux


def test_platform_version() -> None:
    triple = parse_triple("x86_64-apple-macosx")
    assert triple.triple_string_for_platform_version("10.15") == "x86_64-apple-macosx10.15"
    assert triple.triple_string_for_platform_version("") == "x86_64-apple-macosx"


def test_platform_version_requires_darwin() -> None:
    triple = parse_triple("x86_64-unknown-linux")
    with pytest.raises(RuntimeError, match="TE0100"):
        triple.triple_string_for_platform_version("10.15")


@pytest.mark.parametrize("os_field, dylib, exe, bundle", [
    ("darwin", ".dylib", "", ".bundle"),
    ("macosx", ".dylib", "", ".bundle"),
    ("linux", ".so", "", ".resources"),
    ("none", ".so", "", ".resources"),
    ("windows", ".dll", ".exe", ".resources"),
])
def test_extensions(os_field: str, dylib: str, exe: str, bundle: str) -> None:
    triple = parse_triple(f"x86_64-unknown-{os_field}")
    assert triple.dynamic_library_extension == dylib
    assert triple.executable_extension == exe
    assert triple.nsbundle_extension == bundle


def test_extension_tables_cover_every_os() -> None:
    for member in OS:
        triple = Triple("", Arch.ARM, Vendor.UNKNOWN, member, ABI.UNKNOWN)
        assert triple.executable_extension == (".exe" if member == OS.WINDOWS else "")
        assert triple.dynamic_library_extension
        assert triple.nsbundle_extension
