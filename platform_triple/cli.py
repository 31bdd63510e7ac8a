"""CLI entry point and argument parsing."""
from __future__ import annotations

import argparse
import datetime
import platform
import sys

from platform_triple.internals import errors as er
from platform_triple.internals.parser import split_fields
from platform_triple.internals.report import Reporter, span_of
from platform_triple.targets.triple import ABI, Triple, TripleError, Vendor, parse_triple


def describe(triple: Triple) -> str:
    """Human readable summary of a classified triple."""
    families = [
        name for name, flag in (
            ("android", triple.is_android),
            ("darwin", triple.is_darwin),
            ("linux", triple.is_linux),
            ("windows", triple.is_windows),
        ) if flag
    ]
    lines = [
        triple.triple_string,
        f"  arch:      {triple.arch.value}",
        f"  vendor:    {triple.vendor.value}",
        f"  os:        {triple.os.value}",
        f"  abi:       {triple.abi.value}",
        f"  family:    {', '.join(families) or '-'}",
        f"  dylib:     {triple.dynamic_library_extension!r}",
        f"  exe:       {triple.executable_extension!r}",
        f"  bundle:    {triple.nsbundle_extension!r}",
    ]
    return "\n".join(lines)


def _warn_degraded(triple: Triple, reporter: Reporter) -> None:
    """Report vendor/abi fields that silently became 'unknown'."""
    fields = split_fields(triple.triple_string)

    if triple.vendor == Vendor.UNKNOWN and str(fields[1]) != Vendor.UNKNOWN.value:
        er.emit(reporter, er.ERR.TW2001, span_of(fields[1]), vendor=str(fields[1]))

    if len(fields) > 3 and triple.abi == ABI.UNKNOWN and str(fields[3]) != ABI.UNKNOWN.value:
        er.emit(reporter, er.ERR.TW2002, span_of(fields[3]), abi=str(fields[3]))


def _render(triple: Triple, args: argparse.Namespace) -> str:
    from platform_triple.targets import encoding

    if args.json:
        return encoding.dumps_json(triple, indent=2)
    if args.msgpack_hex:
        return encoding.packb(triple).hex()
    return describe(triple)


def run_triple(text: str, args: argparse.Namespace) -> int:
    """Classify one identifier and print it; returns an exit status."""
    reporter = Reporter(source=text)

    try:
        triple = parse_triple(text)
    except TripleError as exc:
        er.emit(reporter, er.ERR[exc.code], exc.span, **exc.kwargs)
        reporter.print()
        return 2

    if args.warn:
        _warn_degraded(triple, reporter)

    if args.platform_version is not None:
        if not triple.is_darwin:
            er.emit(reporter, er.ERR.TE0100, None, triple=text)
            reporter.print()
            return 2
        print(triple.triple_string_for_platform_version(args.platform_version))
    else:
        print(_render(triple, args))

    reporter.print()
    return 0


def run_host(args: argparse.Namespace) -> int:
    from platform_triple.targets.presets import UnsupportedHostError, host_target_triple, host_triple

    try:
        triple = host_triple()
    except UnsupportedHostError as exc:
        reporter = Reporter(source=host_target_triple())
        er.emit(reporter, er.ERR[exc.code], exc.span, **exc.kwargs)
        reporter.print()
        return 2

    print(_render(triple, args))
    return 0


def run_presets() -> int:
    from platform_triple.targets.presets import PRESETS

    width = max(len(name) for name in PRESETS)
    for name, triple in PRESETS.items():
        print(f"{name:<{width}}  {triple.triple_string}")
    return 0


def _print_banner() -> None:
    import llvmlite
    from llvmlite import binding as llvm

    from platform_triple import __version__, __dev__ as is_dev

    BOLD, DIM, RESET = ("\x1b[1m", "\x1b[2m", "\x1b[0m") if sys.stdout.isatty() else ("", "", "")
    llvm_ver = ".".join(map(str, llvm.llvm_version_info))
    dev_marker = " (dev)" if is_dev else ""
    print(
        f"{BOLD}platform-triple{RESET} \u2022 {__version__}{dev_marker}\n"
        f"{DIM}Python {platform.python_version()} \u2022 llvmlite {llvmlite.__version__} "
        f"\u2022 LLVM {llvm_ver} \u2022 {datetime.date.today().isoformat()}{RESET}\n"
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="platform-triple",
        description="Classify <arch>-<vendor>-<os>[-<abi>] platform identifiers",
    )
    ap.add_argument("triples", nargs="*", metavar="TRIPLE", help="Identifier(s) to classify")
    ap.add_argument("--version", action="store_true", help="Show version and exit")
    ap.add_argument("--host", action="store_true", help="Describe the host preset")
    ap.add_argument("--presets", action="store_true", help="List well-known presets")

    output = ap.add_mutually_exclusive_group()
    output.add_argument("--json", action="store_true", help="Print structured output as JSON")
    output.add_argument("--msgpack-hex", action="store_true",
                        help="Print structured output as hex-encoded MessagePack")
    output.add_argument("--platform-version", metavar="VERSION",
                        help="Print the Darwin triple string with VERSION appended")

    ap.add_argument("--warn", action="store_true",
                    help="Warn when vendor or ABI fields are not recognized")
    return ap


def main(argv: list[str] | None = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    if args.presets and (args.host or args.triples):
        ap.error("--presets takes no TRIPLE and cannot be combined with --host")
    if args.presets and (args.json or args.msgpack_hex or args.platform_version is not None or args.warn):
        ap.error("--presets prints names only; output options do not apply")
    if args.host and args.triples:
        ap.error("--host takes no TRIPLE")
    if args.host and (args.platform_version is not None or args.warn):
        ap.error("--platform-version and --warn apply to TRIPLE arguments, not --host")

    if args.version:
        _print_banner()
        return 0

    if args.presets:
        return run_presets()

    if args.host:
        return run_host(args)

    if not args.triples:
        ap.print_help()
        return 0

    status = 0
    for text in args.triples:
        status = max(status, run_triple(text, args))
    return status


def cli_main() -> int:
    try:
        return main()
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130
