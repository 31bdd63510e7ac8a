from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Any

from lark import Token

class C:
    """ANSI color/style escape codes."""
    RESET = "\x1b[0m"
    BOLD  = "\x1b[1m"
    DIM   = "\x1b[2m"
    RED   = "\x1b[31m"
    YELLOW = "\x1b[33m"
    CYAN  = "\x1b[36m"
    GRAY  = "\x1b[90m"

@dataclass
class Span:
    line: int
    col: int
    end_line: int
    end_col: int

@dataclass
class Diagnostic:
    kind: str
    code: str
    message: str
    span: Optional[Span] = None
    note: Optional[str] = None

def span_of(t: Any) -> Optional[Span]:
    if isinstance(t, Token):
        line = getattr(t, "line", None)
        col = getattr(t, "column", None)
        end_line = getattr(t, "end_line", None)
        end_col = getattr(t, "end_column", None)
        if line is not None and col is not None:
            return Span(line, col, end_line or line, end_col or col)
    return None

def whole_span(text: str) -> Span:
    """Span covering all of a single-line input."""
    return Span(1, 1, 1, len(text) + 1)


class Reporter:
    def __init__(self, source: Optional[str] = None, filename: str = "<triple>") -> None:
        self.source = source
        self.filename = filename
        self.items: List[Diagnostic] = []

    def error(self, code: str, msg: str, span: Optional[Span], note: Optional[str] = None):
        self.items.append(Diagnostic("error", code, msg, span, note))

    def warn(self, code: str, msg: str, span: Optional[Span], note: Optional[str] = None):
        self.items.append(Diagnostic("warning", code, msg, span, note))

    @property
    def has_errors(self) -> bool:
        return any(d.kind == "error" for d in self.items)

    @property
    def has_warnings(self) -> bool:
        return any(d.kind == "warning" for d in self.items)

    def format(self, use_color: bool = True, use_unicode: bool = True) -> str:
        """Render all diagnostics.

        use_color   → ANSI colorize location/kind/guide/markers
        use_unicode → use │ / ╰ box characters around the snippet
        """
        out: List[str] = []
        src_lines = self.source.splitlines() if self.source else []

        for d in self.items:
            loc = f"{self.filename}:{d.span.line}:{d.span.col}" if d.span else self.filename

            # Ensure message ends with period
            message = d.message if d.message.endswith('.') else f"{d.message}."

            if use_color:
                kind = f"{C.BOLD}{C.RED}error{C.RESET}" if d.kind == "error" else f"{C.BOLD}{C.YELLOW}warning{C.RESET}"
                head = f"{C.CYAN}{loc}{C.RESET}: {kind} [{C.DIM}{d.code}{C.RESET}]: {message}"
            else:
                head = f"{loc}: {d.kind} [{d.code}]: {message}"

            out.append(head)
            if d.span is not None:
                out.extend(self._snippet(d, src_lines, use_color, use_unicode))
            if d.note:
                note = f"  = note: {d.note}"
                out.append(f"{C.DIM}{note}{C.RESET}" if use_color else note)

        return "\n".join(out)

    def _snippet(self, d: Diagnostic, src_lines: List[str], use_color: bool, use_unicode: bool) -> List[str]:
        """Source line plus a caret marker under the span."""
        line_idx = d.span.line - 1
        line_text = src_lines[line_idx] if 0 <= line_idx < len(src_lines) else ""

        # 1-based columns; ensure at least one column
        start = max(1, d.span.col)
        width = max(1, d.span.end_col - start)
        marker = " " * (start - 1) + "^" * width

        if use_color:
            color = C.RED if d.kind == "error" else C.YELLOW
            marker = f"{color}{marker}{C.RESET}"

        if use_unicode:
            bar, corner = "  │ ", "  ╰ "
        else:
            bar, corner = "  | ", "  ` "
        if use_color:
            bar, corner = f"{C.GRAY}{bar}{C.RESET}", f"{C.GRAY}{corner}{C.RESET}"

        return [f"{bar}{line_text}", f"{corner}{marker}"]

    def print(self, stream=None, use_color: Optional[bool] = None, use_unicode: Optional[bool] = None) -> None:
        """Print diagnostics to `stream` (default: sys.stderr).

        Color is auto-enabled for TTY unless NO_COLOR or TERM=dumb.
        Unicode prefixes (│ / ╰) are auto-enabled for TTY unless NO_UNICODE or TERM=dumb.
        """
        import os, sys
        stream = stream or sys.stderr

        if use_color is None:
            is_tty = getattr(stream, "isatty", lambda: False)()
            no_color = os.getenv("NO_COLOR") is not None
            dumb = os.getenv("TERM") == "dumb"
            use_color = bool(is_tty and not no_color and not dumb)

        if use_unicode is None:
            is_tty = getattr(stream, "isatty", lambda: False)()
            no_unicode = os.getenv("NO_UNICODE") is not None
            dumb = os.getenv("TERM") == "dumb"
            use_unicode = bool(is_tty and not no_unicode and not dumb)

        text = self.format(use_color=use_color, use_unicode=use_unicode)
        if text:
            print(text, file=stream)
