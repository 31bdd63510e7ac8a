"""Lark parser setup for hyphen-delimited platform identifiers."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from lark import Lark, Token

GRAMMAR_PATH = Path(__file__).parent.parent / "grammar.lark"


@lru_cache(maxsize=None)
def get_parser() -> Lark:
    """Build the identifier parser once per process."""
    return Lark.open(
        str(GRAMMAR_PATH),
        parser="lalr",
        lexer="basic",
        maybe_placeholders=False,
    )


def split_fields(text: str) -> list[Token]:
    """Split an identifier into its non-empty fields.

    Tokens keep their 1-based column so callers can point at the offending
    field in diagnostics.

    Raises:
        lark.UnexpectedInput: if the identifier holds no field at all.
    """
    tree = get_parser().parse(text)
    return [field.children[0] for field in tree.children]
