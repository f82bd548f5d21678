"""Shared helpers for rule modules."""

import re

_LEADING_WS = re.compile(r"^\s*")
_TRAILING_WS = re.compile(r"\s*$")


def block(markdown: str) -> str:
    """Separate a block from its neighbours with blank lines."""
    return f"\n\n{markdown}\n\n"


def wrap_inline(content: str, opener: str, closer: str = "") -> str:
    """
    Wrap inline content in delimiters, keeping flanking whitespace outside.

    ``" bold "`` becomes ``" **bold** "`` rather than ``"** bold **"``;
    whitespace-only content is returned unchanged.
    """
    closer = closer or opener
    if not content.strip():
        return content
    leading = _LEADING_WS.match(content).group(0)  # type: ignore[union-attr]
    trailing = _TRAILING_WS.search(content).group(0)  # type: ignore[union-attr]
    core = content[len(leading) : len(content) - len(trailing)]
    return f"{leading}{opener}{core}{closer}{trailing}"
