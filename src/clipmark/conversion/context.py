"""Per-conversion state shared with rules."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from typing import Callable, Optional

from bs4 import PageElement, Tag

_EXCESS_NEWLINES = re.compile(r"\n{3,}")


class FootnoteContext:
    """
    Footnote definitions collected during one conversion.

    Ids are stored lower-cased; the first definition written for an id wins
    and insertion order is kept for rendering.
    """

    def __init__(self) -> None:
        self._definitions: dict[str, str] = {}

    def add(self, footnote_id: str, definition: str) -> None:
        self._definitions.setdefault(footnote_id.lower(), definition)

    def items(self) -> list[tuple[str, str]]:
        return list(self._definitions.items())

    def render(self) -> str:
        """Definitions as ``[^id]: text`` entries separated by blank lines."""
        entries = []
        for footnote_id, definition in self._definitions.items():
            definition = _EXCESS_NEWLINES.sub("\n\n", definition.strip())
            entries.append(f"[^{footnote_id}]: {definition}")
        return "\n\n".join(entries)

    def __contains__(self, footnote_id: object) -> bool:
        return isinstance(footnote_id, str) and footnote_id.lower() in self._definitions

    def __iter__(self) -> Iterator[str]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)


class ConversionContext:
    """
    State for a single transpile call, handed to every rule.

    Holds the source URL, the FootnoteContext and a callback into the
    transpiler so rules can render a subtree (or a node's children minus
    some of them) without touching the borrowed tree.
    """

    def __init__(self, url: str, render: Callable[[PageElement, ConversionContext], str]):
        self.url = url
        self.footnotes = FootnoteContext()
        self._render = render
        self._skipped: list[PageElement] = []

    def render(self, node: PageElement) -> str:
        """Markdown for ``node`` itself, including its own rule."""
        return self._render(node, self)

    def render_children(self, node: Tag, skip: Iterable[Optional[PageElement]] = ()) -> str:
        """Markdown for the children of ``node``, leaving out ``skip`` subtrees."""
        skipped = [element for element in skip if element is not None]
        self._skipped.extend(skipped)
        try:
            return "".join(self._render(child, self) for child in node.children)
        finally:
            del self._skipped[len(self._skipped) - len(skipped) :]

    def is_skipped(self, node: PageElement) -> bool:
        return any(node is element for element in self._skipped)
