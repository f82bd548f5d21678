"""Read-only helpers over the BeautifulSoup node model."""

from __future__ import annotations

import re
from typing import Callable, Iterator, Optional

from bs4 import BeautifulSoup, NavigableString, PageElement, Tag
from bs4.element import PreformattedString

# Elements rendered as blocks (separated from their surroundings by blank lines)
BLOCK_TAGS = frozenset(
    {
        "address",
        "article",
        "aside",
        "audio",
        "blockquote",
        "body",
        "canvas",
        "center",
        "dd",
        "details",
        "dialog",
        "dir",
        "div",
        "dl",
        "dt",
        "fieldset",
        "figcaption",
        "figure",
        "footer",
        "form",
        "frameset",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "hgroup",
        "hr",
        "html",
        "li",
        "main",
        "menu",
        "nav",
        "noframes",
        "noscript",
        "ol",
        "output",
        "p",
        "pre",
        "section",
        "summary",
        "table",
        "tbody",
        "td",
        "tfoot",
        "th",
        "thead",
        "tr",
        "ul",
    }
)

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")

_DISPLAY_NONE = re.compile(r"display\s*:\s*none", re.IGNORECASE)


def is_element(node: Optional[PageElement]) -> bool:
    """True for element nodes (the document object itself excluded)."""
    return isinstance(node, Tag) and not isinstance(node, BeautifulSoup)


def is_text(node: Optional[PageElement]) -> bool:
    """True for text leaves (comments, doctypes and CDATA excluded)."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def tag_name(node: Optional[PageElement]) -> str:
    if not is_element(node):
        return ""
    return node.name.lower()  # type: ignore[union-attr]


def is_tag(node: Optional[PageElement], *names: str) -> bool:
    return tag_name(node) in names


def classes(node: Optional[PageElement]) -> list[str]:
    """Class list of an element (empty for anything else)."""
    if not is_element(node):
        return []
    value = node.get("class")  # type: ignore[union-attr]
    if not value:
        return []
    if isinstance(value, str):
        return value.split()
    return list(value)


def has_class(node: Optional[PageElement], *names: str) -> bool:
    node_classes = classes(node)
    return any(name in node_classes for name in names)


def attr(node: Optional[PageElement], name: str, default: str = "") -> str:
    """String value of an attribute; multi-valued attributes are space-joined."""
    if not is_element(node):
        return default
    value = node.get(name)  # type: ignore[union-attr]
    if value is None:
        return default
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def is_block(node: Optional[PageElement]) -> bool:
    if isinstance(node, BeautifulSoup):
        return True
    return tag_name(node) in BLOCK_TAGS


def is_hidden(node: Optional[PageElement]) -> bool:
    """True when the element carries an inline ``display: none`` style."""
    return bool(_DISPLAY_NONE.search(attr(node, "style")))


def element_ancestors(node: PageElement) -> Iterator[Tag]:
    """Element ancestors, nearest first (the document object excluded)."""
    for parent in node.parents:
        if is_element(parent):
            yield parent


def closest(node: PageElement, predicate: Callable[[Tag], bool]) -> Optional[Tag]:
    """First of the node itself and its ancestors matching the predicate."""
    if is_element(node) and predicate(node):  # type: ignore[arg-type]
        return node  # type: ignore[return-value]
    for parent in element_ancestors(node):
        if predicate(parent):
            return parent
    return None


def has_ancestor(node: PageElement, *names: str) -> bool:
    return any(tag_name(parent) in names for parent in element_ancestors(node))


def element_children(node: Tag) -> list[Tag]:
    return [child for child in node.children if is_element(child)]


def previous_element_sibling(node: PageElement) -> Optional[Tag]:
    for sibling in node.previous_siblings:
        if is_element(sibling):
            return sibling  # type: ignore[return-value]
    return None


def text_content(node: Optional[PageElement]) -> str:
    """Concatenated text of a node, like the DOM ``textContent``."""
    if node is None:
        return ""
    if isinstance(node, NavigableString):
        return str(node)
    return node.get_text()  # type: ignore[no-any-return]
