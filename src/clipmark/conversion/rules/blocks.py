"""Callouts, fenced code blocks and anchors wrapping headings."""

import re
from typing import Optional

from bs4 import Tag

from ..context import ConversionContext
from ..dom import HEADING_TAGS, attr, classes, element_children, has_class, is_tag, text_content
from ..engine import Rule
from .base import block

PRIORITY = 300

ALERT_CLASS = "markdown-alert"
ALERT_TITLE_CLASS = "markdown-alert-title"

_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def _is_callout(node: Tag) -> bool:
    return is_tag(node, "div") and has_class(node, ALERT_CLASS)


def _callout(content: str, node: Tag, ctx: ConversionContext) -> str:
    prefix = f"{ALERT_CLASS}-"
    kind = next(
        (name[len(prefix) :] for name in classes(node) if name.startswith(prefix) and name != ALERT_TITLE_CLASS),
        "note",
    ).upper()

    title = node.select_one(f".{ALERT_TITLE_CLASS}")
    body = ctx.render_children(node, skip=[title]) if title is not None else content
    body = _EXCESS_NEWLINES.sub("\n\n", body.strip())
    lines = [f"> {line}".rstrip() for line in body.split("\n")]
    return block("\n".join([f"> [!{kind}]", *lines]))


def _is_preformatted_code(node: Tag) -> bool:
    return is_tag(node, "pre") and node.find("code") is not None


def _preformatted_code(content: str, node: Tag, ctx: ConversionContext) -> str:
    code = node.find("code")
    language = attr(code, "data-lang")
    source = text_content(code).strip().replace("`", "\\`")
    return block(f"```{language}\n{source}\n```")


def _heading_child(node: Tag) -> Optional[Tag]:
    return next((child for child in element_children(node) if is_tag(child, *HEADING_TAGS)), None)


def _is_complex_link(node: Tag) -> bool:
    return is_tag(node, "a") and len(list(node.children)) > 1 and _heading_child(node) is not None


def _complex_link(content: str, node: Tag, ctx: ConversionContext) -> str:
    heading = _heading_child(node)
    heading_markdown = ctx.render(heading).strip()  # type: ignore[arg-type]
    remaining = ctx.render_children(node, skip=[heading]).strip()  # type: ignore[list-item]

    markdown = f"{heading_markdown}\n\n{remaining}\n\n"
    href = attr(node, "href")
    if href:
        title = attr(node, "title")
        title_part = f' "{title}"' if title else ""
        markdown += f"[View original]({href}){title_part}"
    return block(markdown.strip())


def build_rules() -> list[Rule]:
    return [
        Rule("callout", _is_callout, _callout, PRIORITY),
        Rule("preformattedCode", _is_preformatted_code, _preformatted_code, PRIORITY),
        Rule("complexLinkStructure", _is_complex_link, _complex_link, PRIORITY),
    ]
