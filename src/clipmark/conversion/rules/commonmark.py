"""
Base CommonMark rules: paragraphs, headings, emphasis, code, links, images.

Configured for atx headings, ``*`` emphasis, ``---`` rules and two-space
hard line breaks. Every other rule category outranks these.
"""

import re

from bs4 import Tag

from ..context import ConversionContext
from ..dom import HEADING_TAGS, attr, is_tag
from ..engine import Rule
from .base import block, wrap_inline

PRIORITY = 100

_BACKTICK_RUNS = re.compile(r"`+")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def _paragraph(content: str, node: Tag, ctx: ConversionContext) -> str:
    text = content.strip()
    return block(text) if text else ""


def _heading(content: str, node: Tag, ctx: ConversionContext) -> str:
    level = int(node.name[1])
    text = " ".join(content.strip().split("\n")).strip()
    if not text:
        return ""
    return block(f"{'#' * level} {text}")


def _line_break(content: str, node: Tag, ctx: ConversionContext) -> str:
    return "  \n"


def _horizontal_rule(content: str, node: Tag, ctx: ConversionContext) -> str:
    return block("---")


def _blockquote(content: str, node: Tag, ctx: ConversionContext) -> str:
    text = _EXCESS_NEWLINES.sub("\n\n", content.strip())
    if not text:
        return ""
    quoted = "\n".join(f"> {line}".rstrip() for line in text.split("\n"))
    return block(quoted)


def _emphasis(content: str, node: Tag, ctx: ConversionContext) -> str:
    return wrap_inline(content, "*")


def _strong(content: str, node: Tag, ctx: ConversionContext) -> str:
    return wrap_inline(content, "**")


def _is_inline_code(node: Tag) -> bool:
    return is_tag(node, "code") and not is_tag(node.parent, "pre")


def _inline_code(content: str, node: Tag, ctx: ConversionContext) -> str:
    if not content:
        return ""
    longest = max((len(run) for run in _BACKTICK_RUNS.findall(content)), default=0)
    fence = "`" * (longest + 1)
    padding = " " if content.startswith("`") or content.endswith("`") else ""
    return f"{fence}{padding}{content}{padding}{fence}"


def _is_link(node: Tag) -> bool:
    return is_tag(node, "a") and bool(attr(node, "href"))


def _link(content: str, node: Tag, ctx: ConversionContext) -> str:
    href = re.sub(r"([()])", r"\\\1", attr(node, "href"))
    title = attr(node, "title").replace('"', '\\"')
    title_part = f' "{title}"' if title else ""
    return f"[{content.strip()}]({href}{title_part})"


def _image(content: str, node: Tag, ctx: ConversionContext) -> str:
    src = attr(node, "src")
    if not src:
        return ""
    alt = attr(node, "alt")
    title = attr(node, "title")
    title_part = f' "{title}"' if title else ""
    return f"![{alt}]({src}{title_part})"


def build_rules() -> list[Rule]:
    return [
        Rule("paragraph", lambda node: is_tag(node, "p"), _paragraph, PRIORITY),
        Rule("heading", lambda node: is_tag(node, *HEADING_TAGS), _heading, PRIORITY),
        Rule("lineBreak", lambda node: is_tag(node, "br"), _line_break, PRIORITY),
        Rule("horizontalRule", lambda node: is_tag(node, "hr"), _horizontal_rule, PRIORITY),
        Rule("blockquote", lambda node: is_tag(node, "blockquote"), _blockquote, PRIORITY),
        Rule("emphasis", lambda node: is_tag(node, "em", "i"), _emphasis, PRIORITY),
        Rule("strong", lambda node: is_tag(node, "strong", "b"), _strong, PRIORITY),
        Rule("code", _is_inline_code, _inline_code, PRIORITY),
        Rule("inlineLink", _is_link, _link, PRIORITY),
        Rule("image", lambda node: is_tag(node, "img"), _image, PRIORITY),
    ]
