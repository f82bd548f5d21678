"""Highlight and strikethrough."""

from bs4 import Tag

from ..context import ConversionContext
from ..dom import is_tag
from ..engine import Rule
from .base import wrap_inline

PRIORITY = 200


def _highlight(content: str, node: Tag, ctx: ConversionContext) -> str:
    return wrap_inline(content, "==")


def _strikethrough(content: str, node: Tag, ctx: ConversionContext) -> str:
    return wrap_inline(content, "~~")


def build_rules() -> list[Rule]:
    return [
        Rule("highlight", lambda node: is_tag(node, "mark"), _highlight, PRIORITY),
        Rule("strikethrough", lambda node: is_tag(node, "del", "s", "strike"), _strikethrough, PRIORITY),
    ]
