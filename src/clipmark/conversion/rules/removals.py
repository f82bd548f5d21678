"""Elements dropped from the output: hidden nodes and footnote back-links."""

from bs4 import Tag

from ..context import ConversionContext
from ..dom import attr, has_class, is_hidden
from ..engine import Rule

PRIORITY = 900


def is_backreference(node: Tag) -> bool:
    return "#fnref" in attr(node, "href") or has_class(node, "footnote-backref")


def _remove(content: str, node: Tag, ctx: ConversionContext) -> str:
    return ""


def build_rules() -> list[Rule]:
    return [
        Rule("removeHiddenElements", is_hidden, _remove, PRIORITY + 10),
        Rule("removals", is_backreference, _remove, PRIORITY),
    ]
