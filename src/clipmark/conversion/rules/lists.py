"""List rules: nested lists, numbering, task items and arXiv enumerations."""

from __future__ import annotations

import re
from typing import Optional

from bs4 import Tag

from ...models.config import MarkdownConfig
from ..context import ConversionContext
from ..dom import element_ancestors, element_children, has_class, is_element, is_tag, tag_name
from ..engine import Rule
from .base import block

PRIORITY = 500

LIST_TAGS = ("ul", "ol")


def list_depth(node: Tag) -> int:
    """Number of ``ul``/``ol`` ancestors of a node."""
    return sum(1 for parent in element_ancestors(node) if tag_name(parent) in LIST_TAGS)


def _list(content: str, node: Tag, ctx: ConversionContext) -> str:
    body = content.strip("\n")
    if list_depth(node) == 0:
        return block(body)
    return f"\n{body}\n"


def _task_checkbox(item: Tag) -> Optional[Tag]:
    """The item's own checkbox (not one belonging to a nested list)."""
    for checkbox in item.find_all("input"):
        if (checkbox.get("type") or "").lower() != "checkbox":
            continue
        owner = next((p for p in element_ancestors(checkbox) if tag_name(p) == "li"), None)
        if owner is item:
            return checkbox
    return None


def _item_number(item: Tag, parent: Tag) -> int:
    try:
        start = int(str(parent.get("start") or "1").strip())
    except ValueError:
        start = 1
    siblings = element_children(parent)
    index = next(i for i, sibling in enumerate(siblings) if sibling is item)
    return start + index


def _make_list_item(bullet_marker: str):
    def _list_item(content: str, node: Tag, ctx: ConversionContext) -> str:
        depth = list_depth(node)
        indent = "\t" * max(0, depth - 1)
        continuation = indent + "\t"

        parent = node.parent
        if is_tag(parent, "ol"):
            prefix = f"{_item_number(node, parent)}. "  # type: ignore[arg-type]
        else:
            prefix = f"{bullet_marker} "

        checkbox = _task_checkbox(node)
        task_marker = ""
        if checkbox is not None:
            content = re.sub(r"<input[^>]*>", "", content)
            task_marker = "[x] " if checkbox.has_attr("checked") else "[ ] "

        lines = [line for line in content.split("\n") if line.strip()]
        if not lines:
            return f"{indent}{prefix}{task_marker}".rstrip() + "\n"

        if lines[0].startswith(continuation):
            # Item opens with a nested list: the marker gets a line of its own
            head, nested = "", lines
        else:
            head, nested = lines[0].strip(), lines[1:]
        rest = []
        for line in nested:
            # Nested list items arrive already indented for their own depth
            if line.startswith(continuation):
                rest.append(line.rstrip())
            else:
                rest.append(continuation + line.strip())
        body = "\n".join([head, *rest])
        return f"{indent}{prefix}{task_marker}{body}\n"

    return _list_item


def _is_arxiv_enumerate(node: Tag) -> bool:
    return is_tag(node, "ol") and has_class(node, "ltx_enumerate")


def _arxiv_enumerate(content: str, node: Tag, ctx: ConversionContext) -> str:
    items = []
    for index, item in enumerate(element_children(node), start=1):
        labels = [
            child
            for child in item.children
            if is_element(child) and has_class(child, "ltx_tag_item")
        ]
        text = ctx.render_children(item, skip=labels[:1]).strip()
        items.append(f"{index}. {text}")
    return block("\n\n".join(items))


def build_rules(config: MarkdownConfig) -> list[Rule]:
    return [
        Rule("arXivEnumerate", _is_arxiv_enumerate, _arxiv_enumerate, PRIORITY + 10),
        Rule("list", lambda node: is_tag(node, *LIST_TAGS), _list, PRIORITY),
        Rule("listItem", lambda node: is_tag(node, "li"), _make_list_item(config.bullet_marker), PRIORITY),
    ]
