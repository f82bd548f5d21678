"""Table rules: equation tables, merged-cell tables and pipe tables."""

from __future__ import annotations

import copy
import re
from typing import Optional

from bs4 import Tag

from ..context import ConversionContext
from ..dom import attr, closest, has_class, is_element, is_tag
from ..engine import Rule
from .base import block

PRIORITY = 600

EQUATION_TABLE_CLASSES = ("ltx_equation", "ltx_eqn_table")

_LINE_BREAKS = re.compile(r"\s*\n\s*")

# Attributes kept when a table is emitted as raw HTML
ALLOWED_ATTRIBUTES = frozenset(
    {
        "src",
        "href",
        "style",
        "align",
        "width",
        "height",
        "rowspan",
        "colspan",
        "bgcolor",
        "scope",
        "valign",
        "headers",
    }
)


def _is_equation_table(node: Tag) -> bool:
    return is_tag(node, "table") and has_class(node, *EQUATION_TABLE_CLASSES)


def _equation_table(content: str, node: Tag, ctx: ConversionContext) -> str:
    equations = []
    for math in node.select("math[alttext]"):
        latex = attr(math, "alttext").strip()
        if not latex:
            continue
        inline = closest(math, lambda n: has_class(n, "ltx_eqn_inline")) is not None
        equations.append(f"${latex}$" if inline else f"\n$$\n{latex}\n$$")
    if not equations:
        return ""
    return block("\n\n".join(equations))


def has_merged_cells(table: Tag) -> bool:
    return any(cell.has_attr("colspan") or cell.has_attr("rowspan") for cell in table.find_all(["td", "th"]))


def clean_table_html(table: Tag) -> str:
    """Serialize a copy of the table keeping only allow-listed attributes."""
    clone = copy.copy(table)
    for element in [clone, *clone.find_all(True)]:
        element.attrs = {name: value for name, value in element.attrs.items() if name in ALLOWED_ATTRIBUTES}
    return str(clone)


def _is_complex_table(node: Tag) -> bool:
    return is_tag(node, "table") and has_merged_cells(node)


def _complex_table(content: str, node: Tag, ctx: ConversionContext) -> str:
    return block(clean_table_html(node))


def _own_rows(table: Tag) -> list[Tag]:
    return [row for row in table.find_all("tr") if row.find_parent("table") is table]


def _cell_markdown(cell: Tag, ctx: ConversionContext) -> str:
    text = _LINE_BREAKS.sub(" ", ctx.render_children(cell).strip())
    return text.replace("|", "\\|")


def _pipe_table(content: str, node: Tag, ctx: ConversionContext) -> Optional[str]:
    rows = []
    for row in _own_rows(node):
        cells = [child for child in row.children if is_element(child) and is_tag(child, "td", "th")]
        rows.append([_cell_markdown(cell, ctx) for cell in cells])
    if not rows:
        return None

    lines = [f"| {' | '.join(cells)} |" for cells in rows]
    separator = f"| {' | '.join(['---'] * len(rows[0]))} |"
    return block("\n".join([lines[0], separator, *lines[1:]]))


def build_rules() -> list[Rule]:
    return [
        Rule("equationTable", _is_equation_table, _equation_table, PRIORITY + 20),
        Rule("complexTable", _is_complex_table, _complex_table, PRIORITY + 10),
        Rule("table", lambda node: is_tag(node, "table"), _pipe_table, PRIORITY),
    ]
