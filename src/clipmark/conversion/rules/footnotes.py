"""
Footnote references and definition lists.

References (``<sup id="fnref:N">``) become ``[^N]`` markers in place.
Definition lists (an ``<ol>`` directly inside ``#footnotes``) render
nothing where they stand: each definition is recorded into the
conversion's FootnoteContext and the transpiler appends them all after
the body.
"""

import re

from bs4 import Tag

from ..context import ConversionContext
from ..dom import attr, is_tag, text_content
from ..engine import Rule

PRIORITY = 800

REFERENCE_PREFIX = "fnref:"
DEFINITION_PREFIX = "fn:"

_CITE_NOTE = re.compile(r"cite_note-(.+)")
_BACKREF_MARKER = re.compile(r"\s*\u21a9\ufe0e?$")


def _is_citation(node: Tag) -> bool:
    return is_tag(node, "sup") and attr(node, "id").startswith(REFERENCE_PREFIX)


def _citation(content: str, node: Tag, ctx: ConversionContext) -> str:
    reference = attr(node, "id")[len(REFERENCE_PREFIX) :]
    # "fnref:3-2" is the second reference to footnote 3
    primary = reference.split("-")[0]
    return f"[^{primary.lower()}]"


def _is_footnote_list(node: Tag) -> bool:
    return is_tag(node, "ol") and attr(node.parent, "id") == "footnotes"


def footnote_id(item: Tag) -> str:
    """Footnote id of a definition ``<li>``."""
    item_id = attr(item, "id")
    if item_id.startswith(DEFINITION_PREFIX):
        return item_id[len(DEFINITION_PREFIX) :]

    match = _CITE_NOTE.search(item_id.split("/")[-1])
    if match:
        return match.group(1)
    for link in item.find_all("a", href=True):
        match = _CITE_NOTE.search(attr(link, "href").split("/")[-1])
        if match:
            return match.group(1)
    return item_id


def _footnote_list(content: str, node: Tag, ctx: ConversionContext) -> str:
    for position, item in enumerate(node.find_all("li", recursive=False), start=1):
        identifier = footnote_id(item) or str(position)

        # A leading <sup> repeating the id is a redundant back-reference label
        marker = item.find("sup")
        skip = [marker] if marker is not None and text_content(marker).strip() == identifier else []

        definition = ctx.render_children(item, skip=skip).strip()
        definition = _BACKREF_MARKER.sub("", definition).strip()
        ctx.footnotes.add(identifier, definition)
    return ""


def build_rules() -> list[Rule]:
    return [
        Rule("citations", _is_citation, _citation, PRIORITY + 10),
        Rule("footnotesList", _is_footnote_list, _footnote_list, PRIORITY),
    ]
