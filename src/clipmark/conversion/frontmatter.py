"""YAML frontmatter for clipped notes."""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Iterable, Mapping
from typing import Any, Callable, Optional, Union

from ..models.properties import Property, PropertyType

logger = logging.getLogger(__name__)

TypeLookup = Union[Mapping[str, PropertyType], Callable[[str], Optional[PropertyType]]]

# Commas outside [[wikilinks]]
_ITEM_SEPARATOR = re.compile(r",(?![^\[]*\]\])")
_NON_NUMERIC = re.compile(r"[^0-9.-]")
_NUMBER_PREFIX = re.compile(r"^-?(?:\d+\.?\d*|\.\d+)")


def escape_double_quotes(value: str) -> str:
    return value.replace('"', '\\"')


def split_items(value: str) -> list[str]:
    """
    Items of a multitext value.

    A JSON array is taken as-is; anything else is split on commas that are
    not inside a ``[[wikilink]]``. Items are trimmed and empty ones dropped.
    """
    try:
        parsed = json.loads(value)
    except ValueError:
        parsed = None

    if isinstance(parsed, list):
        items = [item if isinstance(item, str) else json.dumps(item) for item in parsed]
    else:
        items = _ITEM_SEPARATOR.split(value)
    return [item.strip() for item in items if item.strip()]


def parse_number(value: str) -> Optional[float]:
    """Leading number of ``value`` once every non-numeric character is dropped."""
    match = _NUMBER_PREFIX.match(_NON_NUMERIC.sub("", value))
    if match is None:
        return None
    return float(match.group(0))


def format_number(number: float) -> str:
    """Render a float the way JavaScript prints numbers (``42``, ``123.5``)."""
    if math.isfinite(number) and number == int(number) and abs(number) < 1e21:
        return str(int(number))
    return repr(number)


class FrontmatterBuilder:
    """
    Builds YAML frontmatter from typed properties.

    Each property's type is looked up by name in ``property_types`` (a
    mapping or a callable); when that has no answer the property's own
    ``type`` is used, then ``text``.

    Example:
        builder = FrontmatterBuilder({"tags": PropertyType.MULTITEXT})
        frontmatter = builder.build([
            Property(name="title", value="Getting Started"),
            Property(name="tags", value="docs, [[Python, Guides]]"),
        ])
    """

    def __init__(self, property_types: Optional[TypeLookup] = None):
        self._property_types = property_types

    def type_of(self, prop: Property) -> PropertyType:
        """Resolve the type a property is serialized as."""
        resolved: Optional[PropertyType] = None
        if callable(self._property_types):
            resolved = self._property_types(prop.name)
        elif self._property_types is not None:
            resolved = self._property_types.get(prop.name)
        return PropertyType(resolved or prop.type or PropertyType.TEXT)

    def build(self, properties: Iterable[Union[Property, Mapping[str, Any]]]) -> str:
        """
        Build YAML frontmatter string.

        Args:
            properties: Properties (or plain ``{name, value, type}`` mappings)
                in output order

        Returns:
            YAML frontmatter string (with --- delimiters), or "" when there
            are no properties
        """
        lines = ["---"]
        for item in properties:
            prop = item if isinstance(item, Property) else Property.model_validate(item)
            lines.extend(self._encode(prop, self.type_of(prop)))
        lines.append("---")
        frontmatter = "\n".join(lines) + "\n"

        if frontmatter.strip() == "---\n---":
            return ""
        return frontmatter

    def _encode(self, prop: Property, property_type: PropertyType) -> list[str]:
        key = f"{prop.name}:"

        if property_type == PropertyType.MULTITEXT:
            items = split_items(prop.text_value())
            return [key, *(f'  - "{escape_double_quotes(item)}"' for item in items)]

        if property_type == PropertyType.NUMBER:
            number = parse_number(prop.text_value())
            if number is None:
                logger.debug(f"Property '{prop.name}' has no numeric value: {prop.value!r}")
                return [key]
            return [f"{key} {format_number(number)}"]

        if property_type == PropertyType.CHECKBOX:
            checked = prop.value if isinstance(prop.value, bool) else prop.value == "true"
            return [f"{key} {'true' if checked else 'false'}"]

        if property_type in (PropertyType.DATE, PropertyType.DATETIME):
            value = prop.text_value().strip()
            return [f"{key} {value}"] if value else [key]

        value = prop.text_value()
        if not value.strip():
            return [key]
        return [f'{key} "{escape_double_quotes(value)}"']


def serialize(
    properties: Iterable[Union[Property, Mapping[str, Any]]],
    type_of: Optional[TypeLookup] = None,
) -> str:
    """Frontmatter for ``properties``; see FrontmatterBuilder."""
    return FrontmatterBuilder(type_of).build(properties)
