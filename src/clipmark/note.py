"""Assemble a note file from clipped HTML and its properties."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Union

from bs4 import PageElement

from .conversion.frontmatter import FrontmatterBuilder
from .conversion.markdown import HtmlToMarkdown
from .models.config import ClipConfig
from .models.properties import Property

logger = logging.getLogger(__name__)

PropertyInput = Union[Property, Mapping[str, Any]]


def _as_properties(properties: Iterable[PropertyInput]) -> list[Property]:
    return [p if isinstance(p, Property) else Property.model_validate(p) for p in properties]


class NoteClipper:
    """
    Turns an HTML page plus its properties into note file content.

    The note is the frontmatter header followed by the page's Markdown.

    Example:
        clipper = NoteClipper(ClipConfig())
        content = clipper.clip(
            html,
            [Property(name="url", value="https://example.com/post")],
        )
    """

    def __init__(self, config: ClipConfig | None = None):
        self.config = config or ClipConfig()
        self._converter = HtmlToMarkdown(self.config.markdown)
        self._frontmatter = FrontmatterBuilder(self.config.frontmatter.property_types)

    def clip(
        self,
        html: Union[str, PageElement],
        properties: Iterable[PropertyInput] = (),
        url: str | None = None,
    ) -> str:
        """
        Build the content of a note file.

        Args:
            html: Page content, parsed or as an HTML string
            properties: Frontmatter properties in output order
            url: Source URL (defaults to the value of the ``url`` property)

        Returns:
            Frontmatter followed by Markdown
        """
        props = _as_properties(properties)
        if url is None:
            url = next((p.text_value() for p in props if p.name == "url"), "")

        markdown = self._converter.convert(html, url)
        frontmatter = self._frontmatter.build(props) if self.config.frontmatter.enabled else ""
        logger.info(f"Clipped {url or '<no url>'} ({len(props)} properties, {len(markdown)} characters)")
        return frontmatter + markdown


def clip_note(
    html: Union[str, PageElement],
    properties: Iterable[PropertyInput] = (),
    url: str | None = None,
    config: ClipConfig | None = None,
) -> str:
    """
    Clip a page without keeping a NoteClipper around.

    Args:
        html: Page content, parsed or as an HTML string
        properties: Frontmatter properties in output order
        url: Source URL (defaults to the value of the ``url`` property)
        config: Clip configuration (defaults used if omitted)

    Returns:
        Frontmatter followed by Markdown

    Example:
        content = clip_note("<p>Hello</p>", [{"name": "title", "value": "Hello"}])
    """
    return NoteClipper(config).clip(html, properties, url)
