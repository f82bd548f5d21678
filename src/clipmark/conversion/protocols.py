"""Protocol definitions for content conversion."""

from typing import Any, Iterable, Mapping, Protocol, Union

from bs4 import PageElement

from ..models.properties import Property


class MarkdownConverter(Protocol):
    """
    Protocol for converting HTML to Markdown.

    Implementations convert a parsed HTML tree (or an HTML string) to
    Markdown format.
    """

    def convert(self, html: Union[str, PageElement], url: str) -> str:
        """
        Convert HTML to Markdown.

        Args:
            html: Parsed tree or HTML content string
            url: Source URL (for diagnostics)

        Returns:
            Markdown string
        """
        ...


class FrontmatterSerializer(Protocol):
    """
    Protocol for turning note properties into a metadata header.

    Implementations return "" when there is nothing to write.
    """

    def build(self, properties: Iterable[Union[Property, Mapping[str, Any]]]) -> str:
        """
        Build the header for a note.

        Args:
            properties: Properties in output order

        Returns:
            Header string including its delimiters, or ""
        """
        ...
