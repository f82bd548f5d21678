"""HTML to Markdown conversion."""

from __future__ import annotations

import logging
import re
from typing import Optional, Union

from bs4 import BeautifulSoup, PageElement, Tag

from ..models.config import MarkdownConfig
from .context import ConversionContext
from .dom import has_ancestor, is_block, is_text
from .engine import RuleEngine
from .rules import build_rule_engine

logger = logging.getLogger(__name__)

DIAGNOSTIC_PREAMBLE = "Partial conversion completed with errors. Original HTML:"

_WHITESPACE = re.compile(r"[ \t\r\n\f]+")
_LEADING_TITLE = re.compile(r"\A# .+\n+")
_EMPTY_LINK = re.compile(r"(?<!!)\[\]\([^)]*\)")
_BLANK_LINE = re.compile(r"^[ \t]+$", re.MULTILINE)
_EXCESS_NEWLINES = re.compile(r"\n{3,}")

# (pattern, replacement) pairs applied to text outside code
_ESCAPES = [
    (re.compile(r"\\"), r"\\\\"),
    (re.compile(r"\*"), r"\\*"),
    (re.compile(r"^-"), r"\\-"),
    (re.compile(r"^\+ "), r"\\+ "),
    (re.compile(r"^(=+)"), r"\\\1"),
    (re.compile(r"^(#{1,6}) "), r"\\\1 "),
    (re.compile(r"`"), r"\\`"),
    (re.compile(r"^~~~"), r"\\~~~"),
    (re.compile(r"\["), r"\\["),
    (re.compile(r"\]"), r"\\]"),
    (re.compile(r"^>"), r"\\>"),
    (re.compile(r"_"), r"\\_"),
    (re.compile(r"^(\d+)\. "), r"\1\\. "),
]


def escape_markdown(text: str) -> str:
    """Backslash-escape characters that would otherwise read as Markdown."""
    for pattern, replacement in _ESCAPES:
        text = pattern.sub(replacement, text)
    return text


class HtmlToMarkdown:
    """
    Converts an HTML tree to clean Markdown.

    Walks the tree bottom-up and lets a RuleEngine turn each element (with
    its already-converted children) into Markdown. Footnote definitions
    collected along the way are appended after the body.

    The converter keeps no per-call state: one instance can be shared
    between threads.

    Example:
        converter = HtmlToMarkdown()
        markdown = converter.convert(html_string, "https://example.com/article")
    """

    def __init__(
        self,
        config: Optional[MarkdownConfig] = None,
        engine: Optional[RuleEngine] = None,
    ):
        """
        Initialize the Markdown converter.

        Args:
            config: Conversion options
            engine: Rule engine to use (built-in rules if omitted)
        """
        self._config = config or MarkdownConfig()
        self._engine = engine or build_rule_engine(self._config)

    @property
    def engine(self) -> RuleEngine:
        return self._engine

    def convert(self, html: Union[str, PageElement], url: str = "") -> str:
        """
        Convert HTML to Markdown.

        Args:
            html: Parsed tree (any node) or an HTML string
            url: Source URL, used for diagnostics

        Returns:
            Markdown string; if the conversion fails, a diagnostic preamble
            followed by the original HTML
        """
        try:
            root = BeautifulSoup(html, "html.parser") if isinstance(html, str) else html
            ctx = ConversionContext(url, self._render)
            markdown = self._clean_output(self._render(root, ctx), ctx)
            logger.debug(f"Converted {url or '<no url>'}: {len(markdown)} characters of Markdown")
            return markdown

        except Exception as e:
            logger.error(f"Failed to convert HTML to Markdown for {url or '<no url>'}: {e}")
            return f"{DIAGNOSTIC_PREAMBLE}\n\n{html}"

    def _render(self, node: PageElement, ctx: ConversionContext) -> str:
        if ctx.is_skipped(node):
            return ""
        if is_text(node):
            return self._render_text(node)
        if not isinstance(node, Tag):
            # Comments, doctypes, CDATA, processing instructions
            return ""

        if not isinstance(node, BeautifulSoup) and self._engine.removes(node):
            return ""

        content = "".join(self._render(child, ctx) for child in node.children)
        if isinstance(node, BeautifulSoup):
            return content
        return self._engine.apply(node, content, ctx)

    def _render_text(self, node: PageElement) -> str:
        text = str(node).replace("\0", "\ufffd")
        if has_ancestor(node, "pre"):
            return text

        text = _WHITESPACE.sub(" ", text)

        previous, following = node.previous_sibling, node.next_sibling
        if is_block(previous) or (previous is None and is_block(node.parent)):
            text = text.lstrip(" ")
        if is_block(following) or (following is None and is_block(node.parent)):
            text = text.rstrip(" ")
        if not text:
            return ""

        if self._config.escape_markdown and not has_ancestor(node, "code"):
            text = escape_markdown(text)
        return text

    def _clean_output(self, markdown: str, ctx: ConversionContext) -> str:
        """Clean up the converted Markdown and append footnotes."""
        markdown = markdown.replace("\0", "\ufffd").strip()

        if self._config.strip_title:
            markdown = _LEADING_TITLE.sub("", markdown)

        if self._config.remove_empty_links:
            markdown = _EMPTY_LINK.sub("", markdown)

        # Remove excessive blank lines
        markdown = _BLANK_LINE.sub("", markdown)
        markdown = _EXCESS_NEWLINES.sub("\n\n", markdown)

        if ctx.footnotes:
            markdown = f"{markdown.strip()}\n\n{self._config.footnote_separator}\n\n{ctx.footnotes.render()}"

        return markdown.strip()


_DEFAULT_CONVERTER = HtmlToMarkdown()


def transpile(root: Union[str, PageElement], url: str = "") -> str:
    """Convert a tree (or HTML string) to Markdown with the default options."""
    return _DEFAULT_CONVERTER.convert(root, url)
