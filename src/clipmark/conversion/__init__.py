"""Content conversion for clipmark (HTML to Markdown, frontmatter)."""

from .context import ConversionContext, FootnoteContext
from .engine import Rule, RuleEngine
from .frontmatter import FrontmatterBuilder, serialize
from .markdown import HtmlToMarkdown, transpile
from .mathml import mathml_to_latex
from .protocols import FrontmatterSerializer, MarkdownConverter
from .rules import build_rule_engine

__all__ = [
    # Protocols
    "MarkdownConverter",
    "FrontmatterSerializer",
    # Rule dispatch
    "Rule",
    "RuleEngine",
    "build_rule_engine",
    "ConversionContext",
    "FootnoteContext",
    # Implementations
    "HtmlToMarkdown",
    "FrontmatterBuilder",
    "transpile",
    "serialize",
    "mathml_to_latex",
]
