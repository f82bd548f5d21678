"""
clipmark - Clip web pages into Markdown notes with typed frontmatter.

Usage:
    from clipmark import NoteClipper, ClipConfig, Property

    clipper = NoteClipper(ClipConfig())
    note = clipper.clip(
        html,
        [
            Property(name="url", value="https://example.com/article"),
            Property(name="tags", value='["reading", "python"]', type="multitext"),
        ],
    )
"""

__version__ = "1.0.0"

from .conversion import (
    FrontmatterBuilder,
    HtmlToMarkdown,
    Rule,
    RuleEngine,
    build_rule_engine,
    serialize,
    transpile,
)
from .models import ClipConfig, FrontmatterConfig, MarkdownConfig, Property, PropertyType
from .note import NoteClipper, clip_note

__all__ = [
    "__version__",
    # Core
    "NoteClipper",
    "clip_note",
    "transpile",
    "serialize",
    # Conversion
    "HtmlToMarkdown",
    "FrontmatterBuilder",
    "Rule",
    "RuleEngine",
    "build_rule_engine",
    # Config
    "ClipConfig",
    "MarkdownConfig",
    "FrontmatterConfig",
    # Properties
    "Property",
    "PropertyType",
]
