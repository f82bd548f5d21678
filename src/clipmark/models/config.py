"""Pydantic configuration models for clipmark."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field

from .properties import PropertyType


class MarkdownConfig(BaseModel):
    """Configuration for HTML to Markdown transpiling."""

    strip_title: bool = Field(
        True,
        description="Drop a leading '# heading' block (the page's own title)",
    )
    escape_markdown: bool = Field(
        True,
        description="Backslash-escape Markdown syntax found in plain text",
    )
    remove_empty_links: bool = Field(True, description="Remove '[](url)' artifacts (images are kept)")
    bullet_marker: Literal["-", "*", "+"] = Field("-", description="Marker for unordered list items")
    footnote_separator: str = Field("---", description="Line placed between the body and footnote definitions")

    model_config = {"extra": "forbid"}


class FrontmatterConfig(BaseModel):
    """Configuration for the frontmatter header."""

    enabled: bool = Field(True, description="Prepend a frontmatter header to clipped notes")
    property_types: dict[str, PropertyType] = Field(
        default_factory=dict,
        description="Property name to type registry (unknown names are text)",
    )

    model_config = {"extra": "forbid"}


class ClipConfig(BaseModel):
    """
    Root configuration model for clipmark.

    Example:
        config = ClipConfig(
            markdown=MarkdownConfig(strip_title=False),
            frontmatter=FrontmatterConfig(property_types={"tags": "multitext"}),
        )

    YAML format:
        markdown:
          strip_title: false
        frontmatter:
          property_types:
            tags: multitext
            published: date
    """

    markdown: MarkdownConfig = Field(default_factory=MarkdownConfig)
    frontmatter: FrontmatterConfig = Field(default_factory=FrontmatterConfig)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "WARNING",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ClipConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "ClipConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text(encoding="utf-8"))
