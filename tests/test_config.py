"""Tests for configuration and property models."""

import datetime

import pytest
from pydantic import ValidationError

from clipmark.models import ClipConfig, MarkdownConfig, Property, PropertyType


class TestClipConfig:
    """Tests for ClipConfig."""

    def test_defaults(self):
        """Test default values."""
        config = ClipConfig()

        assert config.markdown.strip_title is True
        assert config.markdown.bullet_marker == "-"
        assert config.frontmatter.enabled is True
        assert config.frontmatter.property_types == {}
        assert config.log_level == "WARNING"

    def test_from_yaml(self):
        """Test loading from YAML."""
        config = ClipConfig.from_yaml(
            """
markdown:
  strip_title: false
  bullet_marker: "*"
frontmatter:
  property_types:
    tags: multitext
    published: date
log_level: DEBUG
"""
        )

        assert config.markdown.strip_title is False
        assert config.markdown.bullet_marker == "*"
        assert config.frontmatter.property_types == {
            "tags": PropertyType.MULTITEXT,
            "published": PropertyType.DATE,
        }
        assert config.log_level == "DEBUG"

    def test_empty_yaml(self):
        """Test an empty document gives defaults."""
        assert ClipConfig.from_yaml("") == ClipConfig()

    def test_yaml_round_trip(self):
        """Test to_yaml output loads back."""
        config = ClipConfig(markdown=MarkdownConfig(footnote_separator="***"))

        assert ClipConfig.from_yaml(config.to_yaml()) == config

    def test_from_yaml_file(self, tmp_path):
        """Test loading from a file."""
        path = tmp_path / "clip.yaml"
        path.write_text("markdown:\n  escape_markdown: false\n", encoding="utf-8")

        assert ClipConfig.from_yaml_file(path).markdown.escape_markdown is False

    def test_rejects_unknown_fields(self):
        """Test extra keys are rejected."""
        with pytest.raises(ValidationError):
            ClipConfig.from_yaml("markdown:\n  wrap: 80\n")

    def test_rejects_invalid_values(self):
        """Test invalid choices are rejected."""
        with pytest.raises(ValidationError):
            MarkdownConfig(bullet_marker="#")
        with pytest.raises(ValidationError):
            ClipConfig.from_yaml("frontmatter:\n  property_types:\n    tags: list\n")


class TestProperty:
    """Tests for Property."""

    def test_generates_id(self):
        """Test ids are generated and unique."""
        first = Property(name="a")
        second = Property(name="a")

        assert first.id
        assert first.id != second.id

    def test_keeps_given_id(self):
        """Test an explicit id is kept."""
        assert Property(id="p1", name="a", value="x").id == "p1"

    def test_value_coercion(self):
        """Test None and numbers become strings, booleans stay booleans."""
        assert Property(name="a", value=None).value == ""
        assert Property(name="a", value=3).value == "3"
        assert Property(name="a", value=True).value is True

    def test_date_values_become_iso_strings(self):
        """Test date and datetime values are stored in ISO format."""
        assert Property(name="a", value=datetime.date(2024, 1, 5)).value == "2024-01-05"
        assert Property(name="a", value=datetime.datetime(2024, 1, 5, 10, 30)).value == "2024-01-05T10:30:00"

    def test_text_value(self):
        """Test string form of values."""
        assert Property(name="a", value=False).text_value() == "false"
        assert Property(name="a", value="x").text_value() == "x"

    def test_requires_name(self):
        """Test empty names are rejected."""
        with pytest.raises(ValidationError):
            Property(name="")
