"""Tests for frontmatter serialization."""

import datetime

import pytest
import yaml

from clipmark.conversion import FrontmatterBuilder, serialize
from clipmark.conversion.frontmatter import format_number, parse_number, split_items
from clipmark.models import Property, PropertyType


def _body(frontmatter):
    """Parse the YAML between the two --- lines."""
    assert frontmatter.startswith("---\n")
    assert frontmatter.endswith("\n---\n")
    return yaml.safe_load(frontmatter[len("---\n") : -len("---\n")])


class TestSerialize:
    """Tests for serialize()."""

    def test_empty_property_list(self):
        """Test that no properties means no frontmatter."""
        assert serialize([]) == ""

    def test_text(self):
        """Test text values are quoted."""
        result = serialize([{"name": "title", "value": "Getting Started"}])

        assert result == '---\ntitle: "Getting Started"\n---\n'

    def test_text_escapes_quotes(self):
        """Test double quotes are escaped."""
        result = serialize([Property(name="title", value='Say "hi"')])

        assert result == '---\ntitle: "Say \\"hi\\""\n---\n'
        assert _body(result) == {"title": 'Say "hi"'}

    def test_blank_text_emits_bare_key(self):
        """Test that blank values leave only the key."""
        assert serialize([{"name": "note", "value": "   "}]) == "---\nnote:\n---\n"

    def test_multitext_json(self):
        """Test multitext from a JSON array."""
        result = serialize([{"name": "tags", "type": "multitext", "value": '["a","b"]'}])

        assert result == '---\ntags:\n  - "a"\n  - "b"\n---\n'

    def test_multitext_comma_split_keeps_wikilinks(self):
        """Test comma splitting ignores commas inside wikilinks."""
        result = serialize([{"name": "tags", "type": "multitext", "value": "one, [[Two, Three]], four,"}])

        assert result.splitlines() == [
            "---",
            "tags:",
            '  - "one"',
            '  - "[[Two, Three]]"',
            '  - "four"',
            "---",
        ]

    def test_multitext_empty(self):
        """Test an empty multitext value."""
        assert serialize([{"name": "tags", "type": "multitext", "value": "[]"}]) == "---\ntags:\n---\n"

    def test_number(self):
        """Test numbers are cleaned and parsed."""
        result = serialize([{"name": "count", "type": "number", "value": "abc123.5xyz"}])

        assert "count: 123.5" in result.splitlines()

    def test_number_integral(self):
        """Test integral numbers print without a decimal part."""
        result = serialize([{"name": "count", "type": "number", "value": "1,234"}])

        assert result == "---\ncount: 1234\n---\n"

    def test_number_without_digits(self):
        """Test a value with no number leaves the key bare."""
        assert serialize([{"name": "count", "type": "number", "value": "n/a"}]) == "---\ncount:\n---\n"

    def test_checkbox(self):
        """Test boolean and string checkbox values."""
        result = serialize(
            [
                Property(name="read", value=True, type=PropertyType.CHECKBOX),
                Property(name="starred", value="true", type=PropertyType.CHECKBOX),
                Property(name="archived", value="yes", type=PropertyType.CHECKBOX),
            ]
        )

        assert result == "---\nread: true\nstarred: true\narchived: false\n---\n"

    def test_dates(self):
        """Test dates are emitted trimmed and unquoted."""
        result = serialize(
            [
                {"name": "published", "type": "date", "value": " 2024-01-15 "},
                {"name": "created", "type": "datetime", "value": ""},
            ]
        )

        assert result == "---\npublished: 2024-01-15\ncreated:\n---\n"

    def test_type_registry_mapping(self):
        """Test types resolved from a name registry."""
        result = serialize([{"name": "tags", "value": "a, b"}], {"tags": PropertyType.MULTITEXT})

        assert result == '---\ntags:\n  - "a"\n  - "b"\n---\n'

    def test_type_registry_callable(self):
        """Test a callable type lookup."""

        def lookup(name):
            return PropertyType.NUMBER if name == "score" else None

        result = serialize([{"name": "score", "value": "7/10"}, {"name": "title", "value": "x"}], lookup)

        assert result == '---\nscore: 710\ntitle: "x"\n---\n'

    def test_registry_overrides_declared_type(self):
        """Test the registry wins over the property's own type."""
        result = serialize(
            [{"name": "year", "type": "text", "value": "2024"}],
            {"year": PropertyType.NUMBER},
        )

        assert result == "---\nyear: 2024\n---\n"

    def test_keeps_input_order(self):
        """Test properties are written in input order."""
        result = serialize([{"name": name, "value": name} for name in ["b", "a", "c"]])

        assert [line.split(":")[0] for line in result.splitlines()[1:-1]] == ["b", "a", "c"]

    def test_output_is_valid_yaml(self):
        """Test the header parses as YAML."""
        result = serialize(
            [
                {"name": "title", "value": 'A "quoted": title'},
                {"name": "url", "value": "https://example.com/a?b=c#d"},
                {"name": "tags", "type": "multitext", "value": '["python", "web clipping"]'},
                {"name": "count", "type": "number", "value": "-3.50"},
                {"name": "done", "type": "checkbox", "value": True},
                {"name": "published", "type": "date", "value": "2024-01-15"},
            ]
        )

        assert _body(result) == {
            "title": 'A "quoted": title',
            "url": "https://example.com/a?b=c#d",
            "tags": ["python", "web clipping"],
            "count": -3.5,
            "done": True,
            "published": datetime.date(2024, 1, 15),
        }


class TestFrontmatterBuilder:
    """Tests for FrontmatterBuilder."""

    def test_type_of_defaults_to_text(self):
        """Test unknown properties are text."""
        builder = FrontmatterBuilder()

        assert builder.type_of(Property(name="anything")) == PropertyType.TEXT

    def test_type_of_uses_declared_type(self):
        """Test the declared type is used when no registry entry exists."""
        builder = FrontmatterBuilder({"other": PropertyType.DATE})

        assert builder.type_of(Property(name="n", type="number")) == PropertyType.NUMBER

    def test_numeric_values_are_coerced(self):
        """Test numbers given as Python numbers."""
        builder = FrontmatterBuilder({"rating": PropertyType.NUMBER})

        assert builder.build([{"name": "rating", "value": 4.5}]) == "---\nrating: 4.5\n---\n"


class TestHelpers:
    """Tests for the value helpers."""

    def test_split_items_non_list_json(self):
        """Test JSON that is not a list is split as text."""
        assert split_items("42") == ["42"]
        assert split_items('"a, b"') == ['"a', 'b"']

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("42", 42.0),
            ("$1,299.99", 1299.99),
            ("-0.5", -0.5),
            ("1.2.3", 1.2),
            ("12-3", 12.0),
            ("-", None),
            ("", None),
        ],
    )
    def test_parse_number(self, value, expected):
        """Test number extraction."""
        assert parse_number(value) == expected

    def test_format_number(self):
        """Test JavaScript-style number printing."""
        assert format_number(42.0) == "42"
        assert format_number(123.5) == "123.5"
        assert format_number(-0.0) == "0"
