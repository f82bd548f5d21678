"""Tests for the command-line interface."""

import io

import pytest

from clipmark import __version__
from clipmark.cli import create_parser, main

HTML = "<h1>Title</h1><p>Hello <mark>world</mark></p>"


@pytest.fixture
def page(tmp_path):
    path = tmp_path / "page.html"
    path.write_text(HTML, encoding="utf-8")
    return path


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        """Test parser defaults."""
        args = create_parser().parse_args(["page.html"])

        assert args.input == "page.html"
        assert args.url is None
        assert args.properties == []
        assert args.types == []
        assert args.no_frontmatter is False

    def test_version(self, capsys):
        """Test --version."""
        with pytest.raises(SystemExit) as exc:
            main(["--version"])

        assert exc.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestMain:
    """Tests for main()."""

    def test_converts_file(self, page, capsys):
        """Test converting a file to stdout."""
        assert main([str(page)]) == 0

        assert capsys.readouterr().out == "Hello ==world==\n"

    def test_properties_and_types(self, page, capsys):
        """Test --property and --type."""
        code = main(
            [
                str(page),
                "--property",
                "title=Hello",
                "-P",
                "tags=a, [[b, c]]",
                "--type",
                "tags=multitext",
            ]
        )

        assert code == 0
        assert capsys.readouterr().out == (
            '---\ntitle: "Hello"\ntags:\n  - "a"\n  - "[[b, c]]"\n---\nHello ==world==\n'
        )

    def test_no_strip_title_and_no_frontmatter(self, page, capsys):
        """Test output switches."""
        assert main([str(page), "--no-strip-title", "--no-frontmatter", "-P", "title=x"]) == 0

        assert capsys.readouterr().out == "# Title\n\nHello ==world==\n"

    def test_properties_file(self, page, tmp_path, capsys):
        """Test reading properties (and their types) from YAML."""
        props = tmp_path / "props.yaml"
        props.write_text(
            "- name: url\n  value: https://example.com\n- name: rating\n  value: '4 stars'\n  type: number\n",
            encoding="utf-8",
        )

        assert main([str(page), "--properties", str(props)]) == 0

        assert capsys.readouterr().out.startswith('---\nurl: "https://example.com"\nrating: 4\n---\n')

    def test_properties_file_unquoted_dates(self, page, tmp_path, capsys):
        """Test YAML dates and timestamps are accepted as property values."""
        props = tmp_path / "props.yaml"
        props.write_text(
            "- name: published\n  value: 2024-01-05\n  type: date\n"
            "- name: created\n  value: 2024-01-05 10:30:00\n  type: datetime\n",
            encoding="utf-8",
        )

        assert main([str(page), "--properties", str(props)]) == 0

        assert capsys.readouterr().out.startswith(
            "---\npublished: 2024-01-05\ncreated: 2024-01-05T10:30:00\n---\n"
        )

    def test_config_file(self, page, tmp_path, capsys):
        """Test a YAML config file."""
        config = tmp_path / "clip.yaml"
        config.write_text("markdown:\n  strip_title: false\n", encoding="utf-8")

        assert main([str(page), "--config", str(config)]) == 0

        assert capsys.readouterr().out.startswith("# Title")

    def test_reads_stdin(self, monkeypatch, capsys):
        """Test '-' reads HTML from stdin."""
        monkeypatch.setattr("sys.stdin", io.StringIO("<p>From stdin</p>"))

        assert main(["-"]) == 0

        assert capsys.readouterr().out == "From stdin\n"

    def test_missing_file(self, tmp_path, capsys):
        """Test a missing input file."""
        assert main([str(tmp_path / "missing.html")]) == 1

        assert "Cannot read" in capsys.readouterr().err

    def test_invalid_type(self, page, capsys):
        """Test an unknown property type."""
        assert main([str(page), "--type", "tags=list"]) == 1

        assert "Configuration error" in capsys.readouterr().err

    def test_malformed_property(self, page, capsys):
        """Test a property without '='."""
        assert main([str(page), "--property", "title"]) == 1

        assert "NAME=VALUE" in capsys.readouterr().err

    def test_invalid_config(self, page, tmp_path, capsys):
        """Test a config file with unknown keys."""
        config = tmp_path / "clip.yaml"
        config.write_text("markdown:\n  wrap: 80\n", encoding="utf-8")

        assert main([str(page), "--config", str(config)]) == 1

        assert "Configuration error" in capsys.readouterr().err
