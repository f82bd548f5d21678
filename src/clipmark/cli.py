"""Command-line interface for clipmark."""

import argparse
import sys
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from . import __version__
from .logging_config import setup_logging
from .models.config import ClipConfig
from .models.properties import Property, PropertyType
from .note import NoteClipper


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="clipmark",
        description="Convert a saved web page to a Markdown note with frontmatter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert a saved page
  clipmark article.html --url https://example.com/article

  # Add typed properties
  clipmark article.html --property "tags=python, [[Notes, Drafts]]" --type tags=multitext

  # Read HTML from stdin, body only
  curl -s https://example.com | clipmark - --no-frontmatter

  # Use a config file and a property list
  clipmark article.html --config clip.yaml --properties props.yaml
        """,
    )

    parser.add_argument(
        "input",
        help="HTML file to convert ('-' reads stdin)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--url",
        default=None,
        help="Source URL (default: value of the 'url' property)",
    )

    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="YAML config file",
    )

    # Properties
    property_group = parser.add_argument_group("properties")
    property_group.add_argument(
        "--property",
        "-P",
        dest="properties",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Frontmatter property (repeatable)",
    )
    property_group.add_argument(
        "--type",
        "-t",
        dest="types",
        action="append",
        default=[],
        metavar="NAME=TYPE",
        help=f"Property type ({', '.join(t.value for t in PropertyType)}; repeatable)",
    )
    property_group.add_argument(
        "--properties",
        dest="properties_file",
        type=Path,
        default=None,
        help="YAML file with a list of {name, value, type} properties",
    )

    # Output
    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--no-strip-title",
        action="store_true",
        help="Keep a leading '# title' heading",
    )
    output_group.add_argument(
        "--no-frontmatter",
        action="store_true",
        help="Print the Markdown body only",
    )
    output_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose logging",
    )
    output_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only log errors",
    )

    return parser


def _split_pair(pair: str, option: str) -> tuple[str, str]:
    name, sep, value = pair.partition("=")
    if not sep or not name.strip():
        raise ValueError(f"{option} expects NAME=VALUE, got '{pair}'")
    return name.strip(), value


def load_properties_file(path: Path) -> list[Property]:
    """Read a YAML list of ``{name, value, type}`` mappings."""
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or []
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a list of properties")
    return [Property.model_validate(item) for item in data]


def build_config(args: argparse.Namespace) -> ClipConfig:
    """Load the config file (if any) and apply command-line overrides."""
    config = ClipConfig.from_yaml_file(args.config) if args.config else ClipConfig()

    if args.no_strip_title:
        config.markdown.strip_title = False
    if args.no_frontmatter:
        config.frontmatter.enabled = False

    for pair in args.types:
        name, value = _split_pair(pair, "--type")
        config.frontmatter.property_types[name] = PropertyType(value.strip().lower())

    # Log level
    if args.verbose:
        config.log_level = "DEBUG"
    elif args.quiet:
        config.log_level = "ERROR"

    return config


def collect_properties(args: argparse.Namespace, config: ClipConfig) -> list[Property]:
    """Properties from --properties followed by --property flags."""
    properties: list[Property] = []
    if args.properties_file:
        properties.extend(load_properties_file(args.properties_file))
        for prop in properties:
            if prop.type is not None:
                config.frontmatter.property_types.setdefault(prop.name, prop.type)

    for pair in args.properties:
        name, value = _split_pair(pair, "--property")
        properties.append(Property(name=name, value=value))
    return properties


def read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def run_clip(args: argparse.Namespace) -> int:
    """Convert the input and print the note to stdout."""
    console = Console(stderr=True)

    try:
        config = build_config(args)
        properties = collect_properties(args, config)
    except ValidationError as e:
        console.print(f"[red]Configuration error:[/red] {e.error_count()} invalid value(s): {escape(e.errors()[0]['msg'])}")
        return 1
    except (OSError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        return 1

    setup_logging(config.log_level, str(config.log_file) if config.log_file else None, force=True)

    try:
        html = read_input(args.input)
    except OSError as e:
        console.print(f"[red]Error:[/red] Cannot read {escape(args.input)}: {escape(str(e))}")
        return 1

    note = NoteClipper(config).clip(html, properties, url=args.url)
    sys.stdout.write(note)
    if not note.endswith("\n"):
        sys.stdout.write("\n")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    return run_clip(args)


if __name__ == "__main__":
    sys.exit(main())
