"""Main CLI entry point for the lenient-markup command-line tool.

Provides two commands over files or standard input:

- ``fix``: rewrite markup as balanced, well-formed markup
- ``events``: dump the structural event stream as JSON or text
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from lenient_markup_parser import __version__
from lenient_markup_parser.api import MarkupParser, serialize
from lenient_markup_parser.shared import ConfigError, LenientMarkupError, ParserConfig
from lenient_markup_parser.shared.logging import get_logger

STDIN_PATH = "-"

# Raised when reading or writing files in the configured encoding
IO_ERRORS = (OSError, UnicodeError, LookupError)


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self) -> None:
        self.parser_config = ParserConfig.html()
        self.output_format = "json"
        self.encoding = "utf-8"

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON file.

        The file may hold a ``"parser"`` object (passed to
        ``ParserConfig.from_dict``), an ``"output_format"`` and an
        ``"encoding"`` for reading input files.

        Raises:
            ConfigError: If the file cannot be read or holds invalid settings
        """
        config = cls()
        try:
            with config_path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigError(f"Could not load config file {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {config_path} must hold a JSON object")

        if "parser" in data:
            config.parser_config = ParserConfig.from_dict(data["parser"])
        config.output_format = data.get("output_format", config.output_format)
        config.encoding = data.get("encoding", config.encoding)
        return config


class MarkupProcessor:
    """Core processing logic for CLI operations."""

    def __init__(self, config: CLIConfig) -> None:
        self.config = config
        self.parser = MarkupParser(config.parser_config)
        self.logger = get_logger(__name__, None, "cli_processor")

    def read(self, path: str) -> str:
        """Read markup from a file path, or from stdin for ``-``."""
        if path == STDIN_PATH:
            return sys.stdin.read()
        return Path(path).read_text(encoding=self.config.encoding)

    def fix(self, markup: str) -> str:
        """Return ``markup`` rewritten as well-formed markup."""
        return serialize(markup, self.config.parser_config)

    def events(self, markup: str) -> List[Dict[str, Any]]:
        """Return the event stream of ``markup`` as dictionaries."""
        return [event.to_dict() for event in self.parser.collect_events(markup)]


def format_events(path: str, events: List[Dict[str, Any]], format_type: str) -> str:
    """Format an event dump for output."""
    if format_type == "json":
        return json.dumps({"file": path, "events": events}, indent=2)

    lines = [f"# {path}"]
    for event in events:
        kind = event["event"]
        if kind == "start":
            attributes = "".join(
                f" {attr['name']}={attr['value']!r}" for attr in event["attributes"]
            )
            suffix = " (void)" if event["void"] else ""
            lines.append(f"start   {event['name']}{attributes}{suffix}")
        elif kind == "end":
            lines.append(f"end     {event['name']}")
        else:
            lines.append(f"{kind:<8}{event['content']!r}")
    return "\n".join(lines)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="lenient-markup",
        description="Lenient HTML/XML tokenizer that repairs malformed markup"
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output (log every recovery action)"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON configuration file path"
    )
    parser.add_argument(
        "--xml",
        action="store_true",
        help="Disable HTML-specific recovery rules and keep tag name case"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    fix_parser = subparsers.add_parser("fix", help="Rewrite markup as well-formed markup")
    fix_parser.add_argument(
        "paths",
        nargs="+",
        help="Markup files to fix ('-' for standard input)"
    )
    fix_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )

    events_parser = subparsers.add_parser("events", help="Dump the structural event stream")
    events_parser.add_argument(
        "paths",
        nargs="+",
        help="Markup files to inspect ('-' for standard input)"
    )
    events_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default=None,
        help="Output format (default: json)"
    )

    return parser


def load_config(args: argparse.Namespace) -> CLIConfig:
    """Build the CLI configuration from the config file and flags."""
    config = CLIConfig.from_file(args.config) if args.config else CLIConfig()
    if args.xml:
        config.parser_config = ParserConfig.xml()
    return config


def cmd_fix(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle fix command."""
    processor = MarkupProcessor(config)
    outputs = []
    for path in args.paths:
        try:
            outputs.append(processor.fix(processor.read(path)))
        except IO_ERRORS as e:
            processor.logger.error(
                "Failed to read input", extra={"file": path}, exc_info=args.verbose
            )
            print(f"Error reading {path}: {e}", file=sys.stderr)
            return 1

    result = "".join(outputs)
    if args.output:
        try:
            args.output.write_text(result, encoding=config.encoding)
        except IO_ERRORS as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
        print(f"Results written to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(result)
    return 0


def cmd_events(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle events command."""
    processor = MarkupProcessor(config)
    format_type = args.format or config.output_format
    for path in args.paths:
        try:
            markup = processor.read(path)
        except IO_ERRORS as e:
            processor.logger.error(
                "Failed to read input", extra={"file": path}, exc_info=args.verbose
            )
            print(f"Error reading {path}: {e}", file=sys.stderr)
            return 1
        print(format_events(path, processor.events(markup), format_type))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Set up logging verbosity
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)

    try:
        config = load_config(args)
        if args.command == "fix":
            return cmd_fix(args, config)
        if args.command == "events":
            return cmd_events(args, config)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    except LenientMarkupError as e:
        get_logger(__name__, None, "cli").error("Command failed", exc_info=args.verbose)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
