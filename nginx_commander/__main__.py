"""
Entry point for Nginx Commander.

Usage:
    python -m nginx_commander /etc/nginx/nginx.conf
    python -m nginx_commander nginx.conf --format text --indent 4
    python -m nginx_commander nginx.conf --format json > tree.json
    python -m nginx_commander tree.json --from-json --format text
    cat nginx.conf | python -m nginx_commander - --validate
"""

import argparse
import sys
from collections import Counter
from pathlib import Path

from .const import APP_VERSION, DEFAULT_ENCODING, DEFAULT_READ_ENCODING
from .logging import Loggers, setup_logging_from_args
from .parser import (
    Block,
    Comment,
    Directive,
    NginxCommanderError,
    NginxParser,
    Statement,
    from_json,
    iter_statements,
    pretty_print,
    serialize,
    to_json,
)


logger = Loggers.cli()

STDIN = "-"
FORMATS = ("debug", "text", "json")


def parse_indent(value: str) -> str:
    """Convert the --indent option into an indentation unit."""
    if value.lower() == "tab":
        return "\t"
    try:
        width = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected 'tab' or a number of spaces, got {value!r}") from None
    if width < 0:
        raise argparse.ArgumentTypeError("indent width must not be negative")
    return " " * width


def load_statements(source: str, encoding: str | None, from_exchange_json: bool) -> list[Statement]:
    """Read configuration text, or exchange records, from a file or stdin."""
    if from_exchange_json:
        if source == STDIN:
            text = sys.stdin.buffer.read().decode(encoding or DEFAULT_READ_ENCODING)
        else:
            text = Path(source).read_text(encoding=encoding or DEFAULT_READ_ENCODING)
        return from_json(text)

    if source == STDIN:
        parser = NginxParser.from_stream(sys.stdin.buffer, encoding)
    else:
        parser = NginxParser.from_file(source, encoding)

    with parser:
        return list(parser.parse())


def render(statements: list[Statement], output_format: str, indent: str) -> str:
    """Render statements in the requested output format."""
    if output_format == "text":
        return serialize(statements, indent=indent)
    if output_format == "json":
        return to_json(statements, indent=2)
    return pretty_print(statements, indent=indent)


def summarize(statements: list[Statement]) -> str:
    """Describe how many statements of each kind a tree holds."""
    counts: Counter[str] = Counter()
    for statement in iter_statements(statements):
        if isinstance(statement, Block):
            counts["blocks"] += 1
        elif isinstance(statement, Directive):
            counts["directives"] += 1
        elif isinstance(statement, Comment):
            counts["comments"] += 1

    return "\n".join(
        [
            "Configuration summary:",
            f"  Top-level statements: {len(statements)}",
            f"  Blocks: {counts['blocks']}",
            f"  Directives: {counts['directives']}",
            f"  Comments: {counts['comments']}",
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nginx-commander",
        description="Parse nginx configuration and render it as text, a debug view or JSON",
    )

    parser.add_argument(
        "config",
        nargs="?",
        default=STDIN,
        help="Path to configuration file, '-' reads stdin (default: -)",
    )

    parser.add_argument(
        "-f", "--format",
        choices=FORMATS,
        default="debug",
        help="Output format (default: debug)",
    )

    parser.add_argument(
        "--from-json",
        action="store_true",
        help="Input is a JSON array of exchange records instead of configuration text",
    )

    parser.add_argument(
        "--encoding",
        help=f"Input and output text encoding (default: {DEFAULT_ENCODING}, a leading BOM is dropped)",
    )

    parser.add_argument(
        "--indent",
        type=parse_indent,
        default="tab",
        metavar="N|tab",
        help="Indentation for text and debug output (default: tab)",
    )

    parser.add_argument(
        "-o", "--output",
        metavar="PATH",
        help="Write the result to a file instead of stdout",
    )

    parser.add_argument(
        "--validate",
        action="store_true",
        help="Parse only, print a summary and exit",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging (INFO level)",
    )

    parser.add_argument(
        "-d", "--debug",
        action="store_true",
        help="Enable debug logging (DEBUG level)",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Quiet mode (only errors)",
    )

    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Write logs to file",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {APP_VERSION}",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    setup_logging_from_args(
        verbose=args.verbose,
        debug=args.debug,
        quiet=args.quiet,
        log_file=args.log_file,
        colors=not args.no_color,
    )

    try:
        statements = load_statements(args.config, args.encoding, args.from_json)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1
    except NginxCommanderError as e:
        logger.error(f"Failed to read configuration: {e}")
        return 1
    except (OSError, UnicodeDecodeError, LookupError) as e:
        logger.error(f"Failed to read {args.config}: {e}")
        return 1

    logger.info(f"Loaded {len(statements)} top-level statements from {args.config}")

    if args.validate:
        print(summarize(statements))
        print("\nConfiguration is valid!")
        return 0

    result = render(statements, args.format, args.indent)

    if args.output:
        try:
            Path(args.output).write_text(result, encoding=args.encoding or DEFAULT_ENCODING)
        except OSError as e:
            logger.error(f"Failed to write {args.output}: {e}")
            return 1
        logger.info(f"Wrote {args.format} output to {args.output}")
    else:
        sys.stdout.write(result)
        if not result.endswith("\n"):
            sys.stdout.write("\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
