"""Main CLI entry point for depreport.

Provides commands: parse
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from depreport.cli.parse import OUTPUT_FORMATS, parse_command

logger = logging.getLogger("depreport.cli")


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=level,
        format="[%(name)s] %(message)s",
        handlers=[handler],
        force=True,
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="depreport",
        description="Depreport - turn `gradle dependencies` reports into structured data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse a dependency report and emit JSON",
    )
    parse_parser.add_argument(
        "report",
        help="Report file produced by `gradle dependencies`, or '-' for stdin",
    )
    parse_parser.add_argument(
        "-o",
        "--output",
        help="Output JSON file (defaults to stdout)",
    )
    parse_parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default="projects",
        help="projects: nested per project; records: flat list including "
        "repeated entries; graph: node-link graph",
    )
    parse_parser.add_argument(
        "--config",
        help="Parser configuration (.toml/.json file or inline string)",
    )
    parse_parser.add_argument(
        "--lenient",
        action="store_true",
        help="Skip unknown configuration blocks instead of failing",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command == "parse":
        return parse_command(args)

    parser.print_help()
    return 2


if __name__ == "__main__":
    sys.exit(main())
