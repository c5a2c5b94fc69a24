"""Command-line interface for the scrapbox2review converter.

This module provides a CLI tool for converting a Scrapbox page to Re:VIEW.
Option defaults can come from a configuration file; see
``scrapbox2review.cli.config`` for the discovery rules.

Examples
--------
Convert a page to stdout::

    $ scrapbox2review page.txt

Write to a file, treating the first line as ordinary text::

    $ scrapbox2review page.txt --no-title -o chapter.re

Read from stdin and fail when something could not be converted::

    $ cat page.txt | scrapbox2review --strict

Show a summary of conversion warnings::

    $ scrapbox2review page.txt --rich

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import os
import sys
from dataclasses import fields
from pathlib import Path
from typing import Any, Optional

from scrapbox2review.api import from_ast, to_ast
from scrapbox2review.cli.config import load_config_with_priority
from scrapbox2review.constants import (
    CONFIG_ENV_VAR,
    DEFAULT_BASE_HEADING_LEVEL,
    DEFAULT_LINK_BASE_URL,
    EXIT_DIAGNOSTICS,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)
from scrapbox2review.exceptions import FileError, OutputWriteError, Scrapbox2ReviewError, ValidationError
from scrapbox2review.logging_utils import CollectingDiagnostics, LoggingDiagnostics, configure_logging
from scrapbox2review.options import ReviewRendererOptions

logger = logging.getLogger(__name__)

__all__ = ["create_parser", "get_exit_code_for_exception", "main"]


def _get_version() -> str:
    """Get the version of the scrapbox2review package."""
    from scrapbox2review import __version__

    return __version__


def _option_help(options_class: type, field_name: str) -> str:
    """Return the ``help`` metadata of an options dataclass field."""
    for option_field in fields(options_class):
        if option_field.name == field_name:
            return option_field.metadata.get("help", "")
    raise KeyError(field_name)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="scrapbox2review",
        description="Convert a Scrapbox page to Re:VIEW markup.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Scrapbox page to convert (default: '-' reads from stdin)",
    )
    parser.add_argument("--out", "-o", dest="out", metavar="PATH", help="Write output to PATH instead of stdout")
    parser.add_argument(
        "--no-title",
        dest="has_title",
        action="store_false",
        default=None,
        help="Treat the first line as ordinary text instead of the page title",
    )
    parser.add_argument(
        "--base-heading-level",
        type=int,
        metavar="N",
        help=f"{_option_help(ReviewRendererOptions, 'base_heading_level')} (default: {DEFAULT_BASE_HEADING_LEVEL})",
    )
    parser.add_argument(
        "--link-base-url",
        metavar="URL",
        help=f"{_option_help(ReviewRendererOptions, 'link_base_url')} (default: {DEFAULT_LINK_BASE_URL})",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help=f"Configuration file (TOML, YAML or JSON). Defaults to ${CONFIG_ENV_VAR} or auto-discovery",
    )

    # Logging and reporting options
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help="Write log messages to specified file in addition to console output",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace mode with debug logging, timestamps and logger names",
    )
    parser.add_argument(
        "--rich",
        action="store_true",
        help="Print a table of conversion diagnostics to stderr",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any construct could not be converted",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_get_version()}")
    return parser


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (ValidationError, ValueError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, (FileError, OutputWriteError)):
        return EXIT_FILE_ERROR

    return EXIT_DIAGNOSTICS


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments."""
    log_level = logging.DEBUG if parsed_args.trace else getattr(logging, parsed_args.log_level.upper())
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _collect_options(parsed_args: argparse.Namespace, config: dict[str, Any]) -> dict[str, Any]:
    """Merge config file values with command-line flags, flags taking precedence."""
    options = dict(config)
    for key in ("has_title", "base_heading_level", "link_base_url"):
        value = getattr(parsed_args, key)
        if value is not None:
            options[key] = value
    return options


def _read_input(input_arg: str) -> Path | bytes:
    if input_arg == "-":
        return sys.stdin.buffer.read()
    return Path(input_arg)


def _print_diagnostics_table(diagnostics: CollectingDiagnostics) -> None:
    """Print collected diagnostics as a rich table on stderr."""
    from rich.console import Console
    from rich.table import Table

    console = Console(stderr=True)
    if not diagnostics.records:
        console.print("[green]No conversion diagnostics[/green]")
        return

    table = Table(title="Conversion Diagnostics")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Level", style="bold")
    table.add_column("Message", style="white", no_wrap=False)

    for index, record in enumerate(diagnostics.records, start=1):
        level_style = "red" if record.level == "error" else "yellow"
        table.add_row(str(index), f"[{level_style}]{record.level}[/{level_style}]", record.message)

    console.print(table)


def main(args: Optional[list[str]] = None) -> int:
    """Execute the CLI entry point.

    Parameters
    ----------
    args : list of str, optional
        Command-line arguments, defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Process exit code

    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    try:
        config = load_config_with_priority(parsed_args.config, os.environ.get(CONFIG_ENV_VAR))
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    options = _collect_options(parsed_args, config)
    diagnostics = CollectingDiagnostics(forward_to=LoggingDiagnostics())

    try:
        blocks = to_ast(_read_input(parsed_args.input), **options)
        text = from_ast(blocks, parsed_args.out, logger=diagnostics, **options)
    except (Scrapbox2ReviewError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    if text is not None:
        sys.stdout.write(text)
    elif parsed_args.out:
        logger.info(f"Wrote {parsed_args.out}")

    if parsed_args.rich:
        _print_diagnostics_table(diagnostics)

    if parsed_args.strict and diagnostics.errors:
        return EXIT_DIAGNOSTICS
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
