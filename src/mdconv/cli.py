#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/cli.py
"""Command-line interface for mdconv.

Usage::

    mdconv [-f FROM] [-t TO] [-o OUTPUT] [--strict] [--standalone] [input]

Reads ``input`` (or stdin when it is omitted or ``-``), converts it and
writes the result to stdout or ``OUTPUT``. Errors are reported on stderr and
mapped to distinct exit codes.
"""

from __future__ import annotations

import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any, Optional

from mdconv.api import from_ast, to_ast
from mdconv.constants import (
    DEFAULT_INPUT_FORMAT,
    DEFAULT_OUTPUT_FORMAT,
    EXIT_ERROR,
    EXIT_PARSE_FAILURE,
    EXIT_SUCCESS,
    EXIT_UNREADABLE_INPUT,
    EXIT_UNRECOGNIZED_FORMAT,
)
from mdconv.converter_registry import registry
from mdconv.exceptions import MdConvError, ParsingError, UnreadableInputError, UnrecognizedFormatError
from mdconv.logging_utils import configure_logging

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"


def _get_version() -> str:
    """Get the installed version of mdconv."""
    try:
        return version("mdconv")
    except PackageNotFoundError:
        from mdconv import __version__

        return __version__


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Returns
    -------
    argparse.ArgumentParser
        Parser for the ``mdconv`` command

    """
    parser = argparse.ArgumentParser(
        prog="mdconv",
        description="Convert GitHub-flavored markdown to other document formats.",
        epilog="Use --list-formats to see every reader and writer identifier.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="Input file; omit or use '-' to read standard input",
    )
    parser.add_argument(
        "-f",
        "--from",
        dest="source_format",
        metavar="FROM",
        help=f"Input format (default: detected from the file extension, else {DEFAULT_INPUT_FORMAT})",
    )
    parser.add_argument(
        "-t",
        "--to",
        dest="target_format",
        metavar="TO",
        default=DEFAULT_OUTPUT_FORMAT,
        help=f"Output format (default: {DEFAULT_OUTPUT_FORMAT})",
    )
    parser.add_argument("-o", "--output", help="Write output to this file instead of stdout")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject Pandoc JSON constructs that have no markdown equivalent",
    )
    parser.add_argument(
        "--standalone",
        action="store_true",
        help="Produce a complete document (HTML page, LaTeX preamble) instead of a fragment",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log records to this file")
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Debug logging with timestamps and logger names",
    )
    parser.add_argument("--list-formats", action="store_true", help="List supported formats and exit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_get_version()}")
    return parser


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to a CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map

    Returns
    -------
    int
        2 for an unknown format, 3 for unreadable input, 4 for a parse
        failure and 1 for anything else

    """
    if isinstance(exception, UnrecognizedFormatError):
        return EXIT_UNRECOGNIZED_FORMAT
    if isinstance(exception, UnreadableInputError):
        return EXIT_UNREADABLE_INPUT
    if isinstance(exception, ParsingError):
        return EXIT_PARSE_FAILURE
    return EXIT_ERROR


def _print_formats() -> None:
    """Print every registered format with its capabilities and identifiers."""
    print("mdconv supported formats")
    print("=" * 60)
    for name in registry.list_formats():
        converters = registry.get_format_info(name) or []
        can_read = any(metadata.can_parse for metadata in converters)
        can_write = any(metadata.can_render for metadata in converters)
        if can_read and can_write:
            capabilities = "[R+W]"
        elif can_read:
            capabilities = "[R]  "
        else:
            capabilities = "[W]  "
        aliases = [alias for metadata in converters for alias in metadata.aliases]
        alias_str = f"({', '.join(aliases)})" if aliases else ""
        description = converters[0].description if converters else ""
        print(f"{name:8} {capabilities} {alias_str:24} {description}")


def _resolve_source_format(parsed_args: argparse.Namespace) -> str:
    if parsed_args.source_format:
        return parsed_args.source_format
    if parsed_args.input and parsed_args.input != STDIN_MARKER:
        detected = registry.detect_format(parsed_args.input)
        if detected:
            return detected
    return DEFAULT_INPUT_FORMAT


def _renderer_overrides(parsed_args: argparse.Namespace) -> dict[str, Any]:
    """Option overrides requested by flags; writers ignore fields they lack."""
    if not parsed_args.standalone:
        return {}
    return {"standalone": True, "include_preamble": True}


def _run(parsed_args: argparse.Namespace) -> int:
    target_format = parsed_args.target_format
    source_format = _resolve_source_format(parsed_args)

    # Unknown identifiers fail before any input is read.
    registry.get_renderer(target_format)
    registry.get_parser(source_format)

    parser_overrides: dict[str, Any] = {"strict_mode": True} if parsed_args.strict else {}
    if parsed_args.input is None or parsed_args.input == STDIN_MARKER:
        logger.debug("Reading input from stdin")
        doc = to_ast(getattr(sys.stdin, "buffer", sys.stdin), source_format, **parser_overrides)
    else:
        doc = to_ast(Path(parsed_args.input), source_format, **parser_overrides)

    overrides = _renderer_overrides(parsed_args)
    if parsed_args.output:
        from_ast(doc, target_format, output=Path(parsed_args.output), **overrides)
        logger.info(f"Wrote {target_format} output to {parsed_args.output}")
    else:
        text = from_ast(doc, target_format, **overrides) or ""
        sys.stdout.write(text)
        sys.stdout.flush()
    return EXIT_SUCCESS


def main(args: Optional[list[str]] = None) -> int:
    """Run the mdconv command.

    Parameters
    ----------
    args : list of str, optional
        Command-line arguments; defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Process exit code

    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    log_level = logging.DEBUG if parsed_args.trace else parsed_args.log_level
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)

    if parsed_args.list_formats:
        _print_formats()
        return EXIT_SUCCESS

    try:
        return _run(parsed_args)
    except MdConvError as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)


if __name__ == "__main__":
    sys.exit(main())
