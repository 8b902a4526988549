"""
Command-line syntax checker: parse JSON files and report the first error in each.
"""

import argparse
import logging
import sys
from typing import Optional, TextIO

from .core.engine import parse
from .core.source import Source
from .security.exceptions import ParseError, SourceLoadError
from .utils.config import ErrorReporting, ParseConfig, ParseOptions

EXIT_OK = 0
EXIT_PARSE_ERROR = 1
EXIT_LOAD_ERROR = 2

_FEATURE_CHOICES = [name[len("allow_"):] for name in ParseOptions.feature_names()]


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="jsonloc", description="Check JSON files and report syntax errors"
    )
    ap.add_argument("files", nargs="+", help="Files to check ('-' reads standard input)")
    ap.add_argument(
        "--relaxed", action="store_true", help="Enable every grammar relaxation"
    )
    ap.add_argument(
        "--allow",
        action="append",
        default=[],
        choices=_FEATURE_CHOICES,
        metavar="FEATURE",
        help=f"Enable one relaxation (repeatable): {', '.join(_FEATURE_CHOICES)}",
    )
    ap.add_argument(
        "--tab-size", type=int, default=8, help="Tab width for error columns"
    )
    ap.add_argument(
        "--context", action="store_true", help="Show the offending line under each error"
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return ap


def _config_from_args(args: argparse.Namespace) -> ParseConfig:
    if args.relaxed:
        options = ParseOptions.relaxed_options()
    else:
        options = ParseOptions.from_features(args.allow)
    return ParseConfig(
        options=options,
        error_reporting=ErrorReporting(tab_size=args.tab_size, include_context=args.context),
    )


def check_file(name: str, config: ParseConfig, err: TextIO) -> int:
    """Parse one file; print any error to ``err`` and return an exit code."""
    try:
        source = Source.load_stdin() if name == "-" else Source.load_file(name)
    except SourceLoadError as e:
        print(f"jsonloc: {e}", file=err)
        return EXIT_LOAD_ERROR
    try:
        parse(source, config=config)
    except ParseError as e:
        print(e.show_context(), file=err)
        return EXIT_PARSE_ERROR
    return EXIT_OK


def main(argv: Optional[list[str]] = None) -> int:
    ap = build_arg_parser()
    args = ap.parse_args(argv)
    if args.tab_size <= 0:
        ap.error("--tab-size must be positive")
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    config = _config_from_args(args)
    status = EXIT_OK
    for name in args.files:
        status = max(status, check_file(name, config, sys.stderr))
    return status
