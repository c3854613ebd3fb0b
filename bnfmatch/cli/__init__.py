"""
bnfmatch CLI entry point.

Subcommands:
    symbols  list the symbols a grammar defines
    check    build and validate a grammar
    match    match input text against one symbol
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from bnfmatch import __version__
from bnfmatch.config import load_engine_config
from bnfmatch.errors import BnfError

from .commands import cmd_check, cmd_match, cmd_symbols
from .errors import EXIT_ERROR, CLIError, format_cli_error

LOG_LEVEL_ENV = "BNFMATCH_LOG_LEVEL"


def _configure_logging(level_name: Optional[str]) -> None:
    """Attach a console handler to the ``bnfmatch`` logger."""
    log_level = (level_name or os.getenv(LOG_LEVEL_ENV, "warning")).lower()

    level_map = {
        'debug': logging.DEBUG,
        'info': logging.INFO,
        'warn': logging.WARNING,
        'warning': logging.WARNING,
        'error': logging.ERROR,
    }
    numeric_level = level_map.get(log_level, logging.WARNING)

    logger = logging.getLogger('bnfmatch')
    logger.setLevel(numeric_level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False


def _add_grammar_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("grammar", help="Grammar file (.bn)")
    parser.add_argument(
        "--dict",
        dest="dictionaries",
        action="append",
        metavar="FILE",
        help="Dictionary file (.bnd) appended to the grammar; may be repeated",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bnfmatch",
        description="Parse Backus-Naur grammars and match text against their symbols",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warn", "warning", "error"],
        help=f"Logging level (default: ${LOG_LEVEL_ENV} or warning)",
    )
    parser.add_argument("--config", help="Path to bnfmatch.toml or .bnfmatchrc")
    parser.add_argument("--verbose", action="store_true", help="Show tracebacks on errors")

    subparsers = parser.add_subparsers(dest="command", required=True)

    symbols_parser = subparsers.add_parser("symbols", help="List defined symbols")
    _add_grammar_arguments(symbols_parser)
    symbols_parser.add_argument("--json", action="store_true", help="Output as JSON")
    symbols_parser.set_defaults(func=cmd_symbols)

    check_parser = subparsers.add_parser("check", help="Build and validate a grammar")
    _add_grammar_arguments(check_parser)
    check_parser.set_defaults(func=cmd_check)

    match_parser = subparsers.add_parser("match", help="Match text against a symbol")
    _add_grammar_arguments(match_parser)
    match_parser.add_argument("symbol", help="Start symbol, without angle brackets")
    source = match_parser.add_mutually_exclusive_group()
    source.add_argument("--text", help="Input text")
    source.add_argument("--input", metavar="FILE", help="Read input text from FILE ('-' for stdin)")
    match_parser.add_argument("--max-depth", type=int, help="Override the recursion bound")
    match_parser.add_argument("--json", action="store_true", help="Output as JSON")
    match_parser.set_defaults(func=cmd_match)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI and return the exit code.

    Exit codes: 0 success/matched, 1 not matched, 2 error.

    Examples:
        >>> main(['match', 'grammar.bn', 'sentence', '--text', 'the cat sat'])  # doctest: +SKIP
        <sentence>: MATCHED
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    try:
        args.engine_config = load_engine_config(
            Path.cwd(), Path(args.config) if args.config else None
        )
        return args.func(args)
    except (BnfError, CLIError) as exc:
        print(format_cli_error(exc, verbose=args.verbose, include_traceback=args.verbose), file=sys.stderr)
        return EXIT_ERROR


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
