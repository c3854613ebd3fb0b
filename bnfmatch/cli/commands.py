"""
Subcommand implementations for the bnfmatch CLI.

Each ``cmd_*`` function takes the parsed ``argparse.Namespace`` and returns
a process exit code; engine errors propagate to ``main``.
"""

import argparse
import json
import sys

from rich.console import Console
from rich.table import Table

from bnfmatch.config import EngineConfig
from bnfmatch.engine import Grammar
from bnfmatch.loader import load_grammar, read_text
from bnfmatch.report import format_matches, result_to_dict

from .errors import EXIT_NO_MATCH, EXIT_OK, CLIValidationError


def _load(args: argparse.Namespace) -> Grammar:
    config: EngineConfig = args.engine_config
    return load_grammar(args.grammar, dictionaries=args.dictionaries or (), config=config)


def cmd_symbols(args: argparse.Namespace) -> int:
    """List the symbols a grammar defines, alphabetically."""
    grammar = _load(args)
    console = Console()

    if args.json:
        console.print_json(data=grammar.symbols)
        return EXIT_OK

    table = Table(title=f"Symbols in {args.grammar} ({len(grammar)} defined)")
    table.add_column("Symbol", style="bold blue")
    table.add_column("Line", justify="right")
    for name in grammar.symbols:
        table.add_row(f"<{name}>", str(grammar.line_of(name)))
    console.print(table)
    return EXIT_OK


def cmd_check(args: argparse.Namespace) -> int:
    """Build and validate a grammar without matching anything."""
    grammar = _load(args)
    print(f"Successfully loaded Backus-Naur form! ({len(grammar)} symbols)")
    return EXIT_OK


def cmd_match(args: argparse.Namespace) -> int:
    """Match input text against a symbol and print the recorded spans."""
    if args.text is None and args.input is None:
        raise CLIValidationError(
            "No input given",
            hint="Pass --text TEXT or --input FILE (use '-' for stdin)",
        )

    config: EngineConfig = args.engine_config
    if args.max_depth is not None:
        if args.max_depth < 1:
            raise CLIValidationError(f"--max-depth must be positive, got {args.max_depth}")
        config = config.with_overrides(max_depth=args.max_depth)
        args.engine_config = config

    if args.text is not None:
        text = args.text
    elif args.input == "-":
        text = sys.stdin.read()
    else:
        text = read_text(args.input, encoding=config.encoding)

    grammar = _load(args)
    result = grammar.match(args.symbol, text)

    if args.json:
        print(json.dumps(result_to_dict(args.symbol, result), indent=2))
    else:
        outcome = "MATCHED" if result.matched else "NOT MATCHED"
        print(f"<{args.symbol}>: {outcome}")
        report = format_matches(result)
        if report:
            print()
            print(report, end="")

    return EXIT_OK if result.matched else EXIT_NO_MATCH
