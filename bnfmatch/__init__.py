"""
bnfmatch: a small Backus-Naur grammar engine.

Grammar text is tokenized and parsed into one AST per symbol, every symbol
reference is checked against the symbol table, and input text can then be
matched against any symbol with a depth-bounded recursive matcher that
records which spans of the input each sub-symbol covered.

The code is organised into several modules:

* ``grammar`` – tokenizer, parser, AST dataclasses and reference validator.
* ``matcher`` – the recursive matcher and ``MatchResult``.
* ``engine`` – ``Grammar``, the frozen symbol table tying it together.
* ``loader`` – reading grammars and dictionary files from disk.
* ``report`` – rendering match results.
* ``cli`` – the ``bnfmatch`` command line tool.
"""

__version__ = "0.3.0"

from .config import EngineConfig, load_engine_config
from .engine import Grammar, parse_grammar
from .errors import (
    BnfError,
    ConfigError,
    DuplicateSymbol,
    EmptyGrammar,
    GrammarError,
    GrammarLoadError,
    MalformedDefinition,
    MatchError,
    NestedGroupsUnsupported,
    RecursionLimitExceeded,
    UndefinedSymbols,
    UnknownStartSymbol,
    UnmatchedGroup,
    UnsupportedRecursion,
)
from .loader import load_grammar
from .matcher import Matcher, MatchResult, split_input
from .report import format_matches

__all__ = [
    "__version__",
    "EngineConfig",
    "load_engine_config",
    "Grammar",
    "parse_grammar",
    "load_grammar",
    "Matcher",
    "MatchResult",
    "split_input",
    "format_matches",
    "BnfError",
    "ConfigError",
    "GrammarError",
    "MalformedDefinition",
    "DuplicateSymbol",
    "UnsupportedRecursion",
    "UnmatchedGroup",
    "NestedGroupsUnsupported",
    "EmptyGrammar",
    "GrammarLoadError",
    "UndefinedSymbols",
    "MatchError",
    "UnknownStartSymbol",
    "RecursionLimitExceeded",
]
