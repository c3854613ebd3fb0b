"""Grammar definition language: tokenizer, parser, AST and validator."""

from .ast import (
    Alternation,
    Group,
    Item,
    ItemRun,
    Literal,
    Node,
    Quantifier,
    Reference,
    Segment,
    Sequence,
    iter_references,
)
from .lexer import Token, tokenize, tokenize_line
from .parser import Definition, GrammarParser, parse_definitions
from .validator import undefined_symbols, validate

__all__ = [
    "Alternation",
    "Group",
    "Item",
    "ItemRun",
    "Literal",
    "Node",
    "Quantifier",
    "Reference",
    "Segment",
    "Sequence",
    "iter_references",
    "Token",
    "tokenize",
    "tokenize_line",
    "Definition",
    "GrammarParser",
    "parse_definitions",
    "undefined_symbols",
    "validate",
]
