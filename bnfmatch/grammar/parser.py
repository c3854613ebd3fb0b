"""Parser for line-oriented BNF grammar definitions.

Each definition starts on a line whose first two tokens are ``<symbol>`` and
``::=``. Any other non-blank line continues the right-hand side of the
definition above it.

Grammar of a right-hand side::

    alternation := sequence ( "|" sequence )*      (left-associative)
    sequence    := ( items | group )*
    group       := "{" items "}" [ "*" | "+" | "?" ]
    items       := ( literal | "<" name ">" )*
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from bnfmatch.errors import (
    DuplicateSymbol,
    EmptyGrammar,
    MalformedDefinition,
    NestedGroupsUnsupported,
    UnmatchedGroup,
    UnsupportedRecursion,
)

from .ast import Alternation, Group, Item, ItemRun, Literal, Node, Quantifier, Reference, Sequence
from .lexer import DEFINE, LBRACE, PIPE, QUANTIFIERS, RBRACE, Token, tokenize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Definition:
    """One parsed ``<name> ::= ...`` rule and the line it starts on."""

    name: str
    node: Node
    line: int


class GrammarParser:
    """Build one AST per declared symbol from grammar source text."""

    def __init__(self, source: str, *, path: Optional[str] = None):
        self.source = source
        self.path = path
        self.definitions: Dict[str, Definition] = {}
        self._line = 0

    def parse(self) -> List[Definition]:
        """Parse the whole source and return definitions in source order."""
        pending: Optional[Tuple[int, List[Token]]] = None

        for line_number, tokens in tokenize(self.source):
            if len(tokens) > 1 and tokens[1].is_op(DEFINE):
                if pending is not None:
                    self._define(*pending)
                pending = (line_number, list(tokens))
            elif pending is None:
                raise MalformedDefinition(
                    "Expected a definition of the form '<symbol> ::= ...'.",
                    path=self.path,
                    line=line_number,
                )
            else:
                pending[1].extend(tokens)

        if pending is not None:
            self._define(*pending)

        if not self.definitions:
            raise EmptyGrammar(path=self.path)
        return list(self.definitions.values())

    # ====================================================================
    # Definitions
    # ====================================================================

    def _define(self, line: int, tokens: List[Token]) -> None:
        self._line = line
        head = tokens[0]
        if not head.is_symbol:
            raise self._error(
                MalformedDefinition,
                "1st token of a definition must be enclosed in angle brackets.",
                hint=f"Write <{head.text.strip('<>') or 'name'}> {DEFINE} ...",
            )

        name = head.text[1:-1]
        if name in self.definitions:
            raise DuplicateSymbol(
                name,
                first_line=self.definitions[name].line,
                path=self.path,
                line=line,
            )

        body = tokens[2:]
        if not body:
            raise self._error(MalformedDefinition, f"Too few tokens in definition of <{name}>.")

        for token in body:
            if token.is_op(head.text):
                raise self._error(
                    UnsupportedRecursion,
                    "Recursive definitions are currently unsupported.",
                    hint=f"<{name}> refers to itself",
                )

        node = self._parse_alternation(body, 0, len(body))
        self.definitions[name] = Definition(name=name, node=node, line=line)
        logger.debug("Parsed <%s> at line %d: %s", name, line, node)

    def _error(self, cls, message: str, **kwargs):
        return cls(message, path=self.path, line=self._line, **kwargs)

    # ====================================================================
    # Right-hand sides
    # ====================================================================

    def _parse_alternation(self, tokens: List[Token], lo: int, hi: int) -> Node:
        """Parse ``tokens[lo:hi]``, splitting at the last ``|`` so chains nest to the left."""
        if lo >= hi:
            raise self._error(MalformedDefinition, "Empty alternative around '|'.")

        split = _rfind(tokens, PIPE, lo, hi)
        if split is None:
            return self._parse_sequence(tokens, lo, hi)
        return Alternation(
            left=self._parse_alternation(tokens, lo, split),
            right=self._parse_alternation(tokens, split + 1, hi),
        )

    def _parse_sequence(self, tokens: List[Token], lo: int, hi: int) -> Sequence:
        segments = []
        curr = lo
        while curr < hi:
            token = tokens[curr]
            if token.is_op(RBRACE):
                raise self._error(UnmatchedGroup, "Closing brace } without a matching {.")

            if token.is_op(LBRACE):
                close = _find(tokens, RBRACE, curr + 1, hi)
                if close is None:
                    raise self._error(UnmatchedGroup, "Mismatched brace group {}.")
                if _find(tokens, LBRACE, curr + 1, close) is not None:
                    raise self._error(
                        NestedGroupsUnsupported,
                        "Currently only 1 level of brace groups {} is supported.",
                    )

                quantifier = Quantifier.ZERO_OR_MORE
                after = close + 1
                if after < hi and not tokens[after].quoted and tokens[after].text in QUANTIFIERS:
                    quantifier = Quantifier.from_token(tokens[after].text)
                    after += 1

                segments.append(Group(self._parse_items(tokens, curr + 1, close), quantifier))
                curr = after
                continue

            # plain run up to the next brace
            end = _find(tokens, LBRACE, curr + 1, hi)
            stray = _find(tokens, RBRACE, curr + 1, hi)
            if end is None or (stray is not None and stray < end):
                end = stray if stray is not None else hi
            segments.append(ItemRun(self._parse_items(tokens, curr, end)))
            curr = end

        return Sequence(tuple(segments))

    @staticmethod
    def _parse_items(tokens: List[Token], lo: int, hi: int) -> Tuple[Item, ...]:
        items: List[Item] = []
        for token in tokens[lo:hi]:
            if token.is_symbol:
                items.append(Reference(token.text[1:-1]))
            else:
                items.append(Literal(token.text))
        return tuple(items)


def _find(tokens: List[Token], op: str, lo: int, hi: int) -> Optional[int]:
    for index in range(lo, hi):
        if tokens[index].is_op(op):
            return index
    return None


def _rfind(tokens: List[Token], op: str, lo: int, hi: int) -> Optional[int]:
    for index in range(hi - 1, lo - 1, -1):
        if tokens[index].is_op(op):
            return index
    return None


def parse_definitions(source: str, *, path: Optional[str] = None) -> List[Definition]:
    """Parse ``source`` into definitions without validating references."""
    return GrammarParser(source, path=path).parse()


__all__ = ["Definition", "GrammarParser", "parse_definitions"]
