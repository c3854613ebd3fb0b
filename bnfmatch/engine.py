"""Frozen grammar objects and the high level parse/match API."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, Iterator, List, Mapping, Optional, Sequence

from bnfmatch.config import EngineConfig
from bnfmatch.grammar.ast import Node
from bnfmatch.grammar.parser import Definition, GrammarParser
from bnfmatch.grammar.validator import validate
from bnfmatch.matcher import Matcher, MatchResult, split_input

logger = logging.getLogger(__name__)


class Grammar:
    """An immutable, validated symbol table.

    Built once from grammar text; every ``match`` call works on private
    state, so one instance can be shared between callers.
    """

    def __init__(
        self,
        definitions: Iterable[Definition],
        *,
        path: Optional[str] = None,
        max_depth: int = EngineConfig.max_depth,
    ):
        ordered = sorted(definitions, key=lambda definition: definition.name)
        self.path = path
        self._symbols: Mapping[str, Node] = MappingProxyType(
            {definition.name: definition.node for definition in ordered}
        )
        self._lines: Mapping[str, int] = MappingProxyType(
            {definition.name: definition.line for definition in ordered}
        )
        validate(self._symbols, path=path)
        self._matcher = Matcher(self._symbols, max_depth=max_depth)

    @classmethod
    def from_source(
        cls,
        source: str,
        *,
        path: Optional[str] = None,
        config: Optional[EngineConfig] = None,
    ) -> "Grammar":
        config = config or EngineConfig()
        definitions = GrammarParser(source, path=path).parse()
        grammar = cls(definitions, path=path, max_depth=config.max_depth)
        logger.debug("Built grammar with %d symbols from %s", len(grammar), path or "<text>")
        return grammar

    # ====================================================================
    # Symbol table
    # ====================================================================

    @property
    def symbols(self) -> List[str]:
        """Defined symbol names in alphabetical order."""
        return list(self._symbols)

    @property
    def table(self) -> Mapping[str, Node]:
        return self._symbols

    @property
    def max_depth(self) -> int:
        return self._matcher.max_depth

    def definition(self, name: str) -> Node:
        return self._symbols[name]

    def line_of(self, name: str) -> int:
        return self._lines[name]

    def __contains__(self, name: object) -> bool:
        return name in self._symbols

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def __repr__(self) -> str:
        return f"Grammar(symbols={self.symbols!r})"

    # ====================================================================
    # Matching
    # ====================================================================

    def match_tokens(self, symbol: str, tokens: Sequence[str]) -> MatchResult:
        return self._matcher.match(symbol, tokens)

    def match(self, symbol: str, text: str) -> MatchResult:
        """Match whitespace-separated ``text`` against ``symbol``."""
        return self._matcher.match(symbol, split_input(text))

    def matches(self, symbol: str, text: str) -> bool:
        return self.match(symbol, text).matched


def parse_grammar(
    source: str,
    *,
    path: Optional[str] = None,
    config: Optional[EngineConfig] = None,
) -> Grammar:
    """Build and validate a grammar from source text."""
    return Grammar.from_source(source, path=path, config=config)


__all__ = ["Grammar", "parse_grammar"]
