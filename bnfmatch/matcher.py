"""Recursive matcher that checks input tokens against a grammar.

The matcher never mutates the grammar. All bookkeeping for one call (the
recorded spans and the depth flag) lives in a private ``_MatchState`` so a
single ``Matcher`` can serve any number of independent calls.

Behavior worth knowing about:

* Alternation is greedy and does not backtrack: both branches are tried from
  the same position and the one reaching further wins, even if a later
  segment then fails where the other branch would have succeeded.
* Bracket-groups match their interior once, or are skipped when the
  interior does not match at the cursor. The quantifier tag is recorded on
  the AST but does not change matching.
* Spans are recorded for every reference that succeeds during the search,
  including inside alternation branches that end up discarded.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Mapping, Sequence as SequenceType, Set, Tuple

from bnfmatch.errors import RecursionLimitExceeded, UnknownStartSymbol
from bnfmatch.grammar.ast import Alternation, Group, Item, Literal, Node, Segment
from bnfmatch.grammar.validator import validate

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 50
NO_MATCH = -1


def split_input(text: str) -> List[str]:
    """Tokenize input text on runs of whitespace.

    Punctuation is kept as part of the surrounding token.
    """
    return text.split()


def format_span(tokens: SequenceType[str], lo: int, hi: int) -> str:
    """Render ``tokens[lo:hi]`` as ``"[ tok1 tok2 ]"``."""
    if lo < 0 or hi > len(tokens):
        return ""
    return "[ " + "".join(f"{token} " for token in tokens[lo:hi]) + "]"


@dataclass(frozen=True)
class MatchResult:
    """Outcome of one match call."""

    matched: bool
    spans: Mapping[str, FrozenSet[str]]
    end: int
    tokens: Tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return self.matched

    def sorted_spans(self) -> Dict[str, List[str]]:
        """Symbols in alphabetical order, each with its spans sorted."""
        return {name: sorted(self.spans[name]) for name in sorted(self.spans)}


@dataclass
class _MatchState:
    tokens: Tuple[str, ...]
    spans: Dict[str, Set[str]] = field(default_factory=lambda: defaultdict(set))
    too_deep: bool = False

    def record(self, name: str, lo: int, hi: int) -> None:
        self.spans[name].add(format_span(self.tokens, lo, hi))


class Matcher:
    """Depth-bounded recursive matcher over a read-only symbol table.

    The table is validated up front, so a dangling reference raises
    ``UndefinedSymbols`` here rather than failing in the middle of a match.
    """

    def __init__(self, symbols: Mapping[str, Node], *, max_depth: int = DEFAULT_MAX_DEPTH):
        validate(symbols)
        self.symbols = symbols
        self.max_depth = max_depth

    def match(self, start: str, tokens: SequenceType[str]) -> MatchResult:
        """Match ``tokens`` against the definition of ``start``.

        The result is a match only when the whole token sequence is consumed.
        Raises ``UnknownStartSymbol`` or ``RecursionLimitExceeded``.
        """
        if start not in self.symbols:
            raise UnknownStartSymbol(start, sorted(self.symbols))

        state = _MatchState(tokens=tuple(tokens))
        try:
            end = self._match_node(self.symbols[start], 0, 0, state)
        except RecursionError as exc:
            # max_depth is deeper than the interpreter stack allows
            logger.debug("Match of <%s> hit the interpreter recursion limit", start)
            raise RecursionLimitExceeded(self.max_depth) from exc
        if state.too_deep:
            logger.debug("Match of <%s> exceeded depth %d", start, self.max_depth)
            raise RecursionLimitExceeded(self.max_depth)

        matched = end == len(state.tokens)
        logger.debug(
            "Matched <%s> against %d tokens: end=%d matched=%s",
            start,
            len(state.tokens),
            end,
            matched,
        )
        return MatchResult(
            matched=matched,
            spans={name: frozenset(found) for name, found in state.spans.items()},
            end=end,
            tokens=state.tokens,
        )

    def match_text(self, start: str, text: str) -> MatchResult:
        return self.match(start, split_input(text))

    # ====================================================================
    # Recursive descent
    # ====================================================================

    def _match_node(self, node: Node, pos: int, depth: int, state: _MatchState) -> int:
        if depth > self.max_depth:
            state.too_deep = True
            return NO_MATCH

        if isinstance(node, Alternation):
            return max(
                self._match_node(node.left, pos, depth + 1, state),
                self._match_node(node.right, pos, depth + 1, state),
            )

        for segment in node.segments:
            pos = self._match_segment(segment, pos, depth + 1, state)
            if pos < 0:
                return NO_MATCH
        return pos

    def _match_segment(self, segment: Segment, pos: int, depth: int, state: _MatchState) -> int:
        end = self._match_items(segment.items, pos, depth, state)
        if end < 0 and isinstance(segment, Group):
            return pos
        return end

    def _match_items(self, items: Tuple[Item, ...], pos: int, depth: int, state: _MatchState) -> int:
        tokens = state.tokens
        for item in items:
            if isinstance(item, Literal):
                if not item.text:
                    continue
                if pos >= len(tokens) or tokens[pos].lower() != item.text.lower():
                    return NO_MATCH
                pos += 1
                continue

            start = pos
            pos = self._match_node(self.symbols[item.name], pos, depth + 1, state)
            if pos < 0:
                return NO_MATCH
            state.record(item.name, start, pos)
        return pos


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "Matcher",
    "MatchResult",
    "format_span",
    "split_input",
]
