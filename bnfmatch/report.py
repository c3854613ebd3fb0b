"""Rendering of match results for display."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from bnfmatch.matcher import MatchResult


def format_matches(result: MatchResult, symbols: Optional[Iterable[str]] = None) -> str:
    """Describe the spans recorded per symbol.

    Symbols are listed alphabetically (or in the order of ``symbols``); only
    those with recorded spans appear::

        Matches for <name>:
        >>> [ tok1 tok2 ]

    """
    order = list(symbols) if symbols is not None else sorted(result.spans)
    lines = []
    for symbol in order:
        spans = result.spans.get(symbol)
        if not spans:
            continue
        lines.append(f"Matches for <{symbol}>:")
        lines.extend(f">>> {span}" for span in sorted(spans))
        lines.append("")
    return "\n".join(lines) + ("\n" if lines else "")


def result_to_dict(symbol: str, result: MatchResult) -> Dict[str, Any]:
    return {
        "symbol": symbol,
        "matched": result.matched,
        "end": result.end,
        "tokens": list(result.tokens),
        "spans": result.sorted_spans(),
    }


__all__ = ["format_matches", "result_to_dict"]
