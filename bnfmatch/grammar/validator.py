"""Reference validation for parsed grammars.

Walks every definition and collects all symbol references that have no
definition, so a single report lists every missing dependency.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Set

from bnfmatch.errors import UndefinedSymbols

from .ast import Node, iter_references

logger = logging.getLogger(__name__)


def undefined_symbols(symbols: Mapping[str, Node]) -> Set[str]:
    """Return every referenced name that is not a key of ``symbols``."""
    missing: Set[str] = set()
    for node in symbols.values():
        for reference in iter_references(node):
            if reference.name not in symbols:
                missing.add(reference.name)
    return missing


def validate(symbols: Mapping[str, Node], *, path: Optional[str] = None) -> None:
    """Raise ``UndefinedSymbols`` naming all unresolved references at once."""
    missing = undefined_symbols(symbols)
    if missing:
        logger.debug("Validation failed, undefined: %s", sorted(missing))
        raise UndefinedSymbols(missing, path=path)
    logger.debug("Validated %d definitions", len(symbols))


__all__ = ["undefined_symbols", "validate"]
