"""Unified error model for bnfmatch."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional


@dataclass
class ErrorLocation:
    path: Optional[str] = None
    line: Optional[int] = None

    def describe(self) -> str:
        if self.path and self.line is not None:
            return f"{self.path}:{self.line}"
        if self.line is not None:
            return f"line {self.line}"
        if self.path:
            return self.path
        return "unknown location"


class BnfError(Exception):
    """Base class for all grammar, validation and match errors surfaced to users."""

    code: str = "BNF_ERROR"
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        line: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.location = ErrorLocation(path=path, line=line)
        self.path = path
        self.line = line
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint

    def __str__(self) -> str:
        if self.line is not None:
            return f"Line {self.line}: {self.message}"
        return self.message

    def format(self) -> str:
        components = [self.message]
        meta_parts = []
        location_desc = self.location.describe()
        if location_desc != "unknown location":
            meta_parts.append(location_desc)
        if self.code:
            meta_parts.append(self.code)
        if meta_parts:
            components[-1] = f"{components[-1]} ({'; '.join(meta_parts)})"
        if self.hint:
            components.append(f"Hint: {self.hint}")
        return " ".join(part for part in components if part)


class ConfigError(BnfError):
    """Raised when engine configuration is invalid."""

    code = "CONFIG_ERROR"


# ============================================================================
# Construction-time errors
# ============================================================================

class GrammarError(BnfError):
    """Raised while building a grammar from source text."""

    code = "GRAMMAR_ERROR"


class MalformedDefinition(GrammarError):
    """A definition line does not have the `<symbol> ::= ...` shape."""

    code = "MALFORMED_DEFINITION"


class DuplicateSymbol(GrammarError):
    """A symbol is defined more than once."""

    code = "DUPLICATE_SYMBOL"

    def __init__(self, name: str, *, first_line: Optional[int] = None, **kwargs) -> None:
        kwargs.setdefault("hint", f"<{name}> was first declared at line {first_line}" if first_line else None)
        super().__init__(f"Symbol <{name}> already declared.", **kwargs)
        self.name = name
        self.first_line = first_line


class UnsupportedRecursion(GrammarError):
    """A definition references its own symbol directly."""

    code = "UNSUPPORTED_RECURSION"


class UnmatchedGroup(GrammarError):
    """A `{` has no closing `}` in range, or a `}` has no opening `{`."""

    code = "UNMATCHED_GROUP"


class NestedGroupsUnsupported(GrammarError):
    """A bracket-group opens inside another bracket-group."""

    code = "NESTED_GROUPS"


class EmptyGrammar(GrammarError):
    """The source contains no definitions at all."""

    code = "EMPTY_GRAMMAR"

    def __init__(self, message: str = "No definitions were recognized.", **kwargs) -> None:
        super().__init__(message, **kwargs)


class GrammarLoadError(GrammarError):
    """A grammar or dictionary file could not be read."""

    code = "GRAMMAR_LOAD_ERROR"


# ============================================================================
# Validation-time errors
# ============================================================================

class UndefinedSymbols(BnfError):
    """One or more referenced symbols have no definition.

    Every missing name found anywhere in the grammar is reported at once.
    """

    code = "UNDEFINED_SYMBOLS"

    def __init__(self, names: Iterable[str], **kwargs) -> None:
        self.names: List[str] = sorted(set(names))
        listing = ", ".join(f"<{name}>" for name in self.names)
        kwargs.setdefault("hint", "Maybe you should load some dictionaries?")
        super().__init__(f"Undefined symbol(s): {listing}", **kwargs)


# ============================================================================
# Match-time errors
# ============================================================================

class MatchError(BnfError):
    """Raised when a match call cannot be carried out."""

    code = "MATCH_ERROR"


class UnknownStartSymbol(MatchError):
    code = "UNKNOWN_START_SYMBOL"

    def __init__(self, name: str, available: Iterable[str] = (), **kwargs) -> None:
        self.name = name
        self.available = list(available)
        if self.available and "hint" not in kwargs:
            kwargs["hint"] = f"Available symbols: {', '.join(self.available[:5])}"
        super().__init__(f"Symbol <{name}> not defined.", **kwargs)


class RecursionLimitExceeded(MatchError):
    code = "RECURSION_LIMIT"

    def __init__(self, limit: int, **kwargs) -> None:
        self.limit = limit
        super().__init__(
            f"Text cannot be matched - recursion too deep (limit {limit}).", **kwargs
        )


__all__ = [
    "BnfError",
    "ConfigError",
    "ErrorLocation",
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
