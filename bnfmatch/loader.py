"""Utilities for loading grammars and input text from disk."""

from __future__ import annotations

import logging
from os import PathLike
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from bnfmatch.config import EngineConfig
from bnfmatch.engine import Grammar
from bnfmatch.errors import DuplicateSymbol, GrammarError, GrammarLoadError

logger = logging.getLogger(__name__)

PathArg = Union[str, "PathLike[str]"]


def read_text(path: PathArg, *, encoding: str = "utf-8") -> str:
    """Read a grammar, dictionary or input file."""
    file_path = Path(path)
    try:
        return file_path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise GrammarLoadError(
            f"Error loading file. Cannot load file: {file_path.name}",
            path=str(file_path),
            hint=str(exc),
        ) from exc


def combine_sources(grammar_text: str, dictionaries: Iterable[str]) -> str:
    """Append dictionary text after the main grammar, one block per dictionary."""
    parts: List[str] = [grammar_text]
    parts.extend(dictionaries)
    return "\n".join(parts)


class SourceMap:
    """Maps line numbers of combined grammar text back to the file they came from."""

    def __init__(self, sources: Sequence[Tuple[str, str]]):
        self._starts: List[Tuple[int, str]] = []
        combined: Optional[str] = None
        for path, text in sources:
            if combined is None:
                start, combined = 0, text
            else:
                # lines before this source, counting the joining newline
                start = len((combined + "\n").splitlines())
                combined = combine_sources(combined, [text])
            self._starts.append((start, path))

    def locate(self, line: int) -> Tuple[str, int]:
        """Return ``(path, line)`` for a 1-based line of the combined text."""
        for offset, path in reversed(self._starts):
            if line > offset:
                return path, line - offset
        return self._starts[0][1], line

    def relocate(self, error: GrammarError) -> GrammarError:
        """Point ``error`` at the file and line where the problem really is."""
        if error.line is None:
            return error
        path, line = self.locate(error.line)
        error.path = path
        error.line = line
        error.location.path = path
        error.location.line = line
        if isinstance(error, DuplicateSymbol) and error.first_line is not None:
            first_path, first_line = self.locate(error.first_line)
            error.hint = f"<{error.name}> was first declared at {first_path}:{first_line}"
        return error


def load_grammar(
    path: PathArg,
    *,
    dictionaries: Iterable[PathArg] = (),
    config: Optional[EngineConfig] = None,
) -> Grammar:
    """Load a grammar file, optionally extended by dictionary files.

    Dictionaries are plain grammar text defining extra symbols; they are
    appended to the main grammar before it is parsed and validated. Errors
    raised while parsing name the file and line the problem sits on.
    """
    config = config or EngineConfig()
    grammar_path = Path(path)
    sources = [(str(grammar_path), read_text(grammar_path, encoding=config.encoding))]
    sources.extend(
        (str(Path(entry)), read_text(entry, encoding=config.encoding)) for entry in dictionaries
    )
    source = combine_sources(sources[0][1], [text for _, text in sources[1:]])
    logger.debug("Loading %s with %d dictionaries", grammar_path, len(sources) - 1)
    try:
        return Grammar.from_source(source, path=str(grammar_path), config=config)
    except GrammarError as exc:
        if len(sources) == 1:
            raise
        raise SourceMap(sources).relocate(exc)


__all__ = ["SourceMap", "combine_sources", "load_grammar", "read_text"]
