"""Lexical analyzer (tokenizer) for grammar source.

Converts each line of grammar text into a flat list of tokens. Bracket
syntax is normalized here so the parser only ever sees ``{`` and ``}``:
``[ X ]`` is rewritten to ``{ X } ?``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Tuple

DEFINE = "::="
PIPE = "|"
LBRACE = "{"
RBRACE = "}"
QUANTIFIERS = frozenset({"*", "+", "?"})

# A '|' flanked by anything other than quotes, word or angle-bracket
# characters becomes a standalone token. Only the pipe itself is replaced,
# so neighbouring braces and quantifiers are kept.
_PIPE_PATTERN = re.compile(r"(?<=[^\w\"<>'])\|(?=[^\w\"<>'])", re.ASCII)

# Quoted runs (closed or running to end of line) and everything between them.
_CHUNK_PATTERN = re.compile(r'"(?P<quoted>[^"]*)(?P<close>"|$)|(?P<bare>[^"]+)')


@dataclass(frozen=True)
class Token:
    """A single grammar token.

    ``quoted`` tokens come from ``"..."`` and are always literals, even when
    their text looks like an operator or a ``<symbol>``.
    """

    text: str
    quoted: bool = False

    def is_op(self, op: str) -> bool:
        return not self.quoted and self.text == op

    @property
    def is_symbol(self) -> bool:
        return (
            not self.quoted
            and len(self.text) >= 2
            and self.text.startswith("<")
            and self.text.endswith(">")
        )

    def __str__(self) -> str:
        return f'"{self.text}"' if self.quoted else self.text


def _normalize(chunk: str) -> str:
    chunk = chunk.replace(LBRACE, " { ").replace(RBRACE, " } ")
    chunk = chunk.replace("[", " { ").replace("]", " } ? ")
    return _PIPE_PATTERN.sub(" | ", chunk)


def tokenize_line(line: str) -> List[Token]:
    """Split one line of grammar text into tokens.

    Outside quotes whitespace is the only delimiter. A closing quote always
    emits a token, so ``""`` yields the empty literal. An unterminated quote
    swallows the rest of the line.
    """
    tokens: List[Token] = []
    for match in _CHUNK_PATTERN.finditer(line):
        bare = match.group("bare")
        if bare is not None:
            tokens.extend(Token(part) for part in _normalize(bare).split())
            continue
        text = match.group("quoted")
        if match.group("close") or text:
            tokens.append(Token(text, quoted=True))
    return tokens


def tokenize(source: str) -> Iterator[Tuple[int, List[Token]]]:
    """Yield ``(line_number, tokens)`` for every non-blank line of ``source``."""
    for line_number, line in enumerate(source.splitlines(), start=1):
        line = line.strip()
        if not line:
            continue
        yield line_number, tokenize_line(line)


__all__ = [
    "DEFINE",
    "PIPE",
    "LBRACE",
    "RBRACE",
    "QUANTIFIERS",
    "Token",
    "tokenize_line",
    "tokenize",
]
