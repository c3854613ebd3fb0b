"""AST node definitions for grammar right-hand sides.

A definition is either an ``Alternation`` of two nodes or a ``Sequence`` of
segments. A segment is a flat ``ItemRun`` or a bracketed ``Group`` carrying a
repetition quantifier. Items are ``Literal`` terminals or ``Reference``
non-terminals.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple, Union


class Quantifier(Enum):
    """Repetition tag attached to a bracket-group."""

    ZERO_OR_MORE = "*"
    ONE_OR_MORE = "+"
    OPTIONAL = "?"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_token(cls, token: str) -> "Quantifier":
        return cls(token)


@dataclass(frozen=True)
class Literal:
    """Terminal compared case-insensitively against one input token."""

    text: str

    def __str__(self) -> str:
        return f'"{self.text}"'


@dataclass(frozen=True)
class Reference:
    """Non-terminal reference, stored without angle brackets."""

    name: str

    def __str__(self) -> str:
        return f"<{self.name}>"


Item = Union[Literal, Reference]


@dataclass(frozen=True)
class ItemRun:
    items: Tuple[Item, ...] = ()

    def __str__(self) -> str:
        return " ".join(str(item) for item in self.items)


@dataclass(frozen=True)
class Group:
    items: Tuple[Item, ...] = ()
    quantifier: Quantifier = Quantifier.ZERO_OR_MORE

    def __str__(self) -> str:
        inner = " ".join(str(item) for item in self.items)
        return f"{{ {inner} }}{self.quantifier}"


Segment = Union[ItemRun, Group]


@dataclass(frozen=True)
class Sequence:
    segments: Tuple[Segment, ...] = ()

    def __str__(self) -> str:
        return " ".join(str(segment) for segment in self.segments if str(segment))


@dataclass(frozen=True)
class Alternation:
    left: "Node"
    right: "Node"

    def __str__(self) -> str:
        return f"{self.left} | {self.right}"


Node = Union[Alternation, Sequence]


def iter_references(node: Node) -> Iterator[Reference]:
    """Yield every symbol reference inside ``node`` in source order."""
    if isinstance(node, Alternation):
        yield from iter_references(node.left)
        yield from iter_references(node.right)
        return
    for segment in node.segments:
        for item in segment.items:
            if isinstance(item, Reference):
                yield item


__all__ = [
    "Quantifier",
    "Literal",
    "Reference",
    "Item",
    "ItemRun",
    "Group",
    "Segment",
    "Sequence",
    "Alternation",
    "Node",
    "iter_references",
]
