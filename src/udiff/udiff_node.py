"""Syntax tree nodes produced by the unified diff grammar."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List


class UDiffNodeKind(Enum):
    """The closed set of node kinds the grammar can produce."""
    DIFFS = auto()
    COMMIT = auto()
    DIFF = auto()
    DIFF_HEADER = auto()
    OLD_FILE = auto()
    NEW_FILE = auto()
    HEADER_EXTRA = auto()
    HUNK = auto()
    OLD_RANGE = auto()
    NEW_RANGE = auto()
    START = auto()
    LINES = auto()
    CONTEXT = auto()
    HUNK_BODY = auto()


@dataclass
class UDiffNode:
    """
    A recognised span of the input.

    `value` is the verbatim text the node covers and `position` its offset
    in the input, so a parent can slice its own value using a child's offset.
    """
    kind: UDiffNodeKind
    value: str
    position: int
    children: List['UDiffNode'] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"UDiffNode({self.kind.name}, {self.value!r}, pos={self.position}, children={len(self.children)})"
