"""Token types and token representation for unified diff lines."""

from dataclasses import dataclass
from enum import Enum


class UDiffTokenType(Enum):
    """
    Line shapes recognised by the lexer.

    A token type only says what a line looks like.  Whether a line is really
    structure (a file header, a hunk header) or hunk content is decided by the
    grammar from where the line appears.
    """
    GIT_HEADER = "diff --git "
    OLD_FILE = "--- "
    NEW_FILE = "+++ "
    HUNK_HEADER = "@@ "
    CONTEXT = " "
    ADDED = "+"
    REMOVED = "-"
    NO_NEWLINE = "\\"
    EMPTY = "EMPTY"
    TEXT = "TEXT"


@dataclass(frozen=True)
class UDiffToken:
    """Represents a single line of diff text, terminator included."""
    type: UDiffTokenType
    value: str
    position: int
    line: int

    @property
    def end(self) -> int:
        """Offset just past the end of this line."""
        return self.position + len(self.value)

    @property
    def text(self) -> str:
        """The line without its trailing newline (a carriage return, if any, is kept)."""
        return self.value[:-1] if self.value.endswith('\n') else self.value

    def __repr__(self) -> str:
        return f"UDiffToken({self.type.name}, {self.value!r}, line={self.line})"
