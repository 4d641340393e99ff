"""Immutable dataclasses describing a parsed unified diff, and their rendering."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Hunk:
    """
    Represents a single hunk from a unified diff.

    A hunk carries a copy of its file's header so it can be rendered as a
    standalone patch without reference to the delta it came from.
    """

    file_header: str  # Verbatim header block of the owning file diff
    old_file: str
    new_file: str
    old_start: int  # Starting line number in original file (1-indexed)
    old_lines: int  # Number of lines in original file
    new_start: int  # Starting line number in new file (1-indexed)
    new_lines: int  # Number of lines in new file
    header_suffix: str  # Text after the closing "@@", e.g. " def foo():"
    content: str  # Verbatim body lines, markers and terminators included
    old_lines_elided: bool = False  # Header wrote "-5" rather than "-5,1"
    new_lines_elided: bool = False

    def display_header(self) -> str:
        """Canonical range header, without the header suffix."""
        return f"@@ -{self.old_start},{self.old_lines} +{self.new_start},{self.new_lines} @@"

    def header(self) -> str:
        """
        Range header followed by the header suffix.

        A count is left out only where the input left it out and it is still 1.
        """
        old_range = self._format_range(self.old_start, self.old_lines, self.old_lines_elided)
        new_range = self._format_range(self.new_start, self.new_lines, self.new_lines_elided)
        return f"@@ -{old_range} +{new_range} @@{self.header_suffix}"

    @staticmethod
    def _format_range(start: int, lines: int, elided: bool) -> str:
        if elided and lines == 1:
            return str(start)

        return f"{start},{lines}"

    def format_patch(self) -> str:
        """
        Render this hunk as a standalone single-hunk patch.

        Returns:
            The file header, the hunk header line and the hunk body
        """
        return f"{self.file_header}{self.header()}\n{self.content}"

    def __str__(self) -> str:
        return f"{self.header()}\n{self.content}"


@dataclass(frozen=True)
class Delta:
    """Represents the changes to one file."""

    file_header: str  # "diff --git" line, extra metadata lines and "---"/"+++" lines, verbatim
    old_file: str
    new_file: str
    hunks: Tuple[Hunk, ...] = ()

    def format_patch(self) -> str:
        """Render this file diff as a standalone patch."""
        return str(self)

    def __str__(self) -> str:
        return self.file_header + "".join(str(hunk) for hunk in self.hunks)


@dataclass(frozen=True)
class Diff:
    """Top-level result of parsing a unified diff."""

    commit: str | None = None  # Leading commit line, without its terminator
    deltas: Tuple[Delta, ...] = ()

    @classmethod
    def parse(cls, diff_text: str) -> 'Diff':
        """
        Parse unified diff text using the default parser configuration.

        Args:
            diff_text: Unified diff text, optionally preceded by one commit line

        Returns:
            Parsed diff

        Raises:
            UDiffSyntaxError: If the text is not a valid unified diff
            UDiffInvariantError: If the parser produced an inconsistent syntax tree
        """
        # Imported here as the parser builds instances of these classes
        from udiff.udiff_parser import UDiffParser  # pylint: disable=import-outside-toplevel
        return UDiffParser().parse(diff_text)

    def format(self, include_commit: bool = False) -> str:
        """
        Render the diff back to text.

        Args:
            include_commit: Prefix the output with the commit line, if there is one

        Returns:
            The diff text; without the commit line this reproduces the parsed body exactly
        """
        body = "".join(str(delta) for delta in self.deltas)
        if include_commit and self.commit is not None:
            return f"{self.commit}\n{body}"

        return body

    def __str__(self) -> str:
        return self.format()
