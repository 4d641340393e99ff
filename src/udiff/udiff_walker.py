"""Tree walker that turns a unified diff syntax tree into Diff, Delta and Hunk objects."""

from typing import Any, Dict, List, NoReturn, Tuple

from udiff.udiff_exceptions import UDiffInvariantError
from udiff.udiff_node import UDiffNode, UDiffNodeKind
from udiff.udiff_types import Delta, Diff, Hunk


class UDiffTreeWalker:
    """
    Walks a syntax tree produced by UDiffGrammar in a single pass.

    Every node kind is dispatched explicitly.  Anything the grammar should
    never produce raises UDiffInvariantError rather than UDiffSyntaxError:
    it means the grammar and this walker disagree, not that the input is bad.
    """

    def walk(self, root: UDiffNode) -> Diff:
        """
        Build a Diff from a DIFFS root node.

        Args:
            root: Root node from UDiffGrammar.parse()

        Returns:
            The parsed diff

        Raises:
            UDiffInvariantError: If the tree has an unexpected shape
        """
        self._expect_kind(root, UDiffNodeKind.DIFFS)

        commit: str | None = None
        deltas: List[Delta] = []

        for node in root.children:
            if node.kind == UDiffNodeKind.COMMIT:
                commit = node.value

            elif node.kind == UDiffNodeKind.DIFF:
                deltas.append(self._walk_diff(node))

            else:
                self._unexpected(node, root)

        return Diff(commit=commit, deltas=tuple(deltas))

    def _walk_diff(self, diff: UDiffNode) -> Delta:
        file_header: str | None = None
        old_file: str | None = None
        new_file: str | None = None
        hunks: List[Hunk] = []

        for node in diff.children:
            if node.kind == UDiffNodeKind.DIFF_HEADER:
                file_header = node.value
                old_file, new_file = self._walk_diff_header(node)

            elif node.kind == UDiffNodeKind.HUNK:
                if file_header is None or old_file is None or new_file is None:
                    raise UDiffInvariantError("Hunk node appears before its file header", self._details(node, diff))

                hunks.append(self._walk_hunk(node, file_header, old_file, new_file))

            else:
                self._unexpected(node, diff)

        if file_header is None or old_file is None or new_file is None:
            raise UDiffInvariantError("Diff node has no file header", self._details(diff))

        return Delta(file_header=file_header, old_file=old_file, new_file=new_file, hunks=tuple(hunks))

    def _walk_diff_header(self, header: UDiffNode) -> Tuple[str, str]:
        old_file: str | None = None
        new_file: str | None = None

        for node in header.children:
            if node.kind == UDiffNodeKind.OLD_FILE:
                old_file = node.value

            elif node.kind == UDiffNodeKind.NEW_FILE:
                new_file = node.value

            elif node.kind == UDiffNodeKind.HEADER_EXTRA:
                # Kept verbatim in the file header; not decomposed further
                continue

            else:
                self._unexpected(node, header)

        if old_file is None or new_file is None:
            raise UDiffInvariantError("File header has no old or new file path", self._details(header))

        return old_file, new_file

    def _walk_hunk(self, hunk: UDiffNode, file_header: str, old_file: str, new_file: str) -> Hunk:
        old_range: Tuple[int, int, bool] | None = None
        new_range: Tuple[int, int, bool] | None = None
        context: UDiffNode | None = None
        body: str | None = None

        for node in hunk.children:
            if node.kind == UDiffNodeKind.OLD_RANGE:
                old_range = self._walk_range(node)

            elif node.kind == UDiffNodeKind.NEW_RANGE:
                new_range = self._walk_range(node)

            elif node.kind == UDiffNodeKind.CONTEXT:
                context = node

            elif node.kind == UDiffNodeKind.HUNK_BODY:
                body = node.value

            else:
                self._unexpected(node, hunk)

        if old_range is None or new_range is None or context is None or body is None:
            raise UDiffInvariantError("Hunk node is missing a range, context or body", self._details(hunk))

        return Hunk(
            file_header=file_header,
            old_file=old_file,
            new_file=new_file,
            old_start=old_range[0],
            old_lines=old_range[1],
            new_start=new_range[0],
            new_lines=new_range[1],
            header_suffix=context.value,
            content=body,
            old_lines_elided=old_range[2],
            new_lines_elided=new_range[2]
        )

    def _walk_range(self, range_node: UDiffNode) -> Tuple[int, int, bool]:
        """
        Read a range node.

        Returns:
            Tuple of (start, line count, whether the count was left out)
        """
        start: int | None = None

        # A range written without a count ("@@ -5 +5 @@") covers one line
        lines = 1
        elided = True

        for node in range_node.children:
            if node.kind == UDiffNodeKind.START:
                start = self._parse_number(node)

            elif node.kind == UDiffNodeKind.LINES:
                lines = self._parse_number(node)
                elided = False

            else:
                self._unexpected(node, range_node)

        if start is None:
            raise UDiffInvariantError("Range node has no start", self._details(range_node))

        return start, lines, elided

    def _parse_number(self, node: UDiffNode) -> int:
        """Convert a digit-only span to an int."""
        if not node.value.isascii() or not node.value.isdigit():
            raise UDiffInvariantError(f"Range field is not an unsigned integer: {node.value!r}", self._details(node))

        return int(node.value)

    def _expect_kind(self, node: UDiffNode, kind: UDiffNodeKind) -> None:
        if node.kind != kind:
            raise UDiffInvariantError(f"Expected {kind.name} node, found {node.kind.name}", self._details(node))

    def _unexpected(self, node: UDiffNode, parent: UDiffNode) -> NoReturn:
        raise UDiffInvariantError(
            f"Unexpected {node.kind.name} node inside {parent.kind.name}",
            self._details(node, parent)
        )

    def _details(self, node: UDiffNode, parent: UDiffNode | None = None) -> Dict[str, Any]:
        details: Dict[str, Any] = {'kind': node.kind.name, 'position': node.position}
        if parent is not None:
            details['parent_kind'] = parent.kind.name

        return details
