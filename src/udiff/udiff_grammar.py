"""Recursive descent grammar for unified diff text."""

import re
from typing import Any, Dict, List, NoReturn, Tuple

from udiff.udiff_exceptions import UDiffSyntaxError
from udiff.udiff_node import UDiffNode, UDiffNodeKind
from udiff.udiff_token import UDiffToken, UDiffTokenType


class UDiffGrammar:
    """
    Recognises unified diff structure in a list of line tokens.

        diffs       = commit? diff*
        diff        = diff_header hunk*
        diff_header = git_line header_extra* (old_file_line new_file_line)?
        hunk        = hunk_header hunk_body
        hunk_header = "@@ -" range " +" range " @@" context EOL
        range       = start ["," lines]

    A header is only recognised where the grammar expects one.  Hunk body
    lines always start with a marker character, so body lines whose content
    looks like "@@ ..." or "diff --git ..." are always read as content.
    Range numbers may not have leading zeros.
    """

    HUNK_HEADER_PATTERN = re.compile(r'@@ -(0|[1-9][0-9]*)(?:,(0|[1-9][0-9]*))? \+(0|[1-9][0-9]*)(?:,(0|[1-9][0-9]*))? @@')

    GIT_PREFIX_LEN = len("diff --git ")
    MARKER_PREFIX_LEN = len("--- ")

    # Token types that end the run of header_extra lines
    _HEADER_EXTRA_STOP = (
        UDiffTokenType.GIT_HEADER,
        UDiffTokenType.OLD_FILE,
        UDiffTokenType.NEW_FILE,
        UDiffTokenType.HUNK_HEADER,
    )

    def __init__(self, tokens: List[UDiffToken], allow_elided_counts: bool = True):
        """
        Initialize the grammar with tokens.

        Args:
            tokens: Line tokens produced by the lexer
            allow_elided_counts: Accept "@@ -5 +5 @@" style ranges, where a missing count means 1
        """
        self.tokens = tokens
        self.pos = 0
        self.current_token: UDiffToken | None = tokens[0] if tokens else None
        self.allow_elided_counts = allow_elided_counts

    def parse(self) -> UDiffNode:
        """
        Parse the tokens into a syntax tree.

        Returns:
            The DIFFS root node

        Raises:
            UDiffSyntaxError: If the tokens do not match the grammar
        """
        root = UDiffNode(UDiffNodeKind.DIFFS, "".join(token.value for token in self.tokens), 0)

        if self.current_token is not None and self.current_token.type != UDiffTokenType.GIT_HEADER:
            root.children.append(self._parse_commit())

            if self.current_token is not None and self.current_token.type != UDiffTokenType.GIT_HEADER:
                self._fail("Only one line may precede the first file diff", "'diff --git' line")

        while self.current_token is not None:
            root.children.append(self._parse_diff())

        return root

    def _parse_commit(self) -> UDiffNode:
        """Parse the optional leading commit line."""
        token = self._advance()
        return UDiffNode(UDiffNodeKind.COMMIT, token.text, token.position)

    def _parse_diff(self) -> UDiffNode:
        """Parse one file diff: a header followed by any number of hunks."""
        start = self.pos
        header, has_markers = self._parse_diff_header()
        diff = UDiffNode(UDiffNodeKind.DIFF, "", header.position, [header])

        while self.current_token is not None and self.current_token.type == UDiffTokenType.HUNK_HEADER:
            if not has_markers:
                self._fail("Hunk found in a file diff without '---'/'+++' lines", "'--- ' and '+++ ' lines before the first hunk")

            diff.children.append(self._parse_hunk())

        if self.current_token is not None and self.current_token.type != UDiffTokenType.GIT_HEADER:
            self._fail("Unexpected line after file diff", "'diff --git' line, '@@' hunk header or end of input")

        diff.value = self._span(start)
        return diff

    def _parse_diff_header(self) -> Tuple[UDiffNode, bool]:
        """
        Parse a file header block.

        Returns:
            Tuple of (DIFF_HEADER node, whether '---'/'+++' marker lines were present)
        """
        start = self.pos
        git_token = self._advance()
        header = UDiffNode(UDiffNodeKind.DIFF_HEADER, "", git_token.position)

        while self.current_token is not None and self.current_token.type not in self._HEADER_EXTRA_STOP:
            token = self._advance()
            header.children.append(UDiffNode(UDiffNodeKind.HEADER_EXTRA, token.value, token.position))

        if self.current_token is not None and self.current_token.type == UDiffTokenType.NEW_FILE:
            self._fail("'+++ ' line without a preceding '--- ' line", "'--- ' line")

        has_markers = self.current_token is not None and self.current_token.type == UDiffTokenType.OLD_FILE
        if has_markers:
            old_token = self._advance()
            if self.current_token is None or self.current_token.type != UDiffTokenType.NEW_FILE:
                self._fail("'--- ' line is not followed by a '+++ ' line", "'+++ ' line")

            new_token = self._advance()
            header.children.append(self._marker_path(UDiffNodeKind.OLD_FILE, old_token))
            header.children.append(self._marker_path(UDiffNodeKind.NEW_FILE, new_token))

        else:
            # No marker lines (empty files, mode changes, binaries): take the paths from the git line
            header.children.extend(self._git_line_paths(git_token))

        header.value = self._span(start)
        return header, has_markers

    def _marker_path(self, kind: UDiffNodeKind, token: UDiffToken) -> UDiffNode:
        """
        Extract the path from a '--- ' or '+++ ' line.

        Anything after a tab (git's marker for paths containing spaces, or a
        timestamp from other diff tools) is not part of the path.
        """
        path = token.text[self.MARKER_PREFIX_LEN:].split('\t', 1)[0].rstrip('\r')
        return UDiffNode(kind, path, token.position + self.MARKER_PREFIX_LEN)

    def _git_line_paths(self, token: UDiffToken) -> List[UDiffNode]:
        """Split the 'a/<path> b/<path>' part of a 'diff --git' line."""
        paths = token.text[self.GIT_PREFIX_LEN:].rstrip('\r')
        position = token.position + self.GIT_PREFIX_LEN

        # When both sides name the same file the separating space is exactly in the middle
        half = len(paths) // 2
        if len(paths) % 2 == 1 and paths[half] == ' ' and paths[2:half] == paths[half + 3:]:
            split = half

        else:
            split = paths.rfind(' b/')
            if split == -1:
                split = paths.find(' ')

        if split <= 0 or split == len(paths) - 1:
            self._fail("Cannot find old and new paths in 'diff --git' line", "'diff --git a/<path> b/<path>'", token)

        return [
            UDiffNode(UDiffNodeKind.OLD_FILE, paths[:split], position),
            UDiffNode(UDiffNodeKind.NEW_FILE, paths[split + 1:], position + split + 1),
        ]

    def _parse_hunk(self) -> UDiffNode:
        """Parse a hunk header and the body that follows it."""
        start = self.pos
        header_token = self._advance()
        expected = "'@@ -<start>,<lines> +<start>,<lines> @@'"

        match = self.HUNK_HEADER_PATTERN.match(header_token.value)
        if match is None:
            self._fail("Invalid hunk header", expected, header_token)

        if not header_token.value.endswith('\n'):
            self._fail("Hunk header is not terminated by a newline", "newline after hunk header", header_token)

        if not self.allow_elided_counts and (match.group(2) is None or match.group(4) is None):
            self._fail("Hunk header omits a line count", expected, header_token)

        position = header_token.position
        hunk = UDiffNode(UDiffNodeKind.HUNK, "", position)
        hunk.children.append(self._range(UDiffNodeKind.OLD_RANGE, match, 1, position))
        hunk.children.append(self._range(UDiffNodeKind.NEW_RANGE, match, 3, position))
        hunk.children.append(UDiffNode(UDiffNodeKind.CONTEXT, header_token.text[match.end():], position + match.end()))

        body_start = self.pos
        self._parse_hunk_body()
        hunk.children.append(UDiffNode(UDiffNodeKind.HUNK_BODY, self._span(body_start), header_token.end))

        hunk.value = self._span(start)
        return hunk

    def _range(self, kind: UDiffNodeKind, match: re.Match, start_group: int, position: int) -> UDiffNode:
        """
        Build a range node from the start group and the optional lines group that follows it.

        Args:
            kind: OLD_RANGE or NEW_RANGE
            match: Hunk header match
            start_group: Regex group holding the start number
            position: Offset of the hunk header line
        """
        lines_group = start_group + 1
        end = match.end(lines_group) if match.group(lines_group) is not None else match.end(start_group)
        node = UDiffNode(kind, match.string[match.start(start_group):end], position + match.start(start_group))
        node.children.append(UDiffNode(UDiffNodeKind.START, match.group(start_group), position + match.start(start_group)))

        if match.group(lines_group) is not None:
            node.children.append(UDiffNode(UDiffNodeKind.LINES, match.group(lines_group), position + match.start(lines_group)))

        return node

    def _parse_hunk_body(self) -> None:
        """
        Consume body lines up to the next hunk header, file diff or non-body line.

        Every body line starts with a marker (' ', '+' or '-') or is a bare
        empty line taken as blank context, so a line that starts a header is
        never hunk content.  A "\\ No newline at end of file" marker is only
        valid straight after a body line.  The line counts in the hunk header
        are not checked against the body.
        """
        after_line = False

        while self.current_token is not None:
            token = self.current_token
            if token.type in (UDiffTokenType.GIT_HEADER, UDiffTokenType.HUNK_HEADER):
                break

            if token.type == UDiffTokenType.NO_NEWLINE:
                if not after_line:
                    break

            elif token.type != UDiffTokenType.EMPTY and token.value[0] not in ' +-':
                break

            self._advance()
            after_line = True

    def _advance(self) -> UDiffToken:
        """Consume the current token and return it."""
        token = self.current_token
        assert token is not None, "Cannot advance past the end of the input"

        self.pos += 1
        self.current_token = self.tokens[self.pos] if self.pos < len(self.tokens) else None
        return token

    def _span(self, start: int) -> str:
        """Return the verbatim text of the tokens from `start` up to the current position."""
        return "".join(token.value for token in self.tokens[start:self.pos])

    def _fail(self, message: str, expected: str, token: UDiffToken | None = None) -> NoReturn:
        """
        Raise a syntax error describing where the input stopped matching.

        Args:
            message: Core error description
            expected: What the grammar expected to find
            token: Offending token; defaults to the current token, or end of input
        """
        if token is None:
            token = self.current_token

        details: Dict[str, Any] = {'expected': expected}
        if token is None:
            details['line_number'] = self.tokens[-1].line + 1 if self.tokens else 1
            details['position'] = self.tokens[-1].end if self.tokens else 0
            details['line'] = None
            raise UDiffSyntaxError(f"{message} (at end of input)", details)

        details['line_number'] = token.line
        details['position'] = token.position
        details['line'] = token.text
        raise UDiffSyntaxError(f"{message} (line {token.line}: {token.text!r})", details)
