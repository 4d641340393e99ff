"""Unified diff parsing."""

import logging

from udiff.udiff_exceptions import UDiffSyntaxError
from udiff.udiff_grammar import UDiffGrammar
from udiff.udiff_lexer import UDiffLexer
from udiff.udiff_types import Diff
from udiff.udiff_walker import UDiffTreeWalker


class UDiffParser:
    """
    Parser for unified diff text as produced by "git diff".

    Parsing runs in three stages: the lexer splits the text into line tokens,
    the grammar recognises the structure and builds a syntax tree, and the
    tree walker converts that tree into Diff, Delta and Hunk objects.  The
    parser holds configuration only, so one instance can be shared between
    threads.
    """

    def __init__(self, allow_elided_counts: bool = True):
        """
        Initialize the parser.

        Args:
            allow_elided_counts: Accept hunk ranges without a line count ("@@ -5 +5 @@"),
                treating the missing count as 1
        """
        self._allow_elided_counts = allow_elided_counts
        self._logger = logging.getLogger("UDiffParser")

    def parse(self, diff_text: str) -> Diff:
        """
        Parse unified diff text.

        Args:
            diff_text: Complete diff text, optionally preceded by a single commit line

        Returns:
            The parsed diff

        Raises:
            UDiffSyntaxError: If the text does not match the unified diff grammar
            UDiffInvariantError: If the grammar produced a tree the walker cannot handle
        """
        tokens = UDiffLexer().lex(diff_text)

        try:
            root = UDiffGrammar(tokens, allow_elided_counts=self._allow_elided_counts).parse()

        except UDiffSyntaxError as e:
            self._logger.warning("Failed to parse diff: %s", e)
            raise

        diff = UDiffTreeWalker().walk(root)

        self._logger.debug(
            "Parsed diff: %d lines, %d file(s), %d hunk(s)%s",
            len(tokens),
            len(diff.deltas),
            sum(len(delta.hunks) for delta in diff.deltas),
            f", commit {diff.commit}" if diff.commit is not None else ""
        )

        return diff
