"""
Unified diff parsing with lossless reconstruction.

This package parses "git diff" style unified diffs into immutable Diff,
Delta and Hunk objects that keep enough verbatim text to regenerate the
original diff exactly, or any single hunk as a standalone patch.
"""

from udiff.udiff_exceptions import (
    UDiffError,
    UDiffInvariantError,
    UDiffSyntaxError,
)
from udiff.udiff_grammar import UDiffGrammar
from udiff.udiff_lexer import UDiffLexer
from udiff.udiff_node import UDiffNode, UDiffNodeKind
from udiff.udiff_parser import UDiffParser
from udiff.udiff_token import UDiffToken, UDiffTokenType
from udiff.udiff_types import Delta, Diff, Hunk
from udiff.udiff_walker import UDiffTreeWalker

__all__ = [
    # Exceptions
    'UDiffError',
    'UDiffSyntaxError',
    'UDiffInvariantError',
    # Types
    'Diff',
    'Delta',
    'Hunk',
    # Core classes
    'UDiffParser',
    # Lower-level components
    'UDiffToken',
    'UDiffTokenType',
    'UDiffLexer',
    'UDiffNode',
    'UDiffNodeKind',
    'UDiffGrammar',
    'UDiffTreeWalker',
]
