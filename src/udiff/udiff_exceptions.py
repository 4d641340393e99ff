"""Custom exceptions for unified diff parsing."""

from typing import Any


class UDiffError(Exception):
    """Base exception for unified diff parsing."""

    def __init__(self, message: str, error_details: dict[str, Any] | None = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            error_details: Optional dictionary with detailed error information
        """
        super().__init__(message)
        self.error_details = error_details


class UDiffSyntaxError(UDiffError):
    """Raised when the input does not match the unified diff grammar."""


class UDiffInvariantError(UDiffError):
    """Raised when the tree walker finds a syntax tree the grammar should never produce."""
