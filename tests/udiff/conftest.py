"""Shared fixtures and utilities for unified diff tests."""

from pathlib import Path

import pytest

from udiff.udiff_parser import UDiffParser


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def parser():
    """Create a parser with the default configuration."""
    return UDiffParser()


@pytest.fixture
def strict_parser():
    """Create a parser that rejects hunk ranges without a line count."""
    return UDiffParser(allow_elided_counts=False)


@pytest.fixture
def load_fixture():
    """Factory that reads a patch fixture file verbatim."""
    def _load(name: str) -> str:
        # newline='' keeps any carriage returns exactly as stored
        with open(FIXTURES_DIR / name, 'r', encoding='utf-8', newline='') as f:
            return f.read()

    return _load
