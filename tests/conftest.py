"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from confscan.scanner import tokenize
from confscan.tokens import Token, TokenKind


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding EOF)."""

    def _lex(source: str) -> list[Token]:
        tokens = tokenize(source)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.kind != TokenKind.EOF]

    return _lex


def assert_kinds(tokens: list[Token], expected: list[TokenKind]) -> None:
    """Assert that the token kinds match the expected list."""
    actual = [t.kind for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_contiguous(tokens: list[Token]) -> None:
    """Assert that each token starts where the previous one ended."""
    for prev, cur in zip(tokens, tokens[1:]):
        assert prev.end == cur.start, f"gap between {prev} and {cur}"
        assert cur.start <= cur.end

