"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from polyeq.cursor import TokenCursor
from polyeq.lexer import tokenize
from polyeq.recognizer import Recognizer
from polyeq.tokens import Token, TokenKind


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens."""

    def _lex(source: str) -> list[Token]:
        return tokenize(source)

    return _lex


@pytest.fixture
def cursor_for():
    """Return a helper that builds a TokenCursor over tokenized source."""

    def _cursor(source: str) -> TokenCursor:
        return TokenCursor(tokenize(source))

    return _cursor


@pytest.fixture
def recognizer_for():
    """Return a helper that builds a Recognizer over tokenized source."""

    def _recognizer(source: str, **kwargs) -> Recognizer:
        return Recognizer(tokenize(source), **kwargs)

    return _recognizer


def kinds(tokens: list[Token]) -> list[TokenKind]:
    return [t.kind for t in tokens]


def assert_kinds(tokens: list[Token], expected: list[TokenKind]) -> None:
    """Assert that the token kinds match the expected list."""
    actual = kinds(tokens)
    assert actual == expected, f"Expected {expected}, got {actual}"
