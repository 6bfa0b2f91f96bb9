"""Token kinds, source positions, and the tagged token variant."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    NUMBER = auto()  # 42, 2.5
    IDENTIFIER = auto()  # letter (letter | digit)*
    SYMBOL = auto()  # any other single printable character


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Number:
    """A numeric literal. Integer text yields an int, decimal text a float."""

    value: int | float
    raw: str
    span: Span

    @property
    def kind(self) -> TokenKind:
        return TokenKind.NUMBER


@dataclass(frozen=True, slots=True)
class Identifier:
    name: str
    raw: str
    span: Span

    @property
    def kind(self) -> TokenKind:
        return TokenKind.IDENTIFIER


@dataclass(frozen=True, slots=True)
class Symbol:
    """A single-character operator or punctuation token."""

    char: str
    raw: str
    span: Span

    @property
    def kind(self) -> TokenKind:
        return TokenKind.SYMBOL


Token = Number | Identifier | Symbol


def describe(token: Token) -> str:
    """Return the short display form of a token: ``3``, ``x`` or ``'+'``."""
    if isinstance(token, Number):
        return str(token.value)
    if isinstance(token, Identifier):
        return token.name
    return f"'{token.char}'"


_DIGITS = frozenset("0123456789")
_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return ch in _DIGITS


def is_ident_start(ch: str) -> bool:
    """Return True if ch may start an identifier."""
    return ch in _LETTERS


def is_ident_char(ch: str) -> bool:
    """Return True if ch may continue an identifier."""
    return ch in _LETTERS or ch in _DIGITS
