"""polyeq lexer — converts one line of equation text into a token list."""

from __future__ import annotations

import logging

from polyeq.errors import LexError
from polyeq.tokens import (
    Identifier,
    Number,
    Position,
    Span,
    Symbol,
    Token,
    is_digit,
    is_ident_char,
    is_ident_start,
)

logger = logging.getLogger(__name__)

_WHITESPACE = frozenset(" \t\r\n")


class Lexer:
    """Tokenize equation source text into Number, Identifier and Symbol tokens."""

    def __init__(self, source: str, filename: str = "<input>") -> None:
        self._source = source
        self._filename = filename
        self._pos = 0
        self._line = 1
        self._col = 1
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Tokenize the full source and return the token list."""
        while self._pos < len(self._source):
            ch = self._peek()

            if ch in _WHITESPACE:
                self._advance()
            elif is_digit(ch):
                self._lex_number()
            elif is_ident_start(ch):
                self._lex_identifier()
            elif not ch.isprintable():
                raise self._error(f"unexpected control character {ch!r}")
            else:
                start = self._current_pos()
                self._advance()
                self._tokens.append(Symbol(ch, ch, self._span_from(start)))

        logger.debug(f"Tokenized {self._filename} into {len(self._tokens)} tokens")
        return self._tokens

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _span_from(self, start: Position) -> Span:
        return Span(start, self._current_pos())

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _error(self, message: str, pos: Position | None = None) -> LexError:
        if pos is None:
            pos = self._current_pos()
        return LexError(message, pos, self._source)

    # ------------------------------------------------------------------
    # Token scanners
    # ------------------------------------------------------------------

    def _lex_digits(self) -> str:
        chars = []
        while self._pos < len(self._source) and is_digit(self._peek()):
            chars.append(self._advance())
        return "".join(chars)

    def _lex_number(self) -> None:
        start = self._current_pos()
        text = self._lex_digits()

        # A '.' only belongs to the number when a digit follows it
        if self._peek() == "." and is_digit(self._peek(1)):
            text += self._advance()
            text += self._lex_digits()
            self._tokens.append(Number(float(text), text, self._span_from(start)))
            return

        try:
            value = int(text)
        except ValueError:
            # int() refuses digit strings beyond sys.get_int_max_str_digits()
            raise self._error("number literal too long", start) from None
        self._tokens.append(Number(value, text, self._span_from(start)))

    def _lex_identifier(self) -> None:
        start = self._current_pos()
        chars = []
        while self._pos < len(self._source) and is_ident_char(self._peek()):
            chars.append(self._advance())
        text = "".join(chars)
        self._tokens.append(Identifier(text, text, self._span_from(start)))


def tokenize(source: str, filename: str = "<input>") -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Lexer(source, filename).tokenize()
