"""Read position over an immutable token sequence."""

from __future__ import annotations

from collections.abc import Sequence

from polyeq.tokens import Position, Span, Token


class TokenCursor:
    """A movable position into a token sequence.

    The tokens are held as a tuple and never copied or modified again;
    advancing is the only mutation a cursor supports.
    """

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens = tuple(tokens)
        self._pos = 0

    @property
    def tokens(self) -> tuple[Token, ...]:
        return self._tokens

    @property
    def position(self) -> int:
        """Index of the first unconsumed token."""
        return self._pos

    def peek(self) -> Token | None:
        """Return the current token, or None at end of sequence."""
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def advance(self) -> Token:
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    def at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def remaining(self) -> tuple[Token, ...]:
        return self._tokens[self._pos :]

    def rewind(self, position: int) -> None:
        """Move back to a position previously read from ``position``."""
        if not 0 <= position <= self._pos:
            raise ValueError(f"cannot rewind from {self._pos} to {position}")
        self._pos = position

    def current_span(self) -> Span:
        return self.span_at(self._pos)

    def span_at(self, index: int) -> Span:
        """Span of the token at index, or an empty span just past the last one."""
        if index < len(self._tokens):
            return self._tokens[index].span
        if self._tokens:
            end = self._tokens[-1].span.end
            return Span(end, end)
        origin = Position(1, 1, 0)
        return Span(origin, origin)

    def __repr__(self) -> str:
        return f"TokenCursor(position={self._pos}, length={len(self._tokens)})"
