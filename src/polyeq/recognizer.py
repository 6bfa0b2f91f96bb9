"""Recursive descent recognizer for single-variable polynomial equations.

Grammar::

    <equation>   ::= <expression> '=' <expression>
    <expression> ::= [ '-' ] <term> { ( '+' | '-' ) <term> }
    <term>       ::= <number> [ <identifier> <exponent> ] | <identifier> <exponent>
    <exponent>   ::= [ '^' <number> ]

Every ``match_*`` function either consumes the tokens it recognized and
returns True, or returns False with the cursor exactly where it started.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from polyeq.cursor import TokenCursor
from polyeq.tokens import Identifier, Number, Symbol, Token

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Primitive matchers
# ----------------------------------------------------------------------


def match_number(cursor: TokenCursor) -> bool:
    if isinstance(cursor.peek(), Number):
        cursor.advance()
        return True
    return False


def match_identifier(cursor: TokenCursor) -> bool:
    if isinstance(cursor.peek(), Identifier):
        cursor.advance()
        return True
    return False


def match_symbol(cursor: TokenCursor, char: str) -> bool:
    tok = cursor.peek()
    if isinstance(tok, Symbol) and tok.char == char:
        cursor.advance()
        return True
    return False


# ----------------------------------------------------------------------
# Accumulated analysis state
# ----------------------------------------------------------------------


@dataclass(slots=True)
class ExponentTracker:
    """Largest exponent seen during one parse attempt. Only ever grows."""

    biggest: int | float = 0

    def observe(self, value: int | float) -> None:
        if value > self.biggest:
            self.biggest = value

    def reset(self) -> None:
        self.biggest = 0


# ----------------------------------------------------------------------
# Grammar matchers
# ----------------------------------------------------------------------


class Recognizer:
    """Match the equation grammar over one cursor with its own exponent tracker.

    ``integer_exponents`` rejects exponent tokens whose value is not
    integral (``x^2.5``); otherwise such values are recorded as carried.
    """

    def __init__(
        self,
        tokens: Sequence[Token] | TokenCursor,
        *,
        integer_exponents: bool = False,
    ) -> None:
        self.cursor = tokens if isinstance(tokens, TokenCursor) else TokenCursor(tokens)
        self._integer_exponents = integer_exponents
        self._tracker = ExponentTracker()
        self._furthest = self.cursor.position

    def match_exponent(self) -> bool:
        """An absent exponent clause is a successful zero-token match."""
        start = self.cursor.position
        if not match_symbol(self.cursor, "^"):
            return True

        # x^-2 lands here: the token after '^' is the symbol '-'
        tok = self.cursor.peek()
        if not isinstance(tok, Number) or not self._exponent_allowed(tok.value):
            return self._reject("exponent", start)

        match_number(self.cursor)
        value = tok.value
        if self._integer_exponents:
            value = int(value)
        self._tracker.observe(value)
        return True

    def match_term(self) -> bool:
        start = self.cursor.position
        if match_number(self.cursor):
            if match_identifier(self.cursor):
                return self.match_exponent() or self._reject("term", start)
            return True
        if match_identifier(self.cursor):
            return self.match_exponent() or self._reject("term", start)
        return False

    def match_expression(self) -> bool:
        start = self.cursor.position
        match_symbol(self.cursor, "-")
        if not self.match_term():
            return self._reject("expression", start)

        while match_symbol(self.cursor, "+") or match_symbol(self.cursor, "-"):
            if not self.match_term():
                return self._reject("expression", start)

        # no '+' or '-' follows, so the expression ends here
        return True

    def match_equation(self) -> bool:
        start = self.cursor.position
        if (
            self.match_expression()
            and match_symbol(self.cursor, "=")
            and self.match_expression()
        ):
            logger.debug(f"Accepted equation over tokens {start}..{self.cursor.position}")
            return True
        return self._reject("equation", start)

    def is_fully_consumed(self) -> bool:
        return self.cursor.at_end()

    def max_exponent_seen(self) -> int | float:
        return self._tracker.biggest

    def reset_max_exponent(self) -> None:
        self._tracker.reset()

    @property
    def furthest(self) -> int:
        """Furthest token index any rejected match reached before rewinding."""
        return max(self._furthest, self.cursor.position)

    def _exponent_allowed(self, value: int | float) -> bool:
        if self._integer_exponents and isinstance(value, float):
            return value.is_integer()
        return True

    def _reject(self, rule: str, start: int) -> bool:
        self._furthest = max(self._furthest, self.cursor.position)
        logger.debug(f"Rejected {rule} at token {self.cursor.position}, rewinding to {start}")
        self.cursor.rewind(start)
        return False


@dataclass(frozen=True, slots=True)
class Recognition:
    """Outcome of recognizing one token list as an equation."""

    accepted: bool
    fully_consumed: bool
    max_exponent: int | float
    stop: int  # first unconsumed token, or where a rejected match gave up

    @property
    def valid(self) -> bool:
        return self.accepted and self.fully_consumed


def recognize(tokens: Sequence[Token], *, integer_exponents: bool = False) -> Recognition:
    """Run a fresh recognizer over tokens; acceptance requires full consumption."""
    rec = Recognizer(tokens, integer_exponents=integer_exponents)
    accepted = rec.match_equation()
    stop = rec.cursor.position if accepted else rec.furthest
    return Recognition(
        accepted=accepted,
        fully_consumed=rec.is_fully_consumed(),
        max_exponent=rec.max_exponent_seen(),
        stop=stop,
    )
