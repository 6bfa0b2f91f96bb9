"""Post-parse analysis: variable classification and degree display."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from polyeq.tokens import Identifier, Token


class VariableCount(Enum):
    ZERO = "0"
    ONE = "1"
    MANY = ">1"


def variable_name(tokens: Iterable[Token]) -> str | None:
    """Return the first identifier spelling in tokens, or None."""
    for tok in tokens:
        if isinstance(tok, Identifier):
            return tok.name
    return None


def classify_variables(tokens: Iterable[Token]) -> VariableCount:
    """Classify tokens as using zero, one, or more than one distinct identifier.

    A single pass that keeps only the first spelling seen; it stops at the
    first identifier that differs from it.
    """
    first: str | None = None
    for tok in tokens:
        if not isinstance(tok, Identifier):
            continue
        if first is None:
            first = tok.name
        elif tok.name != first:
            return VariableCount.MANY
    if first is None:
        return VariableCount.ZERO
    return VariableCount.ONE


def display_degree(max_exponent: int | float) -> int | float:
    """Map the accumulated exponent to a degree; no explicit '^' means degree 1."""
    if max_exponent == 0:
        return 1
    return max_exponent
