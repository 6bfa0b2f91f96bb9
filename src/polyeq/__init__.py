"""Recognizer for single-variable polynomial equations."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from polyeq.driver import Report

__version__ = "0.1.0"


def classify(source: str, integer_exponents: bool = False) -> Report:
    """Tokenize, recognize, and analyze one line of equation text."""
    from polyeq.driver import analyze_line

    return analyze_line(source, integer_exponents=integer_exponents)
