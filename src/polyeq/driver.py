"""Line driver: tokenize, recognize, analyze, and report on equations."""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TextIO

from polyeq.analysis import VariableCount, classify_variables, display_degree, variable_name
from polyeq.cursor import TokenCursor
from polyeq.errors import LexError, RejectedEquation
from polyeq.lexer import tokenize
from polyeq.recognizer import recognize
from polyeq.tokens import Span, Token, describe

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "give an equation: "
DEFAULT_QUIT_MARKER = "!"


@dataclass(frozen=True, slots=True)
class Report:
    """Classification of one input line."""

    source: str
    tokens: tuple[Token, ...]
    valid: bool
    variables: VariableCount
    variable: str | None
    degree: int | float | None  # only set for valid equations in one variable
    stop_span: Span | None  # where recognition stopped, for invalid lines
    reason: str | None = None


def analyze_line(source: str, *, integer_exponents: bool = False) -> Report:
    """Classify one line of text. LexError propagates to the caller."""
    tokens = tuple(tokenize(source))
    result = recognize(tokens, integer_exponents=integer_exponents)

    # Variables are counted over the original tokens, not the consumed cursor
    variables = classify_variables(tokens)
    name = variable_name(tokens)

    if not result.valid:
        stop_tok = tokens[result.stop] if result.stop < len(tokens) else None
        if result.accepted:
            reason = f"unexpected {describe(stop_tok)} after equation"
        elif stop_tok is None:
            reason = "unexpected end of input"
        else:
            reason = f"unexpected {describe(stop_tok)}"
        logger.debug(f"Line {source!r} is not an equation: {reason}")
        return Report(
            source=source,
            tokens=tokens,
            valid=False,
            variables=variables,
            variable=name,
            degree=None,
            stop_span=TokenCursor(tokens).span_at(result.stop),
            reason=reason,
        )

    degree = display_degree(result.max_exponent) if variables is VariableCount.ONE else None
    return Report(
        source=source,
        tokens=tokens,
        valid=True,
        variables=variables,
        variable=name,
        degree=degree,
        stop_span=None,
    )


def rejection(report: Report) -> RejectedEquation:
    """Build the error describing where an invalid line stopped matching."""
    assert not report.valid and report.stop_span is not None
    return RejectedEquation(f"not an equation: {report.reason}", report.stop_span, report.source)


def check_line(source: str, *, integer_exponents: bool = False) -> Report:
    """Like analyze_line, but raise RejectedEquation for lines that are not equations."""
    report = analyze_line(source, integer_exponents=integer_exponents)
    if not report.valid:
        raise rejection(report)
    return report


def format_token_list(tokens: Sequence[Token]) -> str:
    return " ".join(tok.raw for tok in tokens)


def format_report(report: Report) -> str:
    if not report.valid:
        return "this is not an equation"
    if report.variables is VariableCount.ONE:
        return f"this is an equation in 1 variable of degree {report.degree}"
    if report.variables is VariableCount.MANY:
        return "this is an equation, but not in 1 variable"
    return "this is an equation"


def read_loop(
    stdin: TextIO,
    stdout: TextIO,
    *,
    prompt: str = DEFAULT_PROMPT,
    quit_marker: str = DEFAULT_QUIT_MARKER,
    show_tokens: bool = True,
    integer_exponents: bool = False,
    debug: bool = False,
    stderr: TextIO | None = None,
) -> int:
    """Prompt for equations until the quit marker or EOF. Returns lines classified.

    With debug, each token list and the context of each rejected line are
    written to stderr (sys.stderr when not given).
    """
    from polyeq.debug import dump_tokens

    err = stderr if stderr is not None else sys.stderr
    count = 0
    while True:
        stdout.write(prompt)
        stdout.flush()
        line = stdin.readline()
        if not line or line.startswith(quit_marker):
            break
        line = line.rstrip("\r\n")

        try:
            report = analyze_line(line, integer_exponents=integer_exponents)
        except LexError as exc:
            stdout.write(exc.format() + "\n")
            continue

        if debug:
            dump_tokens(report.tokens, file=err)
            if not report.valid:
                err.write(rejection(report).format() + "\n")
        if show_tokens:
            stdout.write(f"the token list is {format_token_list(report.tokens)}\n")
        stdout.write(format_report(report) + "\n")
        count += 1

    stdout.write("good bye\n")
    return count
