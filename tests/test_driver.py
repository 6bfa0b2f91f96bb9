"""Tests for line analysis, reports, and the interactive loop."""

from __future__ import annotations

import io

import pytest

from polyeq import classify
from polyeq.analysis import VariableCount
from polyeq.driver import (
    analyze_line,
    check_line,
    format_report,
    format_token_list,
    read_loop,
    rejection,
)
from polyeq.errors import LexError, RejectedEquation


class TestAnalyzeLine:
    def test_cubic(self) -> None:
        report = analyze_line("x^3+x=5")
        assert report.valid
        assert report.variables is VariableCount.ONE
        assert report.variable == "x"
        assert report.degree == 3

    def test_linear_without_caret(self) -> None:
        report = analyze_line("x+5=0")
        assert report.valid
        assert report.variables is VariableCount.ONE
        assert report.degree == 1

    def test_two_variables(self) -> None:
        report = analyze_line("x+y=3")
        assert report.valid
        assert report.variables is VariableCount.MANY
        assert report.degree is None

    def test_negative_exponent(self) -> None:
        report = analyze_line("x^-2=0")
        assert not report.valid
        assert report.degree is None
        assert report.stop_span is not None

    def test_constants_only(self) -> None:
        report = analyze_line("3+4=7")
        assert report.valid
        assert report.variables is VariableCount.ZERO
        assert report.degree is None

    def test_expression_without_equals_is_not_an_equation(self) -> None:
        assert not analyze_line("x + 1").valid

    def test_trailing_garbage(self) -> None:
        report = analyze_line("x = 1 )")
        assert not report.valid
        assert report.reason == "unexpected ')' after equation"

    def test_consecutive_lines_do_not_share_degree(self) -> None:
        assert analyze_line("x^7 = 1").degree == 7
        assert analyze_line("x = 1").degree == 1

    def test_integer_exponents_flag(self) -> None:
        assert analyze_line("x^1.5 = 2").valid
        assert not analyze_line("x^1.5 = 2", integer_exponents=True).valid

    def test_lex_error_propagates(self) -> None:
        with pytest.raises(LexError):
            analyze_line("x = \x00")

    def test_package_level_classify(self) -> None:
        assert classify("2x^2 = 8").degree == 2

    def test_overlong_number_is_lex_error(self) -> None:
        with pytest.raises(LexError, match="too long"):
            analyze_line("x = " + "1" * 5000)


class TestRejection:
    def test_built_from_report(self) -> None:
        err = rejection(analyze_line("x + 1 = 2 +"))
        assert isinstance(err, RejectedEquation)
        assert err.message == "not an equation: unexpected end of input"
        assert err.source == "x + 1 = 2 +"

    def test_check_line_raises_the_same_error(self) -> None:
        with pytest.raises(RejectedEquation) as exc_info:
            check_line("x = 1 )")
        assert exc_info.value.message == rejection(analyze_line("x = 1 )")).message


class TestFormatting:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("x^3+x=5", "this is an equation in 1 variable of degree 3"),
            ("x+5=0", "this is an equation in 1 variable of degree 1"),
            ("x+y=3", "this is an equation, but not in 1 variable"),
            ("3+4=7", "this is an equation"),
            ("x^-2=0", "this is not an equation"),
        ],
    )
    def test_report_text(self, source: str, expected: str) -> None:
        assert format_report(analyze_line(source)) == expected

    def test_token_list(self, lex) -> None:
        assert format_token_list(lex("3x^2 +1=  0")) == "3 x ^ 2 + 1 = 0"


class TestReadLoop:
    def _run(self, text: str, **kwargs) -> tuple[int, str]:
        out = io.StringIO()
        count = read_loop(io.StringIO(text), out, **kwargs)
        return count, out.getvalue()

    def test_session(self) -> None:
        count, output = self._run("x^2 = 4\nx + y = 1\n!\n")
        assert count == 2
        assert output.count("give an equation: ") == 3
        assert "the token list is x ^ 2 = 4" in output
        assert "this is an equation in 1 variable of degree 2" in output
        assert "this is an equation, but not in 1 variable" in output
        assert output.endswith("good bye\n")

    def test_stops_at_eof(self) -> None:
        count, output = self._run("x = 1\n")
        assert count == 1
        assert output.endswith("good bye\n")

    def test_quit_marker_ends_before_later_lines(self) -> None:
        count, output = self._run("!quit\nx = 1\n")
        assert count == 0
        assert "this is" not in output

    def test_custom_prompt_and_marker(self) -> None:
        count, output = self._run("x = 1\nq\n", prompt="> ", quit_marker="q")
        assert count == 1
        assert output.startswith("> ")

    def test_hide_tokens(self) -> None:
        _, output = self._run("x = 1\n", show_tokens=False)
        assert "token list" not in output

    def test_lex_error_does_not_stop_loop(self) -> None:
        count, output = self._run("x = \x00\nx = 1\n")
        assert count == 1
        assert "error: unexpected control character" in output
        assert "this is an equation in 1 variable of degree 1" in output

    def test_invalid_line(self) -> None:
        _, output = self._run("x^-2 = 0\n")
        assert "this is not an equation" in output

    def test_debug_writes_tokens_and_rejection_to_stderr(self) -> None:
        out = io.StringIO()
        err = io.StringIO()
        read_loop(io.StringIO("x^-2 = 0\nx = 1\n"), out, debug=True, stderr=err)
        assert "Tokens (6)" in err.getvalue()
        assert "Tokens (3)" in err.getvalue()
        assert err.getvalue().count("error: not an equation") == 1
        assert "Tokens" not in out.getvalue()

    def test_no_debug_output_by_default(self) -> None:
        err = io.StringIO()
        read_loop(io.StringIO("x^-2 = 0\n"), io.StringIO(), stderr=err)
        assert err.getvalue() == ""
