"""Tests for variable classification and degree display."""

from __future__ import annotations

import pytest

from polyeq.analysis import VariableCount, classify_variables, display_degree, variable_name


class TestClassifyVariables:
    def test_zero(self, lex) -> None:
        assert classify_variables(lex("3 + 4 = 7")) is VariableCount.ZERO

    def test_one(self, lex) -> None:
        assert classify_variables(lex("x^2 + 3x = x")) is VariableCount.ONE

    def test_many(self, lex) -> None:
        assert classify_variables(lex("x + y = 3")) is VariableCount.MANY

    def test_many_does_not_count_beyond_two(self, lex) -> None:
        assert classify_variables(lex("a + b + c = d")) is VariableCount.MANY

    def test_spelling_is_case_sensitive(self, lex) -> None:
        assert classify_variables(lex("x = X")) is VariableCount.MANY

    def test_independent_of_grammar(self, lex) -> None:
        # classification scans every token, even of a line that does not parse
        assert classify_variables(lex("x y")) is VariableCount.MANY

    def test_empty(self) -> None:
        assert classify_variables([]) is VariableCount.ZERO


class TestVariableName:
    def test_first_spelling(self, lex) -> None:
        assert variable_name(lex("2 + abc = abc^2")) == "abc"

    def test_none(self, lex) -> None:
        assert variable_name(lex("1 = 1")) is None


class TestDisplayDegree:
    @pytest.mark.parametrize(("accumulated", "degree"), [(0, 1), (1, 1), (3, 3), (2.5, 2.5)])
    def test_mapping(self, accumulated, degree) -> None:
        assert display_degree(accumulated) == degree
