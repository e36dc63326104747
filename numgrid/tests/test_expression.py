"""
Tests for selection expression evaluation and formatting.
"""

import pytest

from ..engine_core.expression import evaluate, evaluate_symbols, format_expression
from ..engine_core.state import Cell, Operator

ADD, SUB, MUL = Operator.ADD, Operator.SUBTRACT, Operator.MULTIPLY


def cells(*symbols):
    return [Cell(row=0, col=i, symbol=s) for i, s in enumerate(symbols)]


class TestEvaluate:
    """Tests for left-to-right evaluation."""

    def test_empty_is_zero(self):
        assert evaluate([]) == 0

    def test_single_number(self):
        assert evaluate(cells(7)) == 7

    def test_left_associative_no_precedence(self):
        """5 + 3 * 2 reads as (5 + 3) * 2."""
        assert evaluate(cells(5, ADD, 3, MUL, 2)) == 16

    def test_subtraction_can_go_negative(self):
        assert evaluate(cells(2, SUB, 5)) == -3
        assert evaluate(cells(2, SUB, 5, MUL, 3)) == -9

    def test_trailing_operator_ignored(self):
        """An operator without its operand does not change the total."""
        assert evaluate(cells(4, MUL)) == 4
        assert evaluate(cells(4, ADD, 1, MUL)) == 5

    def test_must_start_with_number(self):
        with pytest.raises(ValueError):
            evaluate_symbols([ADD, 3])

    def test_must_alternate(self):
        with pytest.raises(ValueError):
            evaluate_symbols([1, 2, 3])


class TestFormatExpression:
    """Tests for bracketed rendering."""

    def test_short_expressions_unbracketed(self):
        assert format_expression(cells(5)) == "5"
        assert format_expression(cells(5, ADD, 3)) == "5+3"

    def test_brackets_show_evaluation_order(self):
        assert format_expression(cells(5, ADD, 3, MUL, 2)) == "(5+3)*2"
        assert format_expression(cells(5, ADD, 3, MUL, 2, SUB, 1)) == "((5+3)*2)-1"

    def test_trailing_operator(self):
        assert format_expression(cells(5, ADD, 3, MUL)) == "(5+3)*"
