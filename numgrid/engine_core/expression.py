"""
Expression Evaluator for tile selections.

A selection reads as number, operator, number, operator, ... and is
evaluated strictly left to right with no precedence:

    [5, +, 3, *, 2]  ->  (5 + 3) * 2 = 16

A trailing operator is not yet part of a complete pair and is ignored.
"""

from __future__ import annotations
from typing import Sequence

from .state import Cell, Operator, Symbol


def evaluate_symbols(symbols: Sequence[Symbol]) -> int:
    """
    Evaluate an alternating number/operator sequence.

    Raises ValueError if the sequence does not alternate.
    """
    if not symbols:
        return 0

    first = symbols[0]
    if isinstance(first, Operator):
        raise ValueError("Expression must start with a number")
    total = first

    for i in range(1, len(symbols) - 1, 2):
        operator, operand = symbols[i], symbols[i + 1]
        if not isinstance(operator, Operator) or isinstance(operand, Operator):
            raise ValueError(f"Expected operator then number at position {i}")
        total = operator.apply(total, operand)

    return total


def evaluate(cells: Sequence[Cell]) -> int:
    """Evaluate the expression spelled by a path of cells."""
    return evaluate_symbols([cell.symbol for cell in cells])


def format_expression(cells: Sequence[Cell]) -> str:
    """
    Render a selection with brackets that make the evaluation order explicit.

        [5, +, 3, *, 2]     ->  "(5+3)*2"
        [5, +, 3, *, 2, -]  ->  "((5+3)*2)-"
    """
    return _format([str(cell.symbol) for cell in cells], [cell.is_number for cell in cells])


def _format(symbols: list[str], numeric: list[bool]) -> str:
    if len(symbols) < 4:
        return "".join(symbols)

    split = len(symbols) - 2 if numeric[-1] else len(symbols) - 1
    head = _format(symbols[:split], numeric[:split])
    tail = _format(symbols[split:], numeric[split:])
    return f"({head}){tail}"
