"""
Expression evaluator for the calculator.

Reduces an expression tree to a float. Arithmetic
follows IEEE-754: dividing by zero gives an infinity or NaN instead of
raising.

Author: xwest
"""

import math
from decimal import Decimal
from typing import List, Optional, Tuple

from ..parser.ast_nodes import (
    ASTVisitor, Expression, Binary, Unary, Atom, BinaryOperation, UnaryOperation
)
from ..parser.parser import parse_string


class QuitRequested(Exception):
    """Raised by `evaluate_string` when the line is a `?quit` command."""


def divide(lhs: float, rhs: float) -> float:
    """Floating point division with IEEE-754 semantics for a zero divisor."""
    if rhs != 0.0:
        return lhs / rhs
    if lhs == 0.0 or math.isnan(lhs):
        return math.nan
    # The sign of the infinity depends on the sign of the zero too
    return math.copysign(math.inf, lhs) * math.copysign(1.0, rhs)


class Evaluator(ASTVisitor):
    """
    Evaluates an expression with an explicit stack.

    Nodes are reduced in post-order, so long operator chains such as
    `1+1+...+1` do not grow the Python call stack.
    """

    def visit(self, node: Expression) -> float:
        values: List[float] = []
        # (node, children already pushed)
        stack: List[Tuple[Expression, bool]] = [(node, False)]

        while stack:
            current, expanded = stack.pop()

            if isinstance(current, Atom):
                values.append(current.value)
            elif not isinstance(current, (Binary, Unary)):
                raise TypeError(f"cannot evaluate {type(current).__name__}")
            elif not expanded:
                stack.append((current, True))
                # Reversed so the leftmost child is reduced first
                for child in reversed(current.children()):
                    stack.append((child, False))
            elif isinstance(current, Binary):
                rhs = values.pop()
                lhs = values.pop()
                values.append(self._apply_binary(current.operation, lhs, rhs))
            else:
                values.append(self._apply_unary(current.operation, values.pop()))

        return values.pop()

    @staticmethod
    def _apply_binary(operation: BinaryOperation, lhs: float, rhs: float) -> float:
        if operation == BinaryOperation.ADDITION:
            return lhs + rhs
        elif operation == BinaryOperation.SUBTRACTION:
            return lhs - rhs
        elif operation == BinaryOperation.MULTIPLICATION:
            return lhs * rhs
        return divide(lhs, rhs)

    @staticmethod
    def _apply_unary(operation: UnaryOperation, operand: float) -> float:
        if operation == UnaryOperation.NEGATION:
            return -operand
        raise TypeError(f"unknown unary operation {operation}")


def evaluate(expr: Expression) -> float:
    """Evaluate an expression tree to a float."""
    return expr.accept(Evaluator())


def evaluate_string(source: str) -> Optional[float]:
    """
    Parse and evaluate one input line.

    Args:
        source: Input line

    Returns:
        The value of the expression, or None for an empty line

    Raises:
        ParseError: If the line does not parse
        QuitRequested: If the line is a `?quit` command
    """
    tree = parse_string(source)
    if tree.is_quit:
        raise QuitRequested()
    if tree.is_empty:
        return None
    return evaluate(tree.expression)


def format_result(value: float) -> str:
    """
    Render a result the way the calculator prints it.

    Positional notation from the shortest round-trip digits, with no
    trailing `.0`: `7.0` is shown as `7` and `1e-07` as `0.0000001`.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return format(Decimal(repr(value)).normalize(), "f")
