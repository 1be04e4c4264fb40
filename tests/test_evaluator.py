"""
Test suite for the calculator runtime.

Tests cover:
- Evaluation of parsed expressions
- IEEE-754 behavior of division by zero
- Result formatting

Author: xwest
"""

import math
import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from calculator.parser.ast_nodes import Binary, Unary, Atom, BinaryOperation, UnaryOperation
from calculator.parser.errors import ExpectedExprStartError
from calculator.parser.parser import parse_string
from calculator.runtime.evaluator import (
    Evaluator, QuitRequested, divide, evaluate, evaluate_string, format_result
)


class TestEvaluate(unittest.TestCase):
    """Test cases for expression evaluation."""

    def _eval(self, source: str) -> float:
        return evaluate(parse_string(source).expression)

    def test_atom(self):
        self.assertEqual(evaluate(Atom(2.5)), 2.5)

    def test_tree(self):
        expr = Binary(
            BinaryOperation.SUBTRACTION,
            Unary(UnaryOperation.NEGATION, Atom(1.0)),
            Binary(BinaryOperation.DIVISION, Atom(6.0), Atom(4.0)),
        )
        self.assertEqual(evaluate(expr), -2.5)

    def test_precedence(self):
        self.assertEqual(self._eval("1+2*3"), 7.0)
        self.assertEqual(self._eval("(1+2)*3"), 9.0)

    def test_associativity(self):
        self.assertEqual(self._eval("8/4/2"), 1.0)
        self.assertEqual(self._eval("10-4-3"), 3.0)

    def test_unary(self):
        self.assertEqual(self._eval("-2*3"), -6.0)
        self.assertEqual(self._eval("-(2+3)"), -5.0)
        self.assertEqual(self._eval("--4"), 4.0)

    def test_decimals(self):
        self.assertEqual(self._eval("1.5 * 4."), 6.0)
        self.assertEqual(self._eval("0.1 + 0.2"), 0.1 + 0.2)

    def test_division_by_zero(self):
        self.assertEqual(self._eval("1/0"), math.inf)
        self.assertEqual(self._eval("-1/0"), -math.inf)
        self.assertEqual(self._eval("1/-0"), -math.inf)
        self.assertTrue(math.isnan(self._eval("0/0")))

    def test_divide(self):
        self.assertEqual(divide(3.0, 2.0), 1.5)
        self.assertEqual(divide(-3.0, -0.0), math.inf)
        self.assertTrue(math.isnan(divide(math.nan, 0.0)))

    def test_same_result_twice(self):
        source = "-(1.5 + 2) * 3 / 4 - 5"
        self.assertEqual(self._eval(source), self._eval(source))

    def test_deep_trees(self):
        expr = Atom(1.0)
        for _ in range(10000):
            expr = Unary(UnaryOperation.NEGATION, expr)
        self.assertEqual(evaluate(expr), 1.0)

        expr = Atom(0.0)
        for i in range(10000):
            expr = Binary(BinaryOperation.SUBTRACTION, Atom(float(i)), expr)
        self.assertEqual(evaluate(expr), 5000.0)

    def test_long_chain(self):
        self.assertEqual(self._eval("1+" * 4999 + "1"), 5000.0)
        self.assertEqual(self._eval("2*" * 10 + "1" + "/2" * 10), 1.0)

    def test_unknown_node(self):
        with self.assertRaises(TypeError):
            Evaluator().visit(object())


class TestEvaluateString(unittest.TestCase):
    """Test cases for evaluating whole input lines."""

    def test_expression(self):
        self.assertEqual(evaluate_string("2 * (3 + 4)\n"), 14.0)

    def test_empty(self):
        self.assertIsNone(evaluate_string("   "))

    def test_quit(self):
        with self.assertRaises(QuitRequested):
            evaluate_string("?quit")

    def test_parse_error(self):
        with self.assertRaises(ExpectedExprStartError):
            evaluate_string("1 +")


class TestFormatResult(unittest.TestCase):
    """Test cases for result formatting."""

    def test_integral(self):
        self.assertEqual(format_result(7.0), "7")
        self.assertEqual(format_result(100.0), "100")
        self.assertEqual(format_result(-5.0), "-5")

    def test_fraction(self):
        self.assertEqual(format_result(2.5), "2.5")
        self.assertEqual(format_result(0.1 + 0.2), "0.30000000000000004")

    def test_positional_notation(self):
        self.assertEqual(format_result(1e-7), "0.0000001")
        self.assertEqual(format_result(1e21), "1000000000000000000000")

    def test_negative_zero(self):
        self.assertEqual(format_result(-0.0), "-0")

    def test_non_finite(self):
        self.assertEqual(format_result(math.inf), "inf")
        self.assertEqual(format_result(-math.inf), "-inf")
        self.assertEqual(format_result(math.nan), "NaN")


if __name__ == "__main__":
    unittest.main()
