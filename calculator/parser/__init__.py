"""
Calculator Parser Package

Implements a Pratt parser turning calculator input lines into expression
trees, plus the error types and error formatting used when a line is
rejected.

Key Features:
- Top-down operator precedence (Pratt parsing)
- Immutable expression trees with structural equality
- Errors anchored to byte spans of the input line

Author: xwest
"""

from .ast_nodes import *
from .parser import Parser, parse_string
from .errors import (
    ParseError, UnrecognizedSpecialError, ExpectedBinaryOpError,
    ExpectedExprStartError, UnclosedParenthesisError, NestingTooDeepError,
    Diagnostic, format_error
)

__all__ = [
    # Core parser
    "Parser", "parse_string",

    # Syntax tree
    "ASTVisitor", "Expression", "Binary", "Unary", "Atom",
    "BinaryOperation", "UnaryOperation", "ParseTree", "ParseTreeKind",

    # Error handling
    "ParseError", "UnrecognizedSpecialError", "ExpectedBinaryOpError",
    "ExpectedExprStartError", "UnclosedParenthesisError", "NestingTooDeepError",
    "Diagnostic", "format_error",
]
