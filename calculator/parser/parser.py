"""
Calculator Pratt Parser Implementation

Implements a top-down operator precedence (Pratt) parser for calculator
input lines. Each line is either an arithmetic expression, a `?quit`
command or empty.

Author: xwest
"""

import logging
from typing import Dict, Iterator, Optional, Tuple

from ..lexer.lexer import Lexer
from ..lexer.tokens import Token, TokenType, SpecialKind, OperationKind
from .ast_nodes import (
    Expression, Binary, Unary, Atom, BinaryOperation, UnaryOperation, ParseTree
)
from .errors import (
    UnrecognizedSpecialError, ExpectedBinaryOpError, ExpectedExprStartError,
    UnclosedParenthesisError, NestingTooDeepError, MAX_NESTING_DEPTH
)

logger = logging.getLogger(__name__)


# Binding powers: higher binds tighter
PREFIX_BINDING_POWER: Dict[UnaryOperation, int] = {
    UnaryOperation.NEGATION: 5,
}

# (left, right) binding powers. right > left makes an operator left associative.
INFIX_BINDING_POWER: Dict[BinaryOperation, Tuple[int, int]] = {
    BinaryOperation.ADDITION: (1, 2),
    BinaryOperation.SUBTRACTION: (1, 2),
    BinaryOperation.MULTIPLICATION: (3, 4),
    BinaryOperation.DIVISION: (3, 4),
}

BINARY_OPERATIONS: Dict[OperationKind, BinaryOperation] = {
    OperationKind.PLUS: BinaryOperation.ADDITION,
    OperationKind.MINUS: BinaryOperation.SUBTRACTION,
    OperationKind.STAR: BinaryOperation.MULTIPLICATION,
    OperationKind.SLASH: BinaryOperation.DIVISION,
}


class Parser:
    """
    Calculator Pratt parser.

    Reads the tokens of one line with a single token of lookahead and
    builds a `ParseTree`. The first error aborts the parse; there is no
    recovery.
    """

    def __init__(self, source: str):
        """
        Initialize parser with an input line.

        Args:
            source: The line to parse
        """
        self.source = source
        self.tokens: Iterator[Token] = Lexer(source).tokens()
        self._lookahead: Optional[Token] = None
        self._has_lookahead = False
        self._depth = 0

    def parse(self) -> ParseTree:
        """
        Parse the line.

        Returns:
            `ParseTree.EMPTY` if there are no tokens, `ParseTree.QUIT` if
            the line starts with `?quit`, an expression tree otherwise

        Raises:
            ParseError: If the line is not a valid expression or command
        """
        first = self._peek()

        if first is None:
            tree = ParseTree.EMPTY
        elif first.type == TokenType.SPECIAL and first.value == SpecialKind.QUIT:
            # Anything after `?quit` is ignored
            tree = ParseTree.QUIT
        elif first.type == TokenType.SPECIAL:
            raise UnrecognizedSpecialError(first.span)
        else:
            tree = ParseTree.from_expression(self._parse_precedence(0))

        logger.debug("parsed %r as %s", self.source, tree.kind.name)
        return tree

    @staticmethod
    def prefix_binding_power(operation: UnaryOperation) -> int:
        """Describes the binding power of unary operators."""
        return PREFIX_BINDING_POWER[operation]

    @staticmethod
    def infix_binding_power(operation: BinaryOperation) -> Tuple[int, int]:
        """Describes the binding power of infix operators."""
        return INFIX_BINDING_POWER[operation]

    def _parse_precedence(self, min_bp: int) -> Expression:
        """
        Parse an expression whose operators bind at least as tight as `min_bp`.

        This is the main parsing function.
        """
        self._depth += 1
        if self._depth > MAX_NESTING_DEPTH:
            token = self._peek()
            raise NestingTooDeepError(token.span if token else None)

        lhs = self._parse_prefix()

        while True:
            token = self._peek()

            # End of input or the closing parenthesis of an enclosing group
            if token is None or token.type == TokenType.CLOSE_PAREN:
                break

            if token.type != TokenType.OPERATION:
                raise ExpectedBinaryOpError(token.span)

            operation = BINARY_OPERATIONS[token.value]
            l_bp, r_bp = self.infix_binding_power(operation)
            if l_bp < min_bp:
                # Leave the operator to the enclosing call
                break

            self._advance()
            rhs = self._parse_precedence(r_bp)
            lhs = Binary(operation, lhs, rhs)

        self._depth -= 1
        return lhs

    def _parse_prefix(self) -> Expression:
        """Parse the tokens that can start an expression."""
        token = self._advance()

        if token is None:
            raise ExpectedExprStartError(None)

        if token.type == TokenType.NUMBER:
            return Atom(token.value)

        if token.is_operation(OperationKind.MINUS):
            operation = UnaryOperation.NEGATION
            operand = self._parse_precedence(self.prefix_binding_power(operation))
            return Unary(operation, operand)

        if token.type == TokenType.OPEN_PAREN:
            return self._parse_grouping()

        raise ExpectedExprStartError(token.span)

    def _parse_grouping(self) -> Expression:
        """Parse a parenthesized expression, the `(` being already consumed."""
        expr = self._parse_precedence(0)

        closing = self._advance()
        if closing is None:
            raise UnclosedParenthesisError(None)
        if closing.type != TokenType.CLOSE_PAREN:
            raise UnclosedParenthesisError(closing.span)

        return expr

    # Utility methods

    def _peek(self) -> Optional[Token]:
        """Return the next token without consuming it, None at end of input."""
        if not self._has_lookahead:
            self._lookahead = next(self.tokens, None)
            self._has_lookahead = True
        return self._lookahead

    def _advance(self) -> Optional[Token]:
        """Consume and return the next token, None at end of input."""
        token = self._peek()
        self._has_lookahead = False
        self._lookahead = None
        return token


def parse_string(source: str) -> ParseTree:
    """
    Convenience function to parse an input line.

    Args:
        source: Input line

    Returns:
        The parse tree of the line

    Raises:
        ParseError: If parsing fails
    """
    return Parser(source).parse()
