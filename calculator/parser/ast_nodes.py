"""
Syntax tree node definitions for the calculator.

Expressions form a strict tree: every node owns its children and no node
is shared. Nodes are immutable and compare structurally, so parsing the
same line twice gives equal trees.

Author: xwest
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, List, Optional


class BinaryOperation(Enum):
    """Binary operation."""

    ADDITION = "+"
    SUBTRACTION = "-"
    MULTIPLICATION = "*"
    DIVISION = "/"


class UnaryOperation(Enum):
    """Unary operation."""

    NEGATION = "-"


class ASTVisitor(ABC):
    """Abstract visitor interface for traversing expression trees."""

    @abstractmethod
    def visit(self, node: 'Expression') -> Any:
        """Visit an expression node."""
        pass


class Expression(ABC):
    """Base class for arithmetic expressions, the root of the syntax tree."""

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    @abstractmethod
    def children(self) -> List['Expression']:
        """Get all child nodes."""
        pass


@dataclass(frozen=True)
class Binary(Expression):
    """Binary expression."""
    operation: BinaryOperation
    lhs: Expression
    rhs: Expression

    def children(self) -> List[Expression]:
        return [self.lhs, self.rhs]

    def __str__(self) -> str:
        return f"({self.lhs} {self.operation.value} {self.rhs})"


@dataclass(frozen=True)
class Unary(Expression):
    """Unary expression."""
    operation: UnaryOperation
    operand: Expression

    def children(self) -> List[Expression]:
        return [self.operand]

    def __str__(self) -> str:
        return f"({self.operation.value}{self.operand})"


@dataclass(frozen=True)
class Atom(Expression):
    """Atom, in this case a number."""
    value: float

    def children(self) -> List[Expression]:
        return []

    def __str__(self) -> str:
        return repr(self.value)


class ParseTreeKind(Enum):
    EXPRESSION = auto()    # a parsed arithmetic expression
    QUIT = auto()          # a quit instruction
    EMPTY = auto()         # nothing to parse


@dataclass(frozen=True)
class ParseTree:
    """
    Result of parsing one input line.

    Exactly one of an expression, a quit instruction or an empty line.
    Use `ParseTree.from_expression(...)`, `ParseTree.QUIT` and
    `ParseTree.EMPTY` rather than building instances directly.
    """
    kind: ParseTreeKind
    expression: Optional[Expression] = None

    @classmethod
    def from_expression(cls, expression: Expression) -> 'ParseTree':
        return cls(ParseTreeKind.EXPRESSION, expression)

    @property
    def is_expression(self) -> bool:
        return self.kind == ParseTreeKind.EXPRESSION

    @property
    def is_quit(self) -> bool:
        return self.kind == ParseTreeKind.QUIT

    @property
    def is_empty(self) -> bool:
        return self.kind == ParseTreeKind.EMPTY


ParseTree.QUIT = ParseTree(ParseTreeKind.QUIT)
ParseTree.EMPTY = ParseTree(ParseTreeKind.EMPTY)
