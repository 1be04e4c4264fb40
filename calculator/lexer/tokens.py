"""
Token definitions for the calculator lexer.

This module defines the token kinds produced by the lexer:
- Whitespace runs (filtered out before parsing)
- Special `?` commands (only `?quit` is recognized)
- Numeric literals
- Arithmetic operators and parentheses

Spans are byte offsets into the UTF-8 encoding of the input line, so they
stay valid for non-ASCII text.

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any, Optional


class TokenType(Enum):
    """Enumeration of all token kinds the calculator understands."""

    WHITESPACE = auto()            # ' ', '\t', '\n', '\r', ...
    SPECIAL = auto()               # ?quit, ?anything-else
    NUMBER = auto()                # 42, 42., 4.2
    OPERATION = auto()             # + - * /
    OPEN_PAREN = auto()            # (
    CLOSE_PAREN = auto()           # )
    UNRECOGNIZED = auto()          # any other single character


class SpecialKind(Enum):
    """Kinds of `?`-prefixed special commands."""

    QUIT = auto()                  # ?quit
    UNRECOGNIZED = auto()          # ?<anything else>


class OperationKind(Enum):
    """Arithmetic operation symbols."""

    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"


# Single character operators and punctuation
OPERATORS = {
    "+": (TokenType.OPERATION, OperationKind.PLUS),
    "-": (TokenType.OPERATION, OperationKind.MINUS),
    "*": (TokenType.OPERATION, OperationKind.STAR),
    "/": (TokenType.OPERATION, OperationKind.SLASH),
    "(": (TokenType.OPEN_PAREN, None),
    ")": (TokenType.CLOSE_PAREN, None),
}

SPECIAL_COMMANDS = {
    "quit": SpecialKind.QUIT,
}


@dataclass(frozen=True)
class Span:
    """
    A half-open byte range `[start, end)` into the source line.

    Used to slice the text of a token back out of the input and to
    place the underline of an error message.
    """
    start: int
    end: int

    @classmethod
    def from_range(cls, value: range) -> "Span":
        return cls(value.start, value.stop)

    def slice(self, source: str) -> str:
        """Return the text this span covers in `source`."""
        return source.encode("utf-8")[self.start:self.end].decode("utf-8")

    def __len__(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token.

    Carries the token kind, its span in the source line and the
    associated value (a `SpecialKind`, a float or an `OperationKind`
    depending on the kind).
    """
    type: TokenType
    span: Span
    value: Any = None

    def __str__(self) -> str:
        if self.value is not None:
            return f"{self.type.name}({self.value!r}) @ {self.span}"
        return f"{self.type.name} @ {self.span}"

    def is_operation(self, kind: Optional[OperationKind] = None) -> bool:
        """Check if this token is an operator, optionally of a given kind."""
        if self.type != TokenType.OPERATION:
            return False
        return kind is None or self.value == kind
