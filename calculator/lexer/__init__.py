"""
Calculator Lexer Package

Implements the tokenizer for calculator input lines.

Key Features:
- Byte-accurate source spans, valid for non-ASCII input
- Lazy token stream with whitespace filtered out
- `?`-prefixed special commands (`?quit`)

Author: xwest
"""

from .tokens import Token, TokenType, Span, SpecialKind, OperationKind
from .lexer import Lexer, Cursor, tokenize_string

__all__ = [
    "Lexer",
    "Cursor",
    "Token",
    "TokenType",
    "Span",
    "SpecialKind",
    "OperationKind",
    "tokenize_string",
]
