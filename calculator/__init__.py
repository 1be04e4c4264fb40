"""
Calculator Package

A small interactive expression evaluator: each input line is tokenized,
parsed into an arithmetic expression tree with operator precedence, and
evaluated to a float. Rejected lines produce an error message pointing at
the offending part of the input.

Architecture:
    calculator/
    ├── lexer/           # Tokenization with byte spans
    ├── parser/          # Pratt parser, syntax tree, error formatting
    ├── runtime/         # Expression evaluation
    └── repl.py          # Interactive prompt loop (`calc`)

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__email__ = "dev@neuralscript.org"
__license__ = "MIT"

from .lexer import Lexer
from .parser import Parser, ParseError, format_error
from .runtime import evaluate, evaluate_string, format_result

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "ParseError",

    # Pipeline functions
    "evaluate",
    "evaluate_string",
    "format_error",
    "format_result",

    # Version info
    "__version__",
    "__author__",
    "__email__",
    "__license__",
]
