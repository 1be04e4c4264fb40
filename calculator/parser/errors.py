"""
Error handling for the calculator parser.

Every parse error is a user input error anchored to a span of the input
line (or to the end of the line when the span is missing). This module
also renders errors as the two-line message shown to the user: an
explanation, then the input echoed back with the offending part
underlined.

Author: xwest
"""

from dataclasses import dataclass
from typing import Optional

from colorama import Fore, Style

from ..lexer.tokens import Span

END_OF_LINE = "<EOL>"

# Indentation of the echoed source line and of the underline
SOURCE_INDENT = " " * 6

# Deepest nesting of groups and negations the parser accepts
MAX_NESTING_DEPTH = 200


@dataclass
class Diagnostic:
    """A rendered-ready description of a parse error."""
    message: str
    span: Span
    severity: str  # "error"
    code: Optional[str] = None

    def __str__(self) -> str:
        if self.code:
            return f"{self.severity}[{self.code}]: {self.message}"
        return f"{self.severity}: {self.message}"


class ParseError(Exception):
    """
    Exception raised when the parser rejects an input line.

    `span` is the span of the offending token, or None when the parser
    ran out of tokens.
    """

    code: str = "P000"
    expected: str = "a valid expression"

    def __init__(self, span: Optional[Span] = None):
        self.span = span
        super().__init__(f"expected {self.expected}, found token at {END_OF_LINE if span is None else span}")

    def found(self, line: str) -> str:
        """The text the parser found instead of what it expected."""
        if self.span is None:
            return END_OF_LINE
        return self.span.slice(line)

    def message(self, line: str) -> str:
        return f"expected {self.expected}, found `{self.found(line)}`"

    def diagnostic(self, line: str) -> Diagnostic:
        return Diagnostic(
            message=self.message(line),
            span=underline_span(line, self.span),
            severity="error",
            code=self.code,
        )


class UnrecognizedSpecialError(ParseError):
    """The special command after `?` is not one we know."""
    code = "P001"
    expected = "`?quit`"


class ExpectedBinaryOpError(ParseError):
    """Two operands were not separated by a binary operator."""
    code = "P002"
    expected = "one of `+`, `-`, `*`, `/`"


class ExpectedExprStartError(ParseError):
    """An operand was missing where an expression had to start."""
    code = "P003"
    expected = "one of `-`, `(`, or a number"


class UnclosedParenthesisError(ParseError):
    """A `(` was never matched by a `)`."""
    code = "P004"
    expected = "`)`"


class NestingTooDeepError(ParseError):
    """Groups or negations were nested deeper than the parser allows."""
    code = "P005"
    expected = f"at most {MAX_NESTING_DEPTH} nested sub-expressions"


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    cls.code: cls.__doc__
    for cls in (
        UnrecognizedSpecialError,
        ExpectedBinaryOpError,
        ExpectedExprStartError,
        UnclosedParenthesisError,
        NestingTooDeepError,
    )
}


def underline_span(line: str, span: Optional[Span]) -> Span:
    """
    Return `span`, or the span of the last character of `line` if it is None.

    The parser only reports a missing span after consuming at least one
    token, so `line` is not empty in that case.
    """
    if span is not None:
        return span
    if not line:
        return Span(0, 0)
    end = len(line.encode("utf-8"))
    return Span(end - len(line[-1].encode("utf-8")), end)


def format_error(error: ParseError, line: str, color: bool = False) -> str:
    """
    Format a parse error for display.

    Args:
        error: The error raised by the parser
        line: The input line that was parsed
        color: Render with terminal colors

    Returns:
        An explanation line, the echoed input line and an underline of
        the offending text, separated by newlines
    """
    diagnostic = error.diagnostic(line)
    span = diagnostic.span

    # Widths are in characters, spans are in bytes
    padding = " " * len(Span(0, span.start).slice(line))
    underline = "^" * len(span.slice(line))

    if color:
        explanation = f"{Style.BRIGHT}{Fore.RED}error{Fore.RESET}: {diagnostic.message}{Style.RESET_ALL}"
        underline = f"{Style.BRIGHT}{Fore.RED}{underline}{Style.RESET_ALL}"
    else:
        explanation = f"error: {diagnostic.message}"

    source_line = SOURCE_INDENT + line.rstrip("\r\n")
    underline_line = f"{SOURCE_INDENT}{padding}{underline}"

    return "\n".join([explanation, source_line, underline_line])
