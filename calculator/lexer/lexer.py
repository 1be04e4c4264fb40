"""
Calculator lexer - turns an input line into tokens

The lexer walks the line one character at a time through a `Cursor`
that keeps the byte position, so every token gets a byte span into the
original line. Whitespace is tokenized like anything else and filtered
out afterwards.

xwest
"""

import logging
from typing import Callable, Iterator, List, Optional

from .tokens import Token, TokenType, Span, SpecialKind, OPERATORS, SPECIAL_COMMANDS

logger = logging.getLogger(__name__)


class Cursor:
    """
    A cursor over the input characters.

    Records the byte position of the next character so tokens can be
    given spans that index the UTF-8 encoded line.
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0        # character index
        self.byte_pos = 0   # byte offset of `pos`

    def peek(self) -> Optional[str]:
        """Peek at the next character without advancing."""
        if self.pos < len(self.source):
            return self.source[self.pos]
        return None

    def advance(self) -> Optional[str]:
        """Consume the next character and return it."""
        char = self.peek()
        if char is not None:
            self.pos += 1
            self.byte_pos += len(char.encode("utf-8"))
        return char

    def skip_while(self, predicate: Callable[[str], bool]):
        """Advance while there are characters left and `predicate` holds."""
        while True:
            char = self.peek()
            if char is None or not predicate(char):
                break
            self.advance()


def is_identifier_continue(char: str) -> bool:
    """Check if character can continue an identifier."""
    # A letter in front makes `isidentifier` test XID_Continue alone
    return ("a" + char).isidentifier()


def is_whitespace(char: str) -> bool:
    """Check for Unicode White_Space. `str.isspace` also accepts U+001C..U+001F."""
    return char.isspace() and not '\x1c' <= char <= '\x1f'


def is_ascii_digit(char: str) -> bool:
    return '0' <= char <= '9'


class Lexer:
    """
    Calculator lexical analyzer.

    Converts an input line into a lazy stream of tokens. A lexer is
    single use: to tokenize the same text again, create a new one.
    """

    def __init__(self, source: str):
        """
        Initialize the lexer with an input line.

        Args:
            source: The line to tokenize
        """
        self.source = source
        self.cursor = Cursor(source)

    def tokens(self) -> Iterator[Token]:
        """
        Lazily produce the tokens of the line, skipping whitespace.

        Returns:
            Iterator over the non-whitespace tokens
        """
        return (token for token in self.raw_tokens() if token.type != TokenType.WHITESPACE)

    def raw_tokens(self) -> Iterator[Token]:
        """Produce every token, whitespace included, until the input runs out."""
        while True:
            token = self._next_token()
            if token is None:
                return
            logger.debug("token %s", token)
            yield token

    def tokenize(self) -> List[Token]:
        """Tokenize the whole line into a list (whitespace excluded)."""
        return list(self.tokens())

    def _whitespace(self):
        self.cursor.skip_while(is_whitespace)

    def _identifier(self):
        self.cursor.skip_while(is_identifier_continue)

    def _number(self):
        """Advance over a digit run with an optional fractional part."""
        self.cursor.skip_while(is_ascii_digit)
        if self.cursor.peek() == '.':
            self.cursor.advance()
            # The fractional digits may be missing: `123.` is a number
            self.cursor.skip_while(is_ascii_digit)

    def _text_since(self, start: int) -> str:
        return Span(start, self.cursor.byte_pos).slice(self.source)

    def _next_token(self) -> Optional[Token]:
        """Advance the cursor over exactly one token and return it."""
        start = self.cursor.byte_pos
        char = self.cursor.advance()

        if char is None:
            return None

        value = None
        if is_whitespace(char):
            self._whitespace()
            token_type = TokenType.WHITESPACE

        elif char == '?':
            self._identifier()
            # The `?` itself is not part of the command name
            name = self._text_since(start + 1)
            token_type = TokenType.SPECIAL
            value = SPECIAL_COMMANDS.get(name, SpecialKind.UNRECOGNIZED)

        elif is_ascii_digit(char):
            self._number()
            token_type = TokenType.NUMBER
            value = float(self._text_since(start))

        elif char in OPERATORS:
            token_type, value = OPERATORS[char]

        else:
            token_type = TokenType.UNRECOGNIZED

        return Token(token_type, Span(start, self.cursor.byte_pos), value)


def tokenize_string(source: str) -> List[Token]:
    """
    Convenience function to tokenize an input line.

    Args:
        source: Input line

    Returns:
        List of tokens, whitespace excluded
    """
    return Lexer(source).tokenize()
