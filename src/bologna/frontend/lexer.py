"""
Bologna Lexer (Tokenizer)
=========================

This module implements the pull-based tokenizer for the Bologna
expression language. Characters are read one at a time from a string or
a text stream; each call to next_token() returns the next classified
lexical unit.

Token Categories
----------------
- Keywords: def, extern
- Identifiers: [a-zA-Z][a-zA-Z0-9]*
- Numbers: [0-9.]+ decoded as a float
- Symbols: any other single character (operators, parentheses, commas)
- End of input

Comments
--------
- '#' through end of line

Rules are applied in this order at every call: skip whitespace, skip a
comment, number, identifier/keyword, end of input, single-character
symbol. Once end of input is reached every later call returns the EOF
token again without touching the source.

Example Usage
-------------
>>> from bologna.frontend.lexer import Lexer
>>> lexer = Lexer("12+3*45")
>>> for token in lexer.tokenize():
...     print(token)
Token(NUMBER, 12.0, 1:1)
Token(SYMBOL, '+', 1:3)
Token(NUMBER, 3.0, 1:4)
Token(SYMBOL, '*', 1:5)
Token(NUMBER, 45.0, 1:6)
Token(EOF, 1:8)
"""

import io
import logging
import string
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional, TextIO, Union

from bologna.errors import SourceLocation
from bologna.frontend.ast import format_number
from bologna.frontend.errors import InvalidNumberError

logger = logging.getLogger(__name__)


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """
    Token kinds for the Bologna language.

    Operators and punctuation have no kind of their own: they are all
    SYMBOL tokens whose value is the character itself.
    """

    EOF = auto()            # End of input
    DEF = auto()            # def
    EXTERN = auto()         # extern
    IDENTIFIER = auto()     # Function and variable names
    NUMBER = auto()         # Numeric literal (float value)
    SYMBOL = auto()         # Any other single character
    WHITESPACE = auto()     # Only emitted in introspection mode


KEYWORDS: dict[str, TokenKind] = {
    "def": TokenKind.DEF,
    "extern": TokenKind.EXTERN,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single lexical unit.

    Attributes:
        kind: The TokenKind classification
        value: Identifier text, float value, symbol character,
            whitespace run, or None for EOF and keywords
        line: Line of the first character (1-indexed)
        column: Column of the first character (1-indexed)
        filename: Name of the source
    """
    kind: TokenKind
    value: Union[str, float, None]
    line: int
    column: int
    filename: str

    def __repr__(self) -> str:
        if self.value is None:
            return f"Token({self.kind.name}, {self.line}:{self.column})"
        if isinstance(self.value, float):
            return f"Token({self.kind.name}, {self.value}, {self.line}:{self.column})"
        return f"Token({self.kind.name}, {self.value!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def is_symbol(self, char: str) -> bool:
        """Return True if this is the single-character symbol `char`."""
        return self.kind is TokenKind.SYMBOL and self.value == char

    def describe(self) -> str:
        """Short human-readable form used in error hints."""
        if self.kind is TokenKind.EOF:
            return "end of input"
        if self.kind is TokenKind.SYMBOL:
            return f"'{self.value}'"
        if self.kind in (TokenKind.DEF, TokenKind.EXTERN):
            return f"keyword '{self.kind.name.lower()}'"
        if self.kind is TokenKind.NUMBER:
            return f"number {format_number(self.value)}"
        return f"identifier '{self.value}'"


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes Bologna source text.

    The lexer buffers exactly one character of lookahead. It never reads
    from the source until a token is requested, so constructing a lexer
    over an interactive terminal does not block.

    Usage:
        lexer = Lexer(sys.stdin)
        token = lexer.next_token()

    Attributes:
        filename: Name of the source (for error reporting)
        emit_whitespace: Emit a WHITESPACE token per whitespace run
    """

    IDENT_START = string.ascii_letters
    IDENT_CHARS = string.ascii_letters + string.digits
    NUMBER_CHARS = string.digits + "."
    COMMENT_END = ("\n", "\r", "")

    def __init__(
        self,
        source: Union[str, TextIO],
        filename: str = "<stdin>",
        emit_whitespace: bool = False,
    ):
        """
        Initialize the lexer.

        Args:
            source: Source text, or a stream whose read(1) returns ""
                at end of input
            filename: Name used in token locations
            emit_whitespace: Surface whitespace runs as tokens
        """
        if isinstance(source, str):
            source = io.StringIO(source)
        self._stream = source
        self.filename = filename
        self.emit_whitespace = emit_whitespace

        # Buffered character; None until the first read
        self._char: Optional[str] = None
        self._exhausted = False

        # Position of the buffered character
        self._line = 1
        self._column = 1

        # Text of the current line consumed so far, for error context
        self._line_chars: list[str] = []

    # =========================================================================
    # Public Interface
    # =========================================================================

    def next_token(self) -> Token:
        """
        Return the next token, advancing the read cursor.

        Raises:
            InvalidNumberError: If a digit/dot run does not decode
        """
        while True:
            char = self._peek()

            if char and char.isspace():
                token = self._scan_whitespace()
                if self.emit_whitespace:
                    return token
                continue

            if char == "#":
                self._skip_comment()
                continue

            break

        line, column = self._line, self._column

        if char == "":
            return self._make_token(TokenKind.EOF, None, line, column)

        if char in self.NUMBER_CHARS:
            return self._scan_number(line, column)

        if char in self.IDENT_START:
            return self._scan_identifier(line, column)

        self._advance()
        return self._make_token(TokenKind.SYMBOL, char, line, column)

    def tokenize(self) -> Iterator[Token]:
        """
        Yield tokens up to and including the first EOF token.

        Raises:
            InvalidNumberError: If a digit/dot run does not decode
        """
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.EOF:
                return

    def current_line_text(self) -> str:
        """Return the text of the current line read so far."""
        return "".join(self._line_chars)

    @property
    def line(self) -> int:
        """Line number of the buffered character."""
        return self._line

    # =========================================================================
    # Character Access
    # =========================================================================

    def _peek(self) -> str:
        """Return the buffered character, reading it if needed."""
        if self._char is None:
            self._char = self._read()
        return self._char

    def _read(self) -> str:
        if self._exhausted:
            return ""
        char = self._stream.read(1)
        if char == "":
            self._exhausted = True
        return char

    def _advance(self) -> str:
        """
        Consume the buffered character and buffer the next one.

        At end of input nothing is consumed and "" is returned.
        """
        char = self._peek()
        if char == "":
            return ""

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_chars = []
        else:
            self._column += 1
            self._line_chars.append(char)

        self._char = self._read()
        return char

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _make_token(
        self,
        kind: TokenKind,
        value: Union[str, float, None],
        line: int,
        column: int,
    ) -> Token:
        token = Token(kind=kind, value=value, line=line, column=column, filename=self.filename)
        logger.debug("token %r", token)
        return token

    def _scan_whitespace(self) -> Token:
        line, column = self._line, self._column
        chars = []
        while self._peek() and self._peek().isspace():
            chars.append(self._advance())
        return self._make_token(TokenKind.WHITESPACE, "".join(chars), line, column)

    def _skip_comment(self) -> None:
        """Skip from '#' up to, not including, the line terminator."""
        self._advance()
        while self._peek() not in self.COMMENT_END:
            self._advance()

    def _scan_identifier(self, line: int, column: int) -> Token:
        chars = []
        while self._peek() and self._peek() in self.IDENT_CHARS:
            chars.append(self._advance())

        name = "".join(chars)
        if name in KEYWORDS:
            return self._make_token(KEYWORDS[name], None, line, column)
        return self._make_token(TokenKind.IDENTIFIER, name, line, column)

    def _scan_number(self, line: int, column: int) -> Token:
        """
        Scan a maximal run of digits and '.' and decode it with float().

        The run is consumed before decoding, so a rejected literal does
        not leave the cursor on it.
        """
        chars = []
        while self._peek() and self._peek() in self.NUMBER_CHARS:
            chars.append(self._advance())

        text = "".join(chars)
        try:
            value = float(text)
        except ValueError:
            raise InvalidNumberError(
                text,
                SourceLocation(self.filename, line, column),
                self.current_line_text(),
            ) from None

        return self._make_token(TokenKind.NUMBER, value, line, column)
