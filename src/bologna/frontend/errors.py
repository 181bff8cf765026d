"""
Front-End Error Hierarchy
=========================

Exceptions raised by the tokenizer and the parser. Every parse routine
either succeeds and returns a node, or raises one of these; the
top-level driver is the only place they are caught.

Exception Hierarchy
-------------------
FrontendError
├── LexicalError - the tokenizer could not decode a lexical unit
│   └── InvalidNumberError - digit/dot run that float() rejects
└── ParseSyntaxError - the parser found the wrong token
    ├── MissingTokenError - a required token is absent
    └── UnexpectedTokenError - no production starts with this token

Error Message Format
--------------------
    <stdin>:1:3: error: expected ')'
        (1
          ^
"""

from typing import Optional

from bologna.errors import BolognaError, SourceLocation


# =============================================================================
# Base Front-End Exception
# =============================================================================

class FrontendError(BolognaError):
    """
    Base exception for tokenizer and parser errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The source text of the offending line, when known
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            <stdin>:2:7: error: expected ')' in prototype
                def f(x 1) x
                        ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Lexical Errors
# =============================================================================

class LexicalError(FrontendError):
    """Raised when the tokenizer cannot turn characters into a token."""
    pass


class InvalidNumberError(LexicalError):
    """
    Numeric literal that does not decode as a float.

    The tokenizer takes the maximal run of digits and '.' characters, so
    text such as "1.2.3" or a lone "." reaches float() and is rejected
    here rather than silently decoded as zero.
    """

    def __init__(
        self,
        text: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.text = text
        super().__init__(
            f"invalid numeric literal '{text}'",
            location=location,
            hint="a number may contain at most one '.'",
            source_line=source_line,
        )


# =============================================================================
# Syntax Errors
# =============================================================================

class ParseSyntaxError(FrontendError):
    """
    Syntax error found by the parser.

    Raised when an expected token class (closing parenthesis,
    identifier, comma) is absent at the current position.
    """
    pass


class MissingTokenError(ParseSyntaxError):
    """
    Required token is missing.

    The message names the unmet expectation, e.g. "expected ')'" or
    "expected '(' in prototype".
    """

    def __init__(
        self,
        expected: str,
        context: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.expected = expected
        self.context = context

        message = f"expected {expected}"
        if context:
            message = f"{message} in {context}"

        super().__init__(message, location=location, source_line=source_line)


class UnexpectedTokenError(ParseSyntaxError):
    """
    Token that cannot start the construct being parsed.

    Raised by the primary-expression rule when the lookahead is not a
    number, an identifier, or '('.
    """

    def __init__(
        self,
        found: str,
        message: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        super().__init__(
            message,
            location=location,
            hint=f"found {found}",
            source_line=source_line,
        )
