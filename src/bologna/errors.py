"""
Bologna Error Hierarchy
=======================

This module defines the root of the exception hierarchy for Bologna.
All exceptions inherit from BolognaError, allowing callers to catch all
front-end errors with a single except clause if desired.

Exception Hierarchy
-------------------
BolognaError (base)
└── FrontendError (tokenizer and parser, see bologna.frontend.errors)
    ├── LexicalError - malformed lexical unit
    │   └── InvalidNumberError - numeric text float() rejects
    └── ParseSyntaxError - an expected token class is absent
        ├── MissingTokenError - a required token is missing
        └── UnexpectedTokenError - no production applies

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class BolognaError(Exception):
    """
    Base exception for all Bologna errors.

        try:
            session.parse_all()
        except BolognaError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source text for error reporting.

    Attributes:
        filename: Name of the source (or "<stdin>" for the terminal)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"
