"""
Bologna - Expression Language Front End
=======================================

Bologna is a small language of numeric expressions and function
definitions. This package provides its front end: a tokenizer, a
precedence climbing parser producing an AST, and an interactive
top-level loop that parses one construct at a time and reports the
outcome.

Main Components
---------------
- **frontend.lexer**: pull-based tokenizer over a string or text stream
- **frontend.parser**: recursive descent parser
- **frontend.driver**: top-level loop with one-token error recovery
- **cli**: the `bologna` command

Quick Start
-----------
    >>> from bologna import parse_source
    >>> [r.describe() for r in parse_source("extern sin(x)")]
    ['Parsed an extern']

Or from the terminal:
    $ bologna
    Bologna v0.1.0
    > def add(a b) a + b
    Parsed a function definition.
"""

__version__ = "0.1.0"

# =============================================================================
# Public API Exports
# =============================================================================

from bologna.errors import BolognaError, SourceLocation
from bologna.frontend import (
    Lexer,
    Token,
    TokenKind,
    Parser,
    PrecedenceTable,
    DEFAULT_PRECEDENCE,
    Session,
    SessionOptions,
    TopLevelKind,
    TopLevelResult,
    parse_source,
    parse_expression_source,
    FrontendError,
)

__all__ = [
    "__version__",
    "BolognaError",
    "SourceLocation",
    "Lexer",
    "Token",
    "TokenKind",
    "Parser",
    "PrecedenceTable",
    "DEFAULT_PRECEDENCE",
    "Session",
    "SessionOptions",
    "TopLevelKind",
    "TopLevelResult",
    "parse_source",
    "parse_expression_source",
    "FrontendError",
]
