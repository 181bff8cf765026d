"""
Bologna Front End
=================

Tokenizer and parser for the Bologna expression language.

Pipeline
--------
    Characters → Lexer → Tokens → Parser → AST → Driver report

Usage
-----
>>> from bologna.frontend import parse_expression_source, format_expression
>>> format_expression(parse_expression_source("1 + 2 * 3"))
'(1 + (2 * 3))'

Language
--------
- def NAME(PARAM*) EXPR      function definition
- extern NAME(PARAM*)        external declaration
- EXPR                       top-level expression
- ;                          separator, ignored
- # ...                      comment to end of line

Binary operators (lowest to highest): < (10), + - (20), * (40).
"""

from bologna.frontend.ast import (
    ANONYMOUS_FUNCTION_NAME,
    ASTPrinter,
    ASTVisitor,
    BinaryExpr,
    CallExpr,
    Expression,
    Function,
    NumberExpr,
    Prototype,
    TopLevelNode,
    VariableExpr,
    format_expression,
    format_number,
)
from bologna.frontend.driver import (
    Driver,
    Session,
    SessionOptions,
    TopLevelKind,
    TopLevelResult,
    parse_source,
)
from bologna.frontend.errors import (
    FrontendError,
    InvalidNumberError,
    LexicalError,
    MissingTokenError,
    ParseSyntaxError,
    UnexpectedTokenError,
)
from bologna.frontend.lexer import Lexer, Token, TokenKind
from bologna.frontend.parser import Parser, parse_expression_source
from bologna.frontend.precedence import (
    DEFAULT_PRECEDENCE,
    NO_PRECEDENCE,
    PrecedenceTable,
)

__all__ = [
    # Lexer
    "Lexer",
    "Token",
    "TokenKind",
    # Precedence
    "PrecedenceTable",
    "DEFAULT_PRECEDENCE",
    "NO_PRECEDENCE",
    # Parser
    "Parser",
    "parse_expression_source",
    # Driver
    "Driver",
    "Session",
    "SessionOptions",
    "TopLevelKind",
    "TopLevelResult",
    "parse_source",
    # AST
    "ANONYMOUS_FUNCTION_NAME",
    "ASTPrinter",
    "ASTVisitor",
    "BinaryExpr",
    "CallExpr",
    "Expression",
    "Function",
    "NumberExpr",
    "Prototype",
    "TopLevelNode",
    "VariableExpr",
    "format_expression",
    "format_number",
    # Errors
    "FrontendError",
    "LexicalError",
    "InvalidNumberError",
    "ParseSyntaxError",
    "MissingTokenError",
    "UnexpectedTokenError",
]
