"""
Bologna Recursive Descent Parser
================================

This module implements the parser for the Bologna expression language.
It pulls tokens from a Lexer through a single token of lookahead
(`current`) and builds the AST defined in bologna.frontend.ast.

Grammar (EBNF)
--------------
top             ::= definition | external | expression | ';'
definition      ::= 'def' prototype expression
external        ::= 'extern' prototype
prototype       ::= IDENTIFIER '(' IDENTIFIER* ')'
expression      ::= primary binoprhs
binoprhs        ::= (BINOP primary)*
primary         ::= identifierexpr | NUMBER | parenexpr
identifierexpr  ::= IDENTIFIER | IDENTIFIER '(' (expression (',' expression)*)? ')'
parenexpr       ::= '(' expression ')'

Binary expressions use precedence climbing driven by a PrecedenceTable
rather than one grammar rule per level. Equal precedence associates to
the left.

Every parse routine expects `current` to hold its first token and leaves
`current` on the first token after what it parsed. On failure it raises
a FrontendError; no partial tree is returned.

Example Usage
-------------
>>> from bologna.frontend.lexer import Lexer
>>> from bologna.frontend.parser import Parser
>>> parser = Parser(Lexer("1 + 2 * 3"))
>>> parser.parse_expression()
BinaryExpr(operator='+', left=NumberExpr(value=1.0), right=BinaryExpr(...))
"""

import logging
from typing import Optional

from bologna.frontend.ast import (
    ANONYMOUS_FUNCTION_NAME,
    BinaryExpr,
    CallExpr,
    Expression,
    Function,
    NumberExpr,
    Prototype,
    VariableExpr,
)
from bologna.frontend.errors import MissingTokenError, UnexpectedTokenError
from bologna.frontend.lexer import Lexer, Token, TokenKind
from bologna.frontend.precedence import (
    DEFAULT_PRECEDENCE,
    NO_PRECEDENCE,
    PrecedenceTable,
)

logger = logging.getLogger(__name__)


class Parser:
    """
    Recursive descent, precedence climbing parser.

    The parser owns the lexer's output one token at a time. All state
    (the lexer cursor and the lookahead token) lives on the instance, so
    independent parsers never interfere.

    Attributes:
        lexer: Token source
        precedence: Binary operator table for this session
        current: The lookahead token, None before the first read
    """

    def __init__(
        self,
        lexer: Lexer,
        precedence: PrecedenceTable = DEFAULT_PRECEDENCE,
    ):
        self.lexer = lexer
        self.precedence = precedence
        self.current: Optional[Token] = None

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def advance(self) -> Token:
        """Read the next token into the lookahead buffer and return it."""
        self.current = self.lexer.next_token()
        return self.current

    def prime(self) -> Token:
        """Fill the lookahead buffer if it is still empty."""
        if self.current is None:
            return self.advance()
        return self.current

    def discard(self) -> None:
        """
        Drop the lookahead token. The next token is read on demand, so
        nothing blocks on the source until it is needed.
        """
        self.current = None

    def _peek(self) -> Token:
        return self.prime()

    def _check_symbol(self, char: str) -> bool:
        return self._peek().is_symbol(char)

    def _missing(self, expected: str, context: Optional[str] = None) -> MissingTokenError:
        token = self._peek()
        return MissingTokenError(
            expected,
            context,
            token.location,
            self._source_line(token),
        )

    def _source_line(self, token: Token) -> Optional[str]:
        """Source text for error context, when the token is on the current line."""
        if token.line == self.lexer.line:
            return self.lexer.current_line_text()
        return None

    def get_precedence(self) -> int:
        """
        Binding strength of the lookahead if it is a binary operator.

        Returns NO_PRECEDENCE for anything else, which is below every
        valid strength.
        """
        token = self._peek()
        if token.kind is not TokenKind.SYMBOL:
            return NO_PRECEDENCE
        return self.precedence.lookup(token.value)

    # =========================================================================
    # Expression Parsing
    # =========================================================================

    def parse_expression(self) -> Expression:
        """expression ::= primary binoprhs"""
        lhs = self.parse_primary()
        return self.parse_bin_op_rhs(0, lhs)

    def parse_primary(self) -> Expression:
        """
        Parse a number, an identifier expression, or a parenthesized
        expression.

        Raises:
            UnexpectedTokenError: If the lookahead cannot start an expression
        """
        token = self._peek()

        if token.kind is TokenKind.IDENTIFIER:
            return self.parse_identifier_expr()

        if token.kind is TokenKind.NUMBER:
            return self._parse_number_expr()

        if token.is_symbol("("):
            return self._parse_paren_expr()

        raise UnexpectedTokenError(
            token.describe(),
            "unknown token when expecting an expression",
            token.location,
            self._source_line(token),
        )

    def _parse_number_expr(self) -> NumberExpr:
        token = self._peek()
        self.advance()
        return NumberExpr(token.value, location=token.location)

    def _parse_paren_expr(self) -> Expression:
        """parenexpr ::= '(' expression ')'"""
        self.advance()  # eat (
        inner = self.parse_expression()

        if not self._check_symbol(")"):
            raise self._missing("')'")
        self.advance()  # eat )

        return inner

    def parse_identifier_expr(self) -> Expression:
        """
        identifierexpr ::= IDENTIFIER
                         | IDENTIFIER '(' (expression (',' expression)*)? ')'
        """
        token = self._peek()
        name = token.value
        self.advance()  # eat identifier

        if not self._check_symbol("("):
            return VariableExpr(name, location=token.location)

        self.advance()  # eat (
        arguments: list[Expression] = []

        if not self._check_symbol(")"):
            while True:
                arguments.append(self.parse_expression())

                if self._check_symbol(")"):
                    break

                if not self._check_symbol(","):
                    raise self._missing("')' or ','", "argument list")
                self.advance()  # eat ,

        self.advance()  # eat )

        return CallExpr(name, tuple(arguments), location=token.location)

    def parse_bin_op_rhs(self, min_precedence: int, lhs: Expression) -> Expression:
        """
        Fold `(BINOP primary)*` onto `lhs` by precedence climbing.

        Operators binding less tightly than `min_precedence` end the
        loop and are left in the lookahead for the caller. When the
        operator after a right operand binds tighter than the current
        one, that operand is extended first by a recursive call.
        """
        while True:
            precedence = self.get_precedence()
            if precedence < min_precedence:
                return lhs

            op_token = self._peek()
            self.advance()  # eat binop

            rhs = self.parse_primary()

            if precedence < self.get_precedence():
                rhs = self.parse_bin_op_rhs(precedence + 1, rhs)

            lhs = BinaryExpr(op_token.value, lhs, rhs, location=op_token.location)

    # =========================================================================
    # Top-Level Constructs
    # =========================================================================

    def parse_prototype(self) -> Prototype:
        """prototype ::= IDENTIFIER '(' IDENTIFIER* ')'"""
        token = self._peek()
        if token.kind is not TokenKind.IDENTIFIER:
            raise self._missing("function name", "prototype")

        name = token.value
        self.advance()

        if not self._check_symbol("("):
            raise self._missing("'('", "prototype")

        parameters: list[str] = []
        while self.advance().kind is TokenKind.IDENTIFIER:
            parameters.append(self.current.value)

        if not self._check_symbol(")"):
            raise self._missing("')'", "prototype")
        self.advance()  # eat )

        return Prototype(name, tuple(parameters), location=token.location)

    def parse_definition(self) -> Function:
        """definition ::= 'def' prototype expression"""
        token = self._peek()
        if token.kind is not TokenKind.DEF:
            raise self._missing("'def'")
        self.advance()  # eat def

        prototype = self.parse_prototype()
        body = self.parse_expression()
        logger.debug("parsed definition of %s", prototype.name)
        return Function(prototype, body, location=token.location)

    def parse_extern(self) -> Prototype:
        """external ::= 'extern' prototype"""
        if self._peek().kind is not TokenKind.EXTERN:
            raise self._missing("'extern'")
        self.advance()  # eat extern

        return self.parse_prototype()

    def parse_top_level_expr(self) -> Function:
        """
        Parse a bare expression as the body of an anonymous, nullary
        function so that it has the same shape as a definition.
        """
        location = self._peek().location
        body = self.parse_expression()
        prototype = Prototype(ANONYMOUS_FUNCTION_NAME, (), location=location)
        return Function(prototype, body, location=location)


def parse_expression_source(
    source: str,
    precedence: PrecedenceTable = DEFAULT_PRECEDENCE,
    filename: str = "<input>",
) -> Expression:
    """
    Parse a complete string as a single expression.

    Raises:
        FrontendError: If the text is not exactly one expression
    """
    parser = Parser(Lexer(source, filename), precedence)
    expression = parser.parse_expression()

    token = parser.prime()
    if token.kind is not TokenKind.EOF:
        raise UnexpectedTokenError(
            token.describe(),
            "unexpected token after expression",
            token.location,
            parser._source_line(token),
        )

    return expression
