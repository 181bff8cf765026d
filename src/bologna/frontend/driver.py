"""
Bologna Top-Level Driver
========================

This module runs the top-level loop over a token stream: it looks at the
lookahead, picks the construct to parse, and reports one result per
construct until end of input.

    top ::= definition | external | expression | ';'

Error Recovery
--------------
The driver is the only place front-end errors are caught. After a failed
construct it drops exactly one token and carries on, so one malformed
construct never stalls or desynchronizes the session. Nothing is retried
and no error ends the loop.

Usage
-----
>>> from bologna.frontend.driver import parse_source
>>> for result in parse_source("def f(x) x * 2 f(4)"):
...     print(result.describe())
Parsed a function definition.
Parsed a top-level expr
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, Optional, TextIO, Union

from bologna.frontend.ast import TopLevelNode
from bologna.frontend.errors import FrontendError
from bologna.frontend.lexer import Lexer, TokenKind
from bologna.frontend.parser import Parser
from bologna.frontend.precedence import DEFAULT_PRECEDENCE, PrecedenceTable

logger = logging.getLogger(__name__)

# Bare statement separator, skipped at top level
SEPARATOR = ";"


# =============================================================================
# Results
# =============================================================================

class TopLevelKind(Enum):
    """The four forms the driver recognizes, with their report text."""

    DEFINITION = "Parsed a function definition."
    EXTERN = "Parsed an extern"
    TOP_LEVEL_EXPRESSION = "Parsed a top-level expr"
    SEPARATOR = "Parsed a separator"


@dataclass(frozen=True)
class TopLevelResult:
    """
    Outcome of one top-level construct.

    Exactly one of `node` and `error` is set, except for separators,
    which carry neither.

    Attributes:
        kind: The form that was parsed or attempted. None when the
            failure happened before a form could be chosen (a bad
            numeric literal at the start of a construct).
        node: The parsed Function or Prototype
        error: The front-end error that ended the construct
    """
    kind: Optional[TopLevelKind]
    node: Optional[TopLevelNode] = None
    error: Optional[FrontendError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def describe(self) -> str:
        """The report line for this result."""
        if self.error is not None:
            return str(self.error)
        return self.kind.value


@dataclass
class DriverStats:
    """Counters kept across one run."""
    parsed: int = 0
    failed: int = 0
    separators: int = 0


# =============================================================================
# Driver
# =============================================================================

class Driver:
    """
    Top-level read loop over a Parser.

    Attributes:
        parser: The parser holding the token stream
        on_prompt: Called before each construct is read, if given
        stats: Parsed/failed counters
    """

    def __init__(
        self,
        parser: Parser,
        on_prompt: Optional[Callable[[], None]] = None,
    ):
        self.parser = parser
        self.on_prompt = on_prompt
        self.stats = DriverStats()

    def run(self) -> Iterator[TopLevelResult]:
        """
        Yield one result per top-level construct until end of input.

        Never raises a FrontendError.
        """
        while True:
            if self.on_prompt is not None:
                self.on_prompt()

            try:
                token = self.parser.prime()
            except FrontendError as error:
                # The malformed literal is already consumed
                yield self._failed(None, error)
                continue

            if token.kind is TokenKind.EOF:
                logger.debug(
                    "end of input: %d parsed, %d failed",
                    self.stats.parsed,
                    self.stats.failed,
                )
                return

            if token.is_symbol(SEPARATOR):
                self.parser.discard()
                self.stats.separators += 1
                yield TopLevelResult(TopLevelKind.SEPARATOR)
                continue

            if token.kind is TokenKind.DEF:
                kind, parse = TopLevelKind.DEFINITION, self.parser.parse_definition
            elif token.kind is TokenKind.EXTERN:
                kind, parse = TopLevelKind.EXTERN, self.parser.parse_extern
            else:
                kind, parse = TopLevelKind.TOP_LEVEL_EXPRESSION, self.parser.parse_top_level_expr

            try:
                node = parse()
            except FrontendError as error:
                # Skip one token for error recovery
                self.parser.discard()
                yield self._failed(kind, error)
                continue

            self.stats.parsed += 1
            logger.debug("%s: %r", kind.name, node)
            yield TopLevelResult(kind, node=node)

    def _failed(self, kind: Optional[TopLevelKind], error: FrontendError) -> TopLevelResult:
        self.stats.failed += 1
        logger.debug("construct failed: %s", error.message)
        return TopLevelResult(kind, error=error)


# =============================================================================
# Session Configuration
# =============================================================================

@dataclass
class SessionOptions:
    """
    Configuration for one parsing session.

    Attributes:
        prompt: Text shown before each construct in interactive use
        filename: Name used in error locations
        extra_operators: Additional binary operators, OP -> precedence,
            installed on top of the default table before parsing starts
    """
    prompt: str = "> "
    filename: str = "<stdin>"
    extra_operators: dict[str, int] = field(default_factory=dict)

    def precedence_table(self) -> PrecedenceTable:
        if not self.extra_operators:
            return DEFAULT_PRECEDENCE
        return DEFAULT_PRECEDENCE.with_operators(self.extra_operators)


class Session:
    """
    One lexer, parser, and driver over a single source.

    Usage:
        session = Session(sys.stdin, SessionOptions())
        for result in session.run():
            print(result.describe())
    """

    def __init__(
        self,
        source: Union[str, TextIO],
        options: Optional[SessionOptions] = None,
        on_prompt: Optional[Callable[[], None]] = None,
    ):
        self.options = options or SessionOptions()
        self.lexer = Lexer(source, self.options.filename)
        self.parser = Parser(self.lexer, self.options.precedence_table())
        self.driver = Driver(self.parser, on_prompt)

    def run(self) -> Iterator[TopLevelResult]:
        return self.driver.run()

    @property
    def stats(self) -> DriverStats:
        return self.driver.stats


def parse_source(
    source: str,
    options: Optional[SessionOptions] = None,
) -> list[TopLevelResult]:
    """
    Run the driver over a complete string and collect every result,
    separators included.
    """
    return list(Session(source, options).run())
