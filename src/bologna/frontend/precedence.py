"""
Binary Operator Precedence Table
================================

Maps a single-character binary operator to its binding strength. Lower
numbers bind less tightly. A symbol that is absent from the table is not
a binary operator, which is how ')' ',' ';' and friends end an
expression without any special casing in the parser.

The table is read-only. Configuration builds a new table before a
session starts via with_operators(); nothing changes it mid-session.
"""

import string
from types import MappingProxyType
from typing import Iterator, Mapping

# Returned by lookup() for anything that is not a binary operator
NO_PRECEDENCE = -1

# Characters the lexer folds into identifiers and numbers
OPERAND_CHARS = string.ascii_letters + string.digits


class PrecedenceTable(Mapping[str, int]):
    """
    Immutable operator -> precedence mapping.

    Example:
        >>> table = PrecedenceTable({"+": 20, "*": 40})
        >>> table.lookup("*")
        40
        >>> table.lookup(")")
        -1
    """

    def __init__(self, operators: Mapping[str, int]):
        """
        Args:
            operators: Single-character operator -> positive strength

        Raises:
            ValueError: On a multi-character operator or a strength <= 0
        """
        checked: dict[str, int] = {}
        for symbol, strength in operators.items():
            if len(symbol) != 1:
                raise ValueError(f"operator must be a single character: {symbol!r}")
            if symbol in OPERAND_CHARS or symbol.isspace() or symbol in "().,#;":
                raise ValueError(f"character cannot be used as an operator: {symbol!r}")
            if int(strength) <= 0:
                raise ValueError(f"precedence of {symbol!r} must be positive, got {strength}")
            checked[symbol] = int(strength)
        self._table = MappingProxyType(checked)

    def __getitem__(self, symbol: str) -> int:
        return self._table[symbol]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"PrecedenceTable({dict(self._table)!r})"

    def lookup(self, symbol: str) -> int:
        """Return the strength of `symbol`, or NO_PRECEDENCE."""
        return self._table.get(symbol, NO_PRECEDENCE)

    def with_operators(self, extra: Mapping[str, int]) -> "PrecedenceTable":
        """Return a new table with `extra` added (overriding on clash)."""
        merged = dict(self._table)
        merged.update(extra)
        return PrecedenceTable(merged)


DEFAULT_PRECEDENCE = PrecedenceTable({
    "<": 10,
    "+": 20,
    "-": 20,
    "*": 40,
})


def parse_operator_spec(spec: str) -> tuple[str, int]:
    """
    Parse an "OP=PREC" string, as given on the command line.

    Raises:
        ValueError: If the spec is not of that form
    """
    symbol, sep, strength = spec.rpartition("=")
    if not sep or len(symbol) != 1:
        raise ValueError(f"expected OP=PREC with a single-character OP, got {spec!r}")
    try:
        return symbol, int(strength)
    except ValueError:
        raise ValueError(f"precedence must be an integer, got {strength!r}") from None
