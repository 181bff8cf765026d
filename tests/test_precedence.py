# =============================================================================
# test_precedence.py - Precedence Table Unit Tests
# =============================================================================

import pytest
from bologna.frontend.ast import BinaryExpr, VariableExpr
from bologna.frontend.parser import parse_expression_source
from bologna.frontend.precedence import (
    DEFAULT_PRECEDENCE,
    NO_PRECEDENCE,
    PrecedenceTable,
    parse_operator_spec,
)


class TestDefaultTable:
    """Test the built-in operator table."""

    def test_default_values(self):
        assert dict(DEFAULT_PRECEDENCE) == {"<": 10, "+": 20, "-": 20, "*": 40}

    def test_lookup_missing_symbol(self):
        assert DEFAULT_PRECEDENCE.lookup(")") == NO_PRECEDENCE
        assert DEFAULT_PRECEDENCE.lookup(";") == NO_PRECEDENCE

    def test_sentinel_below_all_strengths(self):
        assert all(NO_PRECEDENCE < value for value in DEFAULT_PRECEDENCE.values())

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_PRECEDENCE["/"] = 40


class TestCustomTable:
    """Test building tables."""

    def test_with_operators_returns_new_table(self):
        table = DEFAULT_PRECEDENCE.with_operators({"/": 40})
        assert table.lookup("/") == 40
        assert DEFAULT_PRECEDENCE.lookup("/") == NO_PRECEDENCE

    def test_with_operators_overrides(self):
        table = DEFAULT_PRECEDENCE.with_operators({"<": 5})
        assert table.lookup("<") == 5

    @pytest.mark.parametrize("operators", [
        {"ab": 10},
        {"/": 0},
        {"/": -3},
        {"a": 10},
        {"(": 10},
        {",": 10},
    ])
    def test_invalid_entries(self, operators):
        with pytest.raises(ValueError):
            PrecedenceTable(operators)


class TestOperatorSpec:
    """Test OP=PREC parsing."""

    def test_simple(self):
        assert parse_operator_spec("/=40") == ("/", 40)

    def test_equals_operator(self):
        assert parse_operator_spec("==5") == ("=", 5)

    @pytest.mark.parametrize("spec", ["/", "/=", "/=abc", "//=4", "=4"])
    def test_invalid(self, spec):
        with pytest.raises(ValueError):
            parse_operator_spec(spec)


class TestOperatorCharacters:
    """Test agreement between operator characters and the lexer."""

    def test_non_ascii_letter_is_an_operator(self):
        """The lexer emits 'é' as a symbol, so the table accepts it."""
        table = DEFAULT_PRECEDENCE.with_operators({"é": 30})
        assert table.lookup("é") == 30

    def test_non_ascii_operator_parses(self):
        table = DEFAULT_PRECEDENCE.with_operators({"é": 30})
        assert parse_expression_source("a é b", table) == BinaryExpr(
            "é", VariableExpr("a"), VariableExpr("b"),
        )
