# =============================================================================
# test_ast.py - AST Node and Visitor Tests
# =============================================================================

import pytest
from dataclasses import FrozenInstanceError

from bologna.errors import SourceLocation
from bologna.frontend.ast import (
    ASTPrinter,
    ASTVisitor,
    BinaryExpr,
    CallExpr,
    Function,
    NumberExpr,
    Prototype,
    VariableExpr,
    format_expression,
)
from bologna.frontend.driver import parse_source
from bologna.frontend.parser import parse_expression_source


class TestNodes:
    """Test node construction and comparison."""

    def test_equality_ignores_location(self):
        a = NumberExpr(1.0, location=SourceLocation("a", 1, 1))
        b = NumberExpr(1.0, location=SourceLocation("b", 9, 9))
        assert a == b

    def test_nodes_are_immutable(self):
        node = VariableExpr("x")
        with pytest.raises(FrozenInstanceError):
            node.name = "y"

    def test_children_are_distinct_objects(self):
        """Each parent owns its own children."""
        (result,) = parse_source("x + x")
        body = result.node.body
        assert body.left == body.right
        assert body.left is not body.right


class TestPrinter:
    """Test the tree printer."""

    def test_function(self):
        (result,) = parse_source("def f(x y) x + y")
        assert ASTPrinter().print(result.node) == "\n".join([
            "Function f(x, y)",
            "  Binary '+'",
            "    Variable x",
            "    Variable y",
        ])

    def test_top_level_expression(self):
        (result,) = parse_source("g(1.5)")
        assert ASTPrinter().print(result.node) == "\n".join([
            "TopLevelExpr",
            "  Call g",
            "    Number 1.5",
        ])

    def test_extern(self):
        (result,) = parse_source("extern sin(a)")
        assert ASTPrinter().print(result.node) == "Extern sin(a)"

    def test_number_is_exact(self):
        (result,) = parse_source("1234567 + 0.1234567")
        assert ASTPrinter().print(result.node.body) == "\n".join([
            "Binary '+'",
            "  Number 1234567",
            "  Number 0.1234567",
        ])

    def test_printer_is_reusable(self):
        printer = ASTPrinter()
        printer.print(NumberExpr(1.0))
        assert printer.print(VariableExpr("z")) == "Variable z"


class TestFormatExpression:
    """Test infix rendering."""

    def test_nested(self):
        node = BinaryExpr("+", NumberExpr(1.0), BinaryExpr("*", NumberExpr(2.0), NumberExpr(3.0)))
        assert format_expression(node) == "(1 + (2 * 3))"

    def test_call(self):
        node = CallExpr("f", (VariableExpr("a"), NumberExpr(2.5)))
        assert format_expression(node) == "f(a, 2.5)"

    def test_keeps_every_digit(self):
        node = parse_expression_source("1234567 + 2")
        assert format_expression(node) == "(1234567 + 2)"

    def test_long_fraction(self):
        assert format_expression(NumberExpr(0.1234567)) == "0.1234567"

    def test_function(self):
        node = Function(Prototype("f", ("x",)), VariableExpr("x"))
        assert format_expression(node) == "def f(x) x"


class TestVisitor:
    """Test visitor dispatch."""

    def test_missing_method_raises(self):
        class NumbersOnly(ASTVisitor):
            def visit_NumberExpr(self, node):
                return node.value

        visitor = NumbersOnly()
        assert visitor.visit(NumberExpr(3.0)) == 3.0
        with pytest.raises(TypeError):
            visitor.visit(VariableExpr("x"))

    def test_non_node_raises(self):
        with pytest.raises(TypeError):
            ASTPrinter().visit("not a node")
