"""
Bologna Abstract Syntax Tree (AST) Definitions
==============================================

This module defines the AST produced by the Bologna parser.

Node Variants
-------------
Expressions
├── NumberExpr - numeric literal
├── VariableExpr - reference to a name (not resolved at parse time)
├── BinaryExpr - operator with exclusively owned left/right children
└── CallExpr - callee name and ordered argument expressions
Top-level
├── Prototype - function name and ordered parameter names
└── Function - a Prototype plus a body expression

Design Notes
------------
- The set of variants is closed: Expression and TopLevelNode are unions
  of the classes above, and ASTVisitor refuses any other class.
- All nodes are frozen dataclasses and form a strict tree; children are
  held in tuples and never shared between parents.
- Each node records its source location. The location is excluded from
  equality so trees can be compared structurally.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from bologna.errors import SourceLocation

# Prototype name given to bare top-level expressions
ANONYMOUS_FUNCTION_NAME = "__anon_expr"


def format_number(value: float) -> str:
    """Shortest text that reads back as `value`, without a trailing '.0'."""
    text = repr(value)
    return text[:-2] if text.endswith(".0") else text


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass(frozen=True)
class NumberExpr:
    """Numeric literal such as 1.0."""
    value: float
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class VariableExpr:
    """Reference to a variable, like `a`."""
    name: str
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class BinaryExpr:
    """
    Binary operator application.

    Attributes:
        operator: The operator character, e.g. "+"
        left: Left operand
        right: Right operand
    """
    operator: str
    left: "Expression"
    right: "Expression"
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class CallExpr:
    """
    Function call.

    Attributes:
        callee: Name of the called function
        arguments: Argument expressions in source order
    """
    callee: str
    arguments: tuple["Expression", ...] = ()
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)


Expression = Union[NumberExpr, VariableExpr, BinaryExpr, CallExpr]


# =============================================================================
# Top-Level Nodes
# =============================================================================

@dataclass(frozen=True)
class Prototype:
    """
    Function signature: its name and parameter names.

    Parameter names are not checked for uniqueness here.
    """
    name: str
    parameters: tuple[str, ...] = ()
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    @property
    def is_anonymous(self) -> bool:
        return self.name == ANONYMOUS_FUNCTION_NAME


@dataclass(frozen=True)
class Function:
    """Function definition: a prototype and a body expression."""
    prototype: Prototype
    body: Expression
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)


TopLevelNode = Union[Function, Prototype]

ASTNode = Union[Expression, TopLevelNode]

NODE_TYPES = (NumberExpr, VariableExpr, BinaryExpr, CallExpr, Prototype, Function)


# =============================================================================
# AST Visitor
# =============================================================================

class ASTVisitor:
    """
    Dispatches on node class to a visit_<ClassName> method.

    Subclasses implement one method per variant. Visiting a node whose
    method is missing raises TypeError instead of silently doing
    nothing, so a new variant cannot slip past an existing visitor.

    Usage:
        class Counter(ASTVisitor):
            def visit_NumberExpr(self, node): ...
            ...
    """

    def visit(self, node: ASTNode) -> Any:
        if not isinstance(node, NODE_TYPES):
            raise TypeError(f"not an AST node: {type(node).__name__}")

        method = getattr(self, f"visit_{type(node).__name__}", None)
        if method is None:
            raise TypeError(
                f"{type(self).__name__} does not handle {type(node).__name__}"
            )
        return method(node)


# =============================================================================
# AST Pretty Printer
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Pretty printer for AST debugging.

    Usage:
        printer = ASTPrinter()
        print(printer.print(node))

    Output for `def f(x y) x + y`:
        Function f(x, y)
          Binary '+'
            Variable x
            Variable y
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Print the AST and return as string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def _visit_indented(self, *nodes: ASTNode) -> None:
        self.indent_level += 1
        for node in nodes:
            self.visit(node)
        self.indent_level -= 1

    def visit_NumberExpr(self, node: NumberExpr) -> None:
        self._emit(f"Number {format_number(node.value)}")

    def visit_VariableExpr(self, node: VariableExpr) -> None:
        self._emit(f"Variable {node.name}")

    def visit_BinaryExpr(self, node: BinaryExpr) -> None:
        self._emit(f"Binary '{node.operator}'")
        self._visit_indented(node.left, node.right)

    def visit_CallExpr(self, node: CallExpr) -> None:
        self._emit(f"Call {node.callee}")
        self._visit_indented(*node.arguments)

    def visit_Prototype(self, node: Prototype) -> None:
        self._emit(f"Extern {node.name}({', '.join(node.parameters)})")

    def visit_Function(self, node: Function) -> None:
        proto = node.prototype
        if proto.is_anonymous:
            self._emit("TopLevelExpr")
        else:
            self._emit(f"Function {proto.name}({', '.join(proto.parameters)})")
        self._visit_indented(node.body)


class _ExpressionFormatter(ASTVisitor):
    """Renders expressions as fully parenthesized infix text."""

    def visit_NumberExpr(self, node: NumberExpr) -> str:
        return format_number(node.value)

    def visit_VariableExpr(self, node: VariableExpr) -> str:
        return node.name

    def visit_BinaryExpr(self, node: BinaryExpr) -> str:
        return f"({self.visit(node.left)} {node.operator} {self.visit(node.right)})"

    def visit_CallExpr(self, node: CallExpr) -> str:
        args = ", ".join(self.visit(arg) for arg in node.arguments)
        return f"{node.callee}({args})"

    def visit_Prototype(self, node: Prototype) -> str:
        return f"{node.name}({' '.join(node.parameters)})"

    def visit_Function(self, node: Function) -> str:
        return f"def {self.visit(node.prototype)} {self.visit(node.body)}"


def format_expression(node: ASTNode) -> str:
    """
    Render a node as text.

    >>> format_expression(BinaryExpr("+", NumberExpr(1.0), VariableExpr("x")))
    '(1 + x)'
    """
    return _ExpressionFormatter().visit(node)
