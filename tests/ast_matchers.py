"""
Pattern matchers for inspecting parsed ASTs in tests.

Each ``match_*`` factory returns a ``Matcher`` whose ``matches(node)`` checks
the node's shape. Matchers nest, and ``None`` arguments match anything:

    match_binary_expression(match_identifier("x"), BinaryOperator.PLUS, None)
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from sized.sized_ast import (
    BinaryExpression,
    BinaryOperator,
    ExpressionStatement,
    FunctionDeclaration,
    Identifier,
    IntegerLiteral,
    LetStatement,
    Type,
)


@dataclass(frozen=True)
class Matcher:
    description: str
    predicate: Callable[[Any], bool]

    def matches(self, node: Any) -> bool:
        return self.predicate(node)

    def __repr__(self) -> str:
        return self.description


def _sub(matcher: Matcher | None, node: Any) -> bool:
    return matcher is None or matcher.matches(node)


def _expression(node: Any) -> Any:
    # Lets expression matchers accept the wrapping statement too.
    return node.expression if isinstance(node, ExpressionStatement) else node


def match_any_expression() -> Matcher:
    def check(node: Any) -> bool:
        return isinstance(_expression(node), (Identifier, IntegerLiteral, BinaryExpression))

    return Matcher("any_expression()", check)


def match_identifier(name: str | None = None) -> Matcher:
    return Matcher(
        f"identifier({name!r})",
        lambda node: isinstance(node, Identifier) and _sub_value(name, node.name),
    )


def match_integer_literal(text: str | None = None) -> Matcher:
    return Matcher(
        f"integer_literal({text!r})",
        lambda node: isinstance(node, IntegerLiteral) and _sub_value(text, node.text),
    )


def match_binary_expression(
    left: Matcher | None = None,
    operator: BinaryOperator | None = None,
    right: Matcher | None = None,
) -> Matcher:
    def check(node: Any) -> bool:
        node = _expression(node)
        return (
            isinstance(node, BinaryExpression)
            and _sub(left, node.left)
            and _sub_value(operator, node.operator)
            and _sub(right, node.right)
        )

    return Matcher(f"binary_expression({left!r}, {operator}, {right!r})", check)


def match_type(name: str | None = None) -> Matcher:
    return Matcher(
        f"type({name!r})",
        lambda node: isinstance(node, Type) and _sub_value(name, node.name),
    )


def _let(name: str | None, type_: Matcher | None, expr: Matcher | None, mutable: bool) -> Matcher:
    def check(node: Any) -> bool:
        return (
            isinstance(node, LetStatement)
            and node.mutable is mutable
            and _sub_value(name, node.identifier.name)
            and _sub(type_, node.type)
            and _sub(expr, node.expression)
        )

    prefix = "mutable_let" if mutable else "let"
    return Matcher(f"{prefix}({name!r}, {type_!r}, {expr!r})", check)


def match_let_statement(
    name: str | None = None, type_: Matcher | None = None, expr: Matcher | None = None
) -> Matcher:
    return _let(name, type_, expr, mutable=False)


def match_mutable_let_statement(
    name: str | None = None, type_: Matcher | None = None, expr: Matcher | None = None
) -> Matcher:
    return _let(name, type_, expr, mutable=True)


def match_function_declaration(
    name: str | None = None, return_type: Matcher | None = None
) -> Matcher:
    def check(node: Any) -> bool:
        return (
            isinstance(node, FunctionDeclaration)
            and _sub_value(name, node.identifier.name)
            and node.parameters == ()
            and _sub(return_type, node.return_type)
        )

    return Matcher(f"function_declaration({name!r}, {return_type!r})", check)


def _sub_value(expected: Any, actual: Any) -> bool:
    return expected is None or expected == actual
