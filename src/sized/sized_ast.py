"""
Abstract syntax tree for the sized-numeric language.

Statement and expression nodes form closed unions:

    Statement  = LetStatement | ExpressionStatement | FunctionDeclaration
    Expression = Identifier | IntegerLiteral | BinaryExpression

All nodes are frozen dataclasses, so a parsed ``Program`` is immutable and
compares structurally. Consumers dispatch with ``match`` and close the match
with ``assert_never`` to get exhaustiveness checking from a type checker.

Every node can be turned into a plain dictionary with ``to_dict()`` for
debugging or JSON output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TypedDict, Union, assert_never


class NodeDict(TypedDict, total=False):
    """Serialised shape of a node. Only the keys relevant to ``kind`` are set."""

    kind: str
    name: str
    text: str
    operator: str
    mutable: bool
    left: "NodeDict"
    right: "NodeDict"
    identifier: "NodeDict"
    type: "NodeDict"
    expression: "NodeDict"
    parameters: list["NodeDict"]
    return_type: "NodeDict"
    statements: list["NodeDict"]


class BinaryOperator(Enum):
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    DIVIDE = "/"


@dataclass(frozen=True)
class Identifier:
    name: str

    def to_dict(self) -> NodeDict:
        return {"kind": "identifier", "name": self.name}


@dataclass(frozen=True)
class IntegerLiteral:
    # Digits exactly as written; no numeric conversion happens here.
    text: str

    def to_dict(self) -> NodeDict:
        return {"kind": "integer_literal", "text": self.text}


@dataclass(frozen=True)
class BinaryExpression:
    operator: BinaryOperator
    left: Expression
    right: Expression

    def to_dict(self) -> NodeDict:
        return {
            "kind": "binary_expression",
            "operator": self.operator.value,
            "left": self.left.to_dict(),
            "right": self.right.to_dict(),
        }


Expression = Union[Identifier, IntegerLiteral, BinaryExpression]


@dataclass(frozen=True)
class Type:
    name: str

    def to_dict(self) -> NodeDict:
        return {"kind": "type", "name": self.name}


@dataclass(frozen=True)
class LetStatement:
    """``let [mut] identifier: type = expression;``"""

    identifier: Identifier
    mutable: bool
    type: Type
    expression: Expression

    def to_dict(self) -> NodeDict:
        return {
            "kind": "let",
            "identifier": self.identifier.to_dict(),
            "mutable": self.mutable,
            "type": self.type.to_dict(),
            "expression": self.expression.to_dict(),
        }


@dataclass(frozen=True)
class ExpressionStatement:
    expression: Expression

    def to_dict(self) -> NodeDict:
        return {"kind": "expression", "expression": self.expression.to_dict()}


@dataclass(frozen=True)
class FunctionDeclaration:
    """``fn identifier() -> type;``. Parameters are always empty for now."""

    identifier: Identifier
    return_type: Type
    parameters: tuple[Identifier, ...] = ()

    def to_dict(self) -> NodeDict:
        return {
            "kind": "function_declaration",
            "identifier": self.identifier.to_dict(),
            "parameters": [p.to_dict() for p in self.parameters],
            "return_type": self.return_type.to_dict(),
        }


Statement = Union[LetStatement, ExpressionStatement, FunctionDeclaration]


@dataclass(frozen=True)
class Program:
    statements: tuple[Statement, ...] = field(default_factory=tuple)

    def to_dict(self) -> NodeDict:
        return {
            "kind": "program",
            "statements": [s.to_dict() for s in self.statements],
        }


def expression_kind(expression: Expression) -> str:
    """Names the variant of ``expression``; exhaustive over the union."""
    match expression:
        case Identifier():
            return "identifier"
        case IntegerLiteral():
            return "integer_literal"
        case BinaryExpression():
            return "binary_expression"
        case _:
            assert_never(expression)


def statement_kind(statement: Statement) -> str:
    """Names the variant of ``statement``; exhaustive over the union."""
    match statement:
        case LetStatement():
            return "let"
        case ExpressionStatement():
            return "expression"
        case FunctionDeclaration():
            return "function_declaration"
        case _:
            assert_never(statement)


__all__ = [
    "BinaryExpression",
    "BinaryOperator",
    "Expression",
    "ExpressionStatement",
    "FunctionDeclaration",
    "Identifier",
    "IntegerLiteral",
    "LetStatement",
    "NodeDict",
    "Program",
    "Statement",
    "Type",
    "expression_kind",
    "statement_kind",
]
