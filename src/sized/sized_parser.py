"""
Parser for the sized-numeric language.

Turns a pre-lexed token list into a ``Program``.

Grammar
-------
- let statement:         ``let [mut] IDENT : int32 = (INT | IDENT) ;``
- expression statement:  ``(IDENT | INT) (+ | - | * | /) (IDENT | INT) ;``
- function declaration:  ``fn IDENT ( ) -> int32 ;``

Parser Behavior
---------------
- Whitespace tokens are skipped while advancing. Comment tokens are not, so a
  comment between statements or inside one is a syntax error.
- Each grammar rule saves the cursor on entry and restores it before
  reporting a mismatch, so a failed attempt leaves the parser untouched.
  Rules report failure by returning a ``ParseError`` rather than raising it.
- The first statement that fails aborts the whole parse: ``parse_program``
  raises that error and no partial program is produced.

Entry Points
------------
- ``Parser(tokens).parse_program()``
- ``parse_program(tokens)``
- ``parse_source(source)``: lex and parse in one step.

Raises
------
ParseError
    A ``SyntaxError`` describing the first unexpected token.
ValueError
    When the token list does not end with exactly one EOF token.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from sized.sized_ast import (
    BinaryExpression,
    BinaryOperator,
    Expression,
    ExpressionStatement,
    FunctionDeclaration,
    Identifier,
    IntegerLiteral,
    LetStatement,
    Program,
    Statement,
    Type,
)
from sized.sized_constants import type_names
from sized.sized_lexer import tokenize
from sized.sized_token import Kind, Token


class ParseError(SyntaxError):
    """A syntax error with a human-readable message and the offending token."""

    def __init__(self, message: str, token: Token | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.token = token


RuleResult = Statement | ParseError
Rule = Callable[["Parser"], RuleResult]

binary_operators: dict[Kind, BinaryOperator] = {
    Kind.PLUS: BinaryOperator.PLUS,
    Kind.MINUS: BinaryOperator.MINUS,
    Kind.STAR: BinaryOperator.STAR,
    Kind.DIVIDE: BinaryOperator.DIVIDE,
}

# Only int32 is accepted where a type is expected, although the lexer knows
# the whole family of sized numeric types.
accepted_types: dict[Kind, str] = {Kind.INT32: type_names[Kind.INT32]}


class Parser:
    """
    Backtracking recursive-descent parser.

    Attributes
    ----------
    tokens : Sequence[Token]
        The token list; its last (and only) EOF token terminates parsing.
    position : int
        Index of the current token. Always points at a non-whitespace token.
    """

    def __init__(self, tokens: Sequence[Token]) -> None:
        if not tokens or tokens[-1].kind is not Kind.EOF:
            raise ValueError("Token sequence must end with an EOF token")
        if sum(1 for t in tokens if t.kind is Kind.EOF) != 1:
            raise ValueError("Token sequence must contain exactly one EOF token")
        self.tokens = tokens
        self.position = 0
        self._skip_whitespace()

    def current(self) -> Token:
        return self.tokens[self.position]

    def _skip_whitespace(self) -> None:
        while self.tokens[self.position].kind is Kind.WHITESPACE:
            self.position += 1

    def advance(self) -> Token:
        """Moves past the current token and any whitespace; sticks at EOF."""
        if self.current().kind is not Kind.EOF:
            self.position += 1
            self._skip_whitespace()
        return self.current()

    def reset(self, position: int) -> None:
        self.position = position

    def fail(self, start: int, message: str) -> ParseError:
        """Reports ``message`` against the current token and rewinds to ``start``."""
        token = self.current()
        self.reset(start)
        return ParseError(f"{message}, got {token!r}", token)

    def accept(self, kind: Kind) -> Token | None:
        """Consumes and returns the current token if it has ``kind``."""
        tok = self.current()
        if tok.kind is not kind:
            return None
        self.advance()
        return tok

    def read_operand(self) -> Expression | None:
        tok = self.current()
        if tok.kind is Kind.IDENTIFIER:
            self.advance()
            return Identifier(tok.text)
        if tok.kind is Kind.INTEGER_LITERAL:
            self.advance()
            return IntegerLiteral(tok.text)
        return None

    def read_type(self) -> Type | None:
        name = accepted_types.get(self.current().kind)
        if name is None:
            return None
        self.advance()
        return Type(name)

    def try_parse_let_statement(self) -> RuleResult:
        start = self.position
        if self.accept(Kind.LET) is None:
            return self.fail(start, "Expected 'let'")

        mutable = self.accept(Kind.MUT) is not None

        identifier_token = self.accept(Kind.IDENTIFIER)
        if identifier_token is None:
            return self.fail(start, "Expected identifier")

        if self.accept(Kind.COLON) is None:
            return self.fail(start, "Expected colon")

        type_ = self.read_type()
        if type_ is None:
            return self.fail(start, "Expected type")

        if self.accept(Kind.EQUAL_SIGN) is None:
            return self.fail(start, "Expected equals")

        expression = self.read_operand()
        if expression is None:
            return self.fail(start, "Expected integer literal or identifier")

        if self.accept(Kind.SEMICOLON) is None:
            return self.fail(start, "Expected semicolon at end of statement")

        return LetStatement(
            identifier=Identifier(identifier_token.text),
            mutable=mutable,
            type=type_,
            expression=expression,
        )

    def try_parse_binary_expression(self) -> RuleResult:
        start = self.position
        left = self.read_operand()
        if left is None:
            return self.fail(start, "Expected identifier or integer literal")

        operator = binary_operators.get(self.current().kind)
        if operator is None:
            return self.fail(start, "Expected one of '+', '-', '*', '/'")
        self.advance()

        right = self.read_operand()
        if right is None:
            return self.fail(start, "Expected identifier or integer literal")

        if self.accept(Kind.SEMICOLON) is None:
            return self.fail(start, "Expected semicolon at end of binary expression")

        return ExpressionStatement(BinaryExpression(operator, left, right))

    def try_parse_function_declaration(self) -> RuleResult:
        start = self.position
        if self.accept(Kind.FN) is None:
            return self.fail(start, "Expected 'fn'")

        identifier_token = self.accept(Kind.IDENTIFIER)
        if identifier_token is None:
            return self.fail(start, "Expected identifier")

        if self.accept(Kind.LEFT_PARENTHESIS) is None:
            return self.fail(start, "Expected '('")

        if self.accept(Kind.RIGHT_PARENTHESIS) is None:
            return self.fail(start, "Expected ')'")

        if self.accept(Kind.ARROW) is None:
            return self.fail(start, "Expected '->'")

        return_type = self.read_type()
        if return_type is None:
            return self.fail(start, "Expected 'int32'")

        if self.accept(Kind.SEMICOLON) is None:
            return self.fail(start, "Expected semicolon at end of function declaration")

        return FunctionDeclaration(
            identifier=Identifier(identifier_token.text),
            return_type=return_type,
        )

    def read_statement(self) -> RuleResult:
        """Tries the candidate rules for the current token's kind, in order.

        Returns the first successful statement, or the last rule's error if
        every candidate fails.
        """
        token = self.current()
        rules = statement_rules.get(token.kind, ())
        if not rules:
            return ParseError(f"Failed to parse token {token!r}", token)
        result = rules[0](self)
        for rule in rules[1:]:
            if not isinstance(result, ParseError):
                break
            result = rule(self)
        return result

    def parse_program(self) -> Program:
        """Parses every statement up to EOF.

        Raises:
            ParseError: On the first statement that does not parse.
        """
        statements: list[Statement] = []
        while self.current().kind is not Kind.EOF:
            result = self.read_statement()
            if isinstance(result, ParseError):
                raise result
            statements.append(result)
        return Program(tuple(statements))


statement_rules: dict[Kind, tuple[Rule, ...]] = {
    Kind.LET: (Parser.try_parse_let_statement,),
    Kind.IDENTIFIER: (Parser.try_parse_binary_expression,),
    Kind.INTEGER_LITERAL: (Parser.try_parse_binary_expression,),
    Kind.FN: (Parser.try_parse_function_declaration,),
}


def parse_program(tokens: Sequence[Token]) -> Program:
    return Parser(tokens).parse_program()


def parse_source(source: str) -> Program:
    """Lexes and parses ``source``."""
    return parse_program(tokenize(source))


__all__ = [
    "ParseError",
    "Parser",
    "parse_program",
    "parse_source",
    "statement_rules",
]
