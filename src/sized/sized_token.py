"""
Token model for the sized-numeric language front end.

Classes:
    Kind: Enumerated classification tag of a token.
    Token: A classified, positioned view into the source string.

Tokens never copy the source. Each one keeps a reference to the single source
string handed to the lexer together with an ``offset``/``length`` pair, and
materialises its ``text`` on demand. Tokens (and AST nodes built from them)
are only meaningful alongside that source.

Example:
    >>> src = "let x"
    >>> tok = Token(Kind.LET, src, 0, 3)
    >>> tok.text
    'let'
    >>> Token.end_of_file(src)
    Token(EOF, '', offset=5)
"""

from enum import Enum
from typing import Any


class Kind(Enum):
    """Canonical token kinds. Values are the upper-case tags used in messages."""

    # Trivia and sentinels
    WHITESPACE = "WHITESPACE"
    COMMENT = "COMMENT"
    UNKNOWN = "UNKNOWN"
    EOF = "EOF"

    # Literals and names
    IDENTIFIER = "IDENT"
    INTEGER_LITERAL = "INT_LITERAL"
    STRING = "STRING"

    # Punctuation
    EQUAL_SIGN = "ASSIGN"
    COLON = "COLON"
    SEMICOLON = "SEMICOLON"
    PLUS = "PLUS"
    MINUS = "SUB"
    ARROW = "ARROW"
    DIVIDE = "DIV"
    STAR = "MULT"
    LEFT_PARENTHESIS = "LPAREN"
    RIGHT_PARENTHESIS = "RPAREN"
    LEFT_SQUARE_BRACKET = "LBRACK"
    RIGHT_SQUARE_BRACKET = "RBRACK"
    LEFT_BRACE = "LBRACE"
    RIGHT_BRACE = "RBRACE"

    # Keywords
    LET = "LET"
    MUT = "MUT"
    FN = "FN"

    # Sized numeric type keywords
    INT1 = "INT1"
    INT2 = "INT2"
    INT4 = "INT4"
    INT8 = "INT8"
    INT16 = "INT16"
    INT32 = "INT32"
    INT64 = "INT64"
    FLOAT16 = "FLOAT16"
    BFLOAT16 = "BFLOAT16"
    FLOAT32 = "FLOAT32"
    FLOAT64 = "FLOAT64"

    @property
    def is_type_keyword(self) -> bool:
        return self in _TYPE_KINDS

    def __str__(self) -> str:
        return self.value


_TYPE_KINDS = frozenset(
    {
        Kind.INT1,
        Kind.INT2,
        Kind.INT4,
        Kind.INT8,
        Kind.INT16,
        Kind.INT32,
        Kind.INT64,
        Kind.FLOAT16,
        Kind.BFLOAT16,
        Kind.FLOAT32,
        Kind.FLOAT64,
    }
)


class Token:
    """A single lexical token.

    Attributes:
        kind (Kind): The token's classification.
        source (str): The full source string the token was cut from.
        offset (int): Index of the token's first character in ``source``.
        length (int): Number of characters covered by the token text.
    """

    __slots__ = ("kind", "source", "offset", "length")

    def __init__(self, kind: Kind, source: str, offset: int, length: int) -> None:
        self.kind = kind
        self.source = source
        self.offset = offset
        self.length = length

    @classmethod
    def end_of_file(cls, source: str) -> "Token":
        """Builds the end-of-file sentinel, positioned at ``len(source)``."""
        return cls(Kind.EOF, source, len(source), 0)

    @property
    def text(self) -> str:
        return self.source[self.offset : self.offset + self.length]

    def __repr__(self) -> str:
        return f"Token({self.kind!s}, {self.text!r}, offset={self.offset})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.kind == other.kind
            and self.offset == other.offset
            and self.text == other.text
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.text, self.offset))


__all__ = ["Kind", "Token"]
