"""
Lookup tables shared by the lexer and parser.

Exports:
    - keyword_hashmap: exact keyword spelling -> Kind
    - symbol_hashmap: single punctuation character -> Kind
    - type_keywords: kinds naming a sized numeric type
    - type_names: sized numeric type kind -> canonical spelling
    - whitespace_characters: characters the lexer groups into WHITESPACE tokens
"""

from sized.sized_token import Kind

keyword_hashmap: dict[str, Kind] = {
    "let": Kind.LET,
    "mut": Kind.MUT,
    "fn": Kind.FN,
    # Integers
    "int1": Kind.INT1,
    "int2": Kind.INT2,
    "int4": Kind.INT4,
    "int8": Kind.INT8,
    "int16": Kind.INT16,
    "int32": Kind.INT32,
    "int64": Kind.INT64,
    # Floats
    "float16": Kind.FLOAT16,
    "bfloat16": Kind.BFLOAT16,
    "float32": Kind.FLOAT32,
    "float64": Kind.FLOAT64,
}

# "-" is also the first half of "->"; the lexer looks ahead for that.
symbol_hashmap: dict[str, Kind] = {
    "=": Kind.EQUAL_SIGN,
    ":": Kind.COLON,
    ";": Kind.SEMICOLON,
    "+": Kind.PLUS,
    "-": Kind.MINUS,
    "/": Kind.DIVIDE,
    "*": Kind.STAR,
    "(": Kind.LEFT_PARENTHESIS,
    ")": Kind.RIGHT_PARENTHESIS,
    "[": Kind.LEFT_SQUARE_BRACKET,
    "]": Kind.RIGHT_SQUARE_BRACKET,
    "{": Kind.LEFT_BRACE,
    "}": Kind.RIGHT_BRACE,
}

# Unicode White_Space property. str.isspace() also accepts \x1c-\x1f, which
# are separators, not whitespace.
whitespace_characters: frozenset[str] = frozenset(
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)

type_names: dict[Kind, str] = {
    kind: name for name, kind in keyword_hashmap.items() if kind.is_type_keyword
}

type_keywords: frozenset[Kind] = frozenset(type_names)

__all__ = [
    "keyword_hashmap",
    "symbol_hashmap",
    "type_keywords",
    "type_names",
    "whitespace_characters",
]
