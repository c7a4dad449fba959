"""
Lexical analyzer for the sized-numeric language.

This module turns raw source text into a stream of tokens:

Classes:
    CharacterStream: Read-only source string with a movable cursor.
    Lexer: Pulls one Token at a time out of a CharacterStream.

Functions:
    tokenize: Lex a whole source string, ending with the EOF token.

Features:
    - Unicode whitespace runs and `#` line comments are returned as tokens, not skipped
    - Single character punctuation plus the two character arrow `->`
    - Keywords (`let`, `mut`, `fn`, sized numeric types) and identifiers
    - Unsigned integer literals and double-quoted strings
    - Anything unrecognised becomes one UNKNOWN token spanning to end of input

The lexer is total: it never raises on any input, and every call after the end
of input returns the EOF token again.

Example:
    >>> [t.text for t in tokenize("let x")]
    ['let', ' ', 'x', '']
"""

from sized.sized_constants import keyword_hashmap, symbol_hashmap, whitespace_characters
from sized.sized_token import Kind, Token


class CharacterStream:
    """
    A read-only source string with a cursor that can be moved back.

    Attributes:
        source (str): The input source string. Never modified.
        position (int): Index of the current character in ``source``.
    """

    def __init__(self, source: str, position: int = 0):
        self.source = source
        self.position = position

    def next(self) -> str:
        """
        Consumes and returns the current character.

        Raises:
            IndexError: If the stream is already at end of input.
        """
        if self.position >= len(self.source):
            raise IndexError(
                f"CharacterStreamError: Attempted to read past end of source at position=<{self.position}>"
            )
        char = self.source[self.position]
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character ``offset`` places ahead, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def current(self) -> str | None:
        return self.source[self.position] if self.position < len(self.source) else None

    def reset(self, position: int) -> None:
        """Moves the cursor back (or forward) to ``position``."""
        self.position = position

    def find(self, char: str) -> int:
        """Index of the next ``char`` at or after the cursor, or -1."""
        return self.source.find(char, self.position)

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


def _is_letter(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_ascii_alnum(ch: str | None) -> bool:
    return ch is not None and ch.isascii() and ch.isalnum()


def _is_word_char(ch: str | None) -> bool:
    return ch is not None and ch.isascii() and (ch.isalnum() or ch == "_")


class Lexer:
    """Lexical analyzer for the sized-numeric language.

    Each ``read_*`` rule either returns a token and leaves the cursor after
    it, or returns None with the cursor exactly where it started.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    @property
    def source(self) -> str:
        return self.stream.source

    def _token(self, kind: Kind, start: int, end: int | None = None) -> Token:
        """Builds a token covering ``start`` up to ``end`` (default: the cursor)."""
        if end is None:
            end = self.stream.position
        return Token(kind, self.source, start, end - start)

    def read_whitespace(self) -> Token | None:
        start = self.stream.position
        while self.stream.current() in whitespace_characters:
            self.stream.next()
        if self.stream.position == start:
            return None
        return self._token(Kind.WHITESPACE, start)

    def read_comment(self) -> Token | None:
        """Reads a `#` comment. The terminating newline is consumed but not
        part of the token; a comment without one is not a comment."""
        if self.stream.peek() != "#":
            return None
        start = self.stream.position
        newline = self.stream.find("\n")
        if newline == -1:
            return None
        token = self._token(Kind.COMMENT, start, newline)
        self.stream.reset(newline + 1)
        return token

    def read_symbol(self) -> Token | None:
        start = self.stream.position
        ch = self.stream.peek()
        if ch == "-" and self.stream.peek(1) == ">":
            self.stream.reset(start + 2)
            return self._token(Kind.ARROW, start)
        kind = symbol_hashmap.get(ch)
        if kind is None:
            return None
        self.stream.next()
        return self._token(kind, start)

    def read_word(self) -> Token | None:
        """Reads a keyword or identifier in one pass.

        The keyword candidate is the maximal run of alphanumeric characters
        from an ASCII letter. An exact keyword spelling yields that keyword,
        so ``int32_x`` lexes as ``int32`` followed by whatever ``_x`` becomes.
        On a miss the scan carries on over ASCII letters, digits and
        underscores and yields an identifier, so ``int32x`` is one identifier.
        """
        if not _is_letter(self.stream.peek()):
            return None
        start = self.stream.position
        while _is_ascii_alnum(self.stream.current()):
            self.stream.next()
        kind = keyword_hashmap.get(self.source[start : self.stream.position])
        # A non-ASCII alphanumeric would extend the candidate past any keyword.
        if kind is not None and not self.stream.peek().isalnum():
            return self._token(kind, start)
        while _is_word_char(self.stream.current()):
            self.stream.next()
        return self._token(Kind.IDENTIFIER, start)

    def read_string(self) -> Token | None:
        """Reads a double-quoted string. The token text excludes both quotes."""
        if self.stream.peek() != '"':
            return None
        start = self.stream.position
        self.stream.next()
        close = self.stream.find('"')
        if close == -1:
            self.stream.reset(start)
            return None
        token = self._token(Kind.STRING, start + 1, close)
        self.stream.reset(close + 1)
        return token

    def read_integer(self) -> Token | None:
        start = self.stream.position
        while _is_digit(self.stream.peek()):
            self.stream.next()
        if self.stream.position == start:
            return None
        return self._token(Kind.INTEGER_LITERAL, start)

    def read_unknown(self) -> Token:
        """Swallows the rest of the input as one UNKNOWN token."""
        start = self.stream.position
        self.stream.reset(len(self.source))
        return self._token(Kind.UNKNOWN, start)

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Rules are tried in a fixed order and the first match wins. Once the
        input is exhausted every call returns the EOF token.
        """
        if self.stream.end_of_file():
            return Token.end_of_file(self.source)

        for rule in (
            self.read_whitespace,
            self.read_comment,
            self.read_symbol,
            self.read_word,
            self.read_string,
            self.read_integer,
        ):
            token = rule()
            if token is not None:
                return token

        return self.read_unknown()

    def _check_lookup(self, token: Token) -> None:
        if token.kind is Kind.EOF:
            raise ValueError("Row/column lookup is undefined for the EOF token")
        if not 0 <= token.offset <= len(self.source):
            raise ValueError(
                f"Token offset {token.offset} is outside the source (length {len(self.source)})"
            )

    def row(self, token: Token) -> int:
        """Returns the 1-based row of ``token``.

        Raises:
            ValueError: For the EOF token or an out-of-range offset.
        """
        self._check_lookup(token)
        return self.source.count("\n", 0, token.offset) + 1

    def column(self, token: Token) -> int:
        """Returns the 1-based column of ``token``.

        Raises:
            ValueError: For the EOF token or an out-of-range offset.
        """
        self._check_lookup(token)
        line_start = self.source.rfind("\n", 0, token.offset) + 1
        return token.offset - line_start + 1


def tokenize(source: str) -> list[Token]:
    """Lexes ``source`` completely. The last token is the only EOF token."""
    lexer = Lexer(CharacterStream(source))
    tokens = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.kind is Kind.EOF:
            break
    return tokens


__all__ = ["CharacterStream", "Lexer", "Token", "tokenize"]
