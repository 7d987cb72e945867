"""
Lexical analyzer for the Monkey programming language.

This module provides core components for converting raw source code into token streams:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Represents a single token with kind, literal, and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens.

Features:
    - Skips whitespace (space, tab, newline, carriage return)
    - Longest-match recognition of operators, so `==` and `!=` are single tokens
    - Recognizes:
        * Identifiers and keywords (`fn`, `let`, `return`, `true`, `false`, `if`, `else`)
        * Integer literals (kept as text; conversion happens in the parser)
        * Operators and delimiters

The lexer never raises: unknown characters become ILLEGAL tokens, and once the
input is exhausted every call returns an EOF token with an empty literal.

Example:
    >>> lexer = Lexer("let five = 5;")
    >>> lexer.next_token()
    Token(LET, 'let')

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
"""

from collections.abc import Callable, Iterator
from string import ascii_letters
from typing import Any

from monkey.monkey_constants import (
    KEYWORDS,
    MAX_OPERATOR_LENGTH,
    TokenKind,
    operator_tokens,
)

# End-of-input sentinel returned by CharacterStream.peek().
EOF_CHAR = ""

WHITESPACE = " \t\n\r"


def is_letter(ch: str) -> bool:
    """Whether `ch` may appear in an identifier (ASCII letter or underscore).

    Args:
        ch (str): A single character, or EOF_CHAR.

    Returns:
        bool: False for EOF_CHAR and for every non-ASCII character.
    """
    return ch != EOF_CHAR and (ch in ascii_letters or ch == "_")


def is_digit(ch: str) -> bool:
    """Whether `ch` is an ASCII decimal digit; EOF_CHAR is not."""
    return ch != EOF_CHAR and "0" <= ch <= "9"


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Positions count characters (code points), not bytes, so slicing the source
    with stream positions is always safe for multi-byte text.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        """
        Sets up a stream over `source`.

        Args:
            source (str): The text to read.
            position (int, optional): Index of the first unread character. Defaults to 0.
            line (int, optional): Line number of that character. Defaults to 1.
            column (int, optional): Column number of that character. Defaults to 1.
        """
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Returns:
            str: The next character.

        Raises:
            IndexError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise IndexError(
                f"CharacterStreamError: Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """
        Returns the character at the given offset from the current position without advancing.

        Args:
            offset (int, optional): Characters ahead of the cursor. Defaults to 0.

        Returns:
            str: The character at the offset, or EOF_CHAR if out of bounds.
        """
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return EOF_CHAR
        return self.source[index]

    def end_of_file(self) -> bool:
        """Checks whether the stream is exhausted.

        Returns:
            bool: True once every character of the source has been consumed.
        """
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token in the Monkey language.

    Attributes:
        kind (TokenKind): The token category.
        literal (str): The exact source text that produced the token.
        line (int): The 1-based line number where the token starts.
        col (int): The 1-based column number where the token starts.
    """

    def __init__(self, kind: TokenKind, literal: str, line: int = 0, col: int = 0):
        """Builds a token.

        Args:
            kind (TokenKind): The token category.
            literal (str): The scanned text.
            line (int, optional): Starting line, 0 when unknown.
            col (int, optional): Starting column, 0 when unknown.
        """
        self.kind = kind
        self.literal = literal
        self.line = line
        self.col = col

    def __repr__(self) -> str:
        """Returns a short form of the token.

        Returns:
            str: Kind and literal only, e.g. `Token(LET, 'let')`.
        """
        return f"Token({self.kind}, {self.literal!r})"

    def __eq__(self, other: Any) -> bool:
        """Tokens are equal when kind, literal and position all match.

        Args:
            other (Any): The object to compare with.

        Returns:
            bool: True for an identical token, False otherwise.
        """
        return (
            isinstance(other, Token)
            and self.kind == other.kind
            and self.literal == other.literal
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        """Hashes the same fields `__eq__` compares."""
        return hash((self.kind, self.literal, self.line, self.col))


class Lexer:
    """Lexical analyzer for the Monkey language.

    Takes a source string (or a prepared CharacterStream) and produces tokens
    on demand via ``next_token``. Iterating a lexer yields every token up to
    and including the first EOF.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, source: str | CharacterStream) -> None:
        """Wraps `source` in a CharacterStream unless it already is one.

        Args:
            source (str | CharacterStream): Text or a positioned stream to lex.
        """
        if isinstance(source, CharacterStream):
            self.stream = source
        else:
            self.stream = CharacterStream(source)

    def __iter__(self) -> Iterator[Token]:
        """Yields tokens up to and including the first EOF."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.kind is TokenKind.EOF:
                return

    def peek(self, offset: int = 0) -> str:
        """Looks ahead without consuming.

        Args:
            offset (int, optional): Characters past the cursor. Defaults to 0.

        Returns:
            str: The character there, or EOF_CHAR past the end.
        """
        return self.stream.peek(offset)

    def advance(self) -> str:
        """Consumes one character.

        Returns:
            str: The consumed character.
        """
        return self.stream.next()

    def skip_whitespace(self) -> None:
        """Consumes spaces, tabs, newlines and carriage returns."""
        while self.peek() != EOF_CHAR and self.peek() in WHITESPACE:
            self.advance()

    def match_operator(self) -> Token | None:
        """Attempts to match the longest valid operator from the current position.

        Returns:
            Token | None: A Token if a match is found, otherwise None.
        """
        line, col = self.stream.line, self.stream.column
        max_token = None
        candidate = ""

        for i in range(MAX_OPERATOR_LENGTH):
            ch = self.stream.peek(i)
            if ch == EOF_CHAR:
                break
            candidate += ch
            if candidate in operator_tokens:
                max_token = candidate

        if max_token:
            for _ in range(len(max_token)):
                self.advance()
            return Token(operator_tokens[max_token], max_token, line, col)

        return None

    def read_while(self, predicate: Callable[[str], bool]) -> str:
        """Consumes the longest run of characters accepted by `predicate`.

        Args:
            predicate (Callable[[str], bool]): Test applied to each upcoming character.

        Returns:
            str: The consumed run, possibly empty.
        """
        start = self.stream.position
        while predicate(self.peek()):
            self.advance()
        return self.stream.source[start : self.stream.position]

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token. EOF (empty literal) once the input is exhausted.
        """
        self.skip_whitespace()

        ch = self.peek()
        line, col = self.stream.line, self.stream.column

        if ch == EOF_CHAR:
            return Token(TokenKind.EOF, "", line, col)

        # 1. Identifier or keyword
        if is_letter(ch):
            ident = self.read_while(is_letter)
            return Token(KEYWORDS.get(ident, TokenKind.IDENT), ident, line, col)

        # 2. Integer
        if is_digit(ch):
            return Token(TokenKind.INT, self.read_while(is_digit), line, col)

        # 3. Operator or delimiter
        token = self.match_operator()
        if token:
            return token

        # 4. Unknown character
        return Token(TokenKind.ILLEGAL, self.advance(), line, col)


def tokenize(source: str) -> list[Token]:
    """Returns every token of ``source``, ending with the EOF token."""
    return list(Lexer(source))


__all__ = ["CharacterStream", "Lexer", "Token", "tokenize"]
