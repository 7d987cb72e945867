"""
Shared lexical and grammar tables for the Monkey language.

Defines:
    TokenKind: The closed set of token categories produced by the lexer.
    operator_tokens: Literal text → TokenKind for operators and delimiters.
    KEYWORDS: The reserved words recognised after an identifier has been scanned.
    Precedence: Binding power levels used by the Pratt parser.
    PRECEDENCES: Token kind → binding power for every infix-capable token.
    MAX_INTEGER: Largest value an integer literal may hold.
"""

from enum import Enum, IntEnum


class TokenKind(Enum):
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # Identifiers and literals
    IDENT = "IDENT"
    INT = "INT"

    # Operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"
    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="

    # Delimiters
    COMMA = ","
    SEMICOLON = ";"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"

    # Keywords
    FUNCTION = "FUNCTION"
    LET = "LET"
    TRUE = "TRUE"
    FALSE = "FALSE"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"

    def __str__(self) -> str:
        return self.name


KEYWORDS: dict[str, TokenKind] = {
    "fn": TokenKind.FUNCTION,
    "let": TokenKind.LET,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "return": TokenKind.RETURN,
}

# Operator and delimiter spellings. Multi-character entries are found by
# longest match, so "==" and "!=" always win over "=" and "!".
operator_tokens: dict[str, TokenKind] = {
    "=": TokenKind.ASSIGN,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "!": TokenKind.BANG,
    "*": TokenKind.ASTERISK,
    "/": TokenKind.SLASH,
    "<": TokenKind.LT,
    ">": TokenKind.GT,
    "==": TokenKind.EQ,
    "!=": TokenKind.NOT_EQ,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMICOLON,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
}

MAX_OPERATOR_LENGTH = max(len(op) for op in operator_tokens)


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2  # ==
    LESSGREATER = 3  # > or <
    SUM = 4  # +
    PRODUCT = 5  # *
    PREFIX = 6  # -x or !x
    CALL = 7  # fn(x)


PRECEDENCES: dict[TokenKind, Precedence] = {
    TokenKind.EQ: Precedence.EQUALS,
    TokenKind.NOT_EQ: Precedence.EQUALS,
    TokenKind.LT: Precedence.LESSGREATER,
    TokenKind.GT: Precedence.LESSGREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.LPAREN: Precedence.CALL,
}


def precedence_of(kind: TokenKind) -> Precedence:
    """Returns the binding power of ``kind``, or LOWEST for non-operators."""
    return PRECEDENCES.get(kind, Precedence.LOWEST)


# Integer literals are unsigned 64-bit values.
MAX_INTEGER = 2**64 - 1


__all__ = [
    "KEYWORDS",
    "MAX_INTEGER",
    "MAX_OPERATOR_LENGTH",
    "PRECEDENCES",
    "Precedence",
    "TokenKind",
    "operator_tokens",
    "precedence_of",
]
