"""
Monkey Language Parser

Parses the token stream of a Lexer into a Program of statements and expressions.

Statements are parsed top-down; expressions are parsed by precedence climbing
(Pratt parsing) driven by two dispatch tables:

- prefix productions, selected by the kind of the current token
  (identifiers, integers, booleans, `!`/`-`, grouping, `if`, `fn`)
- infix productions, selected by the kind of the next token
  (`+ - * / < > == !=` and call parentheses)

Parser Behavior
---------------
- Works on two tokens at a time: `current` and one token of lookahead (`peek`).
- A defect inside a statement raises ParsingError; parse_program catches it at
  the statement boundary, records it in `errors`, advances one token and
  carries on. One pass reports every error it finds.
- Nesting deeper than the interpreter stack allows is recorded as an error too;
  the rest of that statement is skipped up to the next `;`.
- ParsingError never leaves parse_program; callers only see it in `errors`.
- parse_program always returns a Program, possibly with fewer statements than
  the source holds. Callers decide what to do with a program that has errors.

Entry Points
------------
- `Parser(lexer).parse_program()`: Parse a full program; errors land in `parser.errors`.
- `parse(source)`: Convenience wrapper returning a ParseResult(program, errors).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import NamedTuple

from monkey.monkey_ast import (
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
)
from monkey.monkey_constants import MAX_INTEGER, Precedence, TokenKind, precedence_of
from monkey.monkey_lexer import Lexer, Token

logger = logging.getLogger(__name__)

PrefixParseFn = Callable[[], Expression]
InfixParseFn = Callable[[Expression], Expression]


class ParsingError(SyntaxError):
    """A recoverable grammar error tied to the token where it was found."""

    def __init__(self, message: str, token: Token | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = token.line if token else 0
        self.col = token.col if token else 0

    def __str__(self) -> str:
        if self.line:
            return f"{self.message} (line {self.line}, col {self.col})"
        return self.message


class ParseResult(NamedTuple):
    program: Program
    errors: list[ParsingError]

    @property
    def ok(self) -> bool:
        return not self.errors


def describe(token: Token) -> str:
    if token.kind is TokenKind.EOF:
        return "end of input"
    return repr(token.literal)


class Parser:
    """
    Monkey Parser Class

    Owns a Lexer and pulls tokens from it on demand. Two tokens are read on
    construction to prime `current` and `peek`.

    Attributes
    ----------
    lexer : Lexer
        The only source of further tokens.
    current : Token
        The token under examination.
    peek : Token
        One token of lookahead.
    errors : list[ParsingError]
        Every error recorded by parse_program, in source order.
    prefix_parse_fns : dict[TokenKind, PrefixParseFn]
        Prefix productions, keyed by the kind of `current`.
    infix_parse_fns : dict[TokenKind, InfixParseFn]
        Infix productions, keyed by the kind of `peek`.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self.errors: list[ParsingError] = []

        self.current: Token = lexer.next_token()
        self.peek: Token = lexer.next_token()

        self.prefix_parse_fns: dict[TokenKind, PrefixParseFn] = {
            TokenKind.IDENT: self.parse_identifier,
            TokenKind.INT: self.parse_integer_literal,
            TokenKind.BANG: self.parse_prefix_expression,
            TokenKind.MINUS: self.parse_prefix_expression,
            TokenKind.TRUE: self.parse_boolean,
            TokenKind.FALSE: self.parse_boolean,
            TokenKind.LPAREN: self.parse_grouped_expression,
            TokenKind.IF: self.parse_if_expression,
            TokenKind.FUNCTION: self.parse_function_literal,
        }

        self.infix_parse_fns: dict[TokenKind, InfixParseFn] = {
            kind: self.parse_infix_expression
            for kind in (
                TokenKind.PLUS,
                TokenKind.MINUS,
                TokenKind.SLASH,
                TokenKind.ASTERISK,
                TokenKind.EQ,
                TokenKind.NOT_EQ,
                TokenKind.LT,
                TokenKind.GT,
            )
        }
        self.infix_parse_fns[TokenKind.LPAREN] = self.parse_call_expression

    # Token cursor

    def advance(self) -> None:
        self.current = self.peek
        self.peek = self.lexer.next_token()

    def current_is(self, kind: TokenKind) -> bool:
        return self.current.kind is kind

    def peek_is(self, kind: TokenKind) -> bool:
        return self.peek.kind is kind

    def expect_peek(self, kind: TokenKind) -> None:
        """Advance onto `peek` if it has the expected kind, else raise without advancing."""
        if not self.peek_is(kind):
            raise ParsingError(
                f"expected next token to be {kind}, got {describe(self.peek)} instead",
                self.peek,
            )
        self.advance()

    def current_precedence(self) -> Precedence:
        return precedence_of(self.current.kind)

    def peek_precedence(self) -> Precedence:
        return precedence_of(self.peek.kind)

    # Statements

    def parse_program(self) -> Program:
        """Parse statements until EOF, recording errors and skipping past them."""
        program = Program()
        while not self.current_is(TokenKind.EOF):
            try:
                program.statements.append(self.parse_statement())
            except ParsingError as e:
                logger.debug("recorded parse error: %s", e)
                self.errors.append(e)
            except RecursionError:
                e = ParsingError("expression nested too deeply", self.current)
                logger.debug("recorded parse error: %s", e)
                self.errors.append(e)
                self.skip_statement()
            self.advance()
        return program

    def skip_statement(self) -> None:
        """Move `current` onto the next `;` or EOF, dropping the rest of a statement."""
        while not (
            self.current_is(TokenKind.SEMICOLON) or self.current_is(TokenKind.EOF)
        ):
            self.advance()

    def parse_statement(self) -> Statement:
        if self.current_is(TokenKind.LET):
            return self.parse_let_statement()
        if self.current_is(TokenKind.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement:
        let_tok = self.current

        self.expect_peek(TokenKind.IDENT)
        identifier = Identifier(self.current, self.current.literal)

        self.expect_peek(TokenKind.ASSIGN)
        self.advance()

        value = self.parse_expression(Precedence.LOWEST)
        if self.peek_is(TokenKind.SEMICOLON):
            self.advance()

        return LetStatement(let_tok, identifier, value)

    def parse_return_statement(self) -> ReturnStatement:
        return_tok = self.current
        self.advance()

        value = self.parse_expression(Precedence.LOWEST)
        if self.peek_is(TokenKind.SEMICOLON):
            self.advance()

        return ReturnStatement(return_tok, value)

    def parse_expression_statement(self) -> ExpressionStatement:
        first_tok = self.current
        value = self.parse_expression(Precedence.LOWEST)
        if self.peek_is(TokenKind.SEMICOLON):
            self.advance()
        return ExpressionStatement(first_tok, value)

    def parse_block_statement(self) -> BlockStatement:
        """Parse `{ ... }` with `current` on the opening brace."""
        block = BlockStatement(self.current)
        self.advance()

        while not self.current_is(TokenKind.RBRACE):
            if self.current_is(TokenKind.EOF):
                raise ParsingError(
                    "unterminated block: expected RBRACE, got end of input",
                    block.token,
                )
            block.statements.append(self.parse_statement())
            self.advance()

        return block

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Expression:
        prefix = self.prefix_parse_fns.get(self.current.kind)
        if prefix is None:
            raise ParsingError(
                f"no prefix parse function for {self.current.kind} "
                f"({describe(self.current)}) found",
                self.current,
            )
        left = prefix()

        while (
            not self.peek_is(TokenKind.SEMICOLON)
            and precedence < self.peek_precedence()
        ):
            infix = self.infix_parse_fns.get(self.peek.kind)
            if infix is None:
                return left
            self.advance()
            left = infix(left)

        return left

    def parse_identifier(self) -> Identifier:
        return Identifier(self.current, self.current.literal)

    def parse_integer_literal(self) -> IntegerLiteral:
        tok = self.current
        literal = tok.literal
        if not literal or not all("0" <= ch <= "9" for ch in literal):
            raise ParsingError(f"could not parse {literal!r} as integer", tok)
        value = int(literal)
        if value > MAX_INTEGER:
            raise ParsingError(
                f"integer literal {literal} is out of range (max {MAX_INTEGER})", tok
            )
        return IntegerLiteral(tok, value)

    def parse_boolean(self) -> BooleanLiteral:
        return BooleanLiteral(self.current, self.current_is(TokenKind.TRUE))

    def parse_prefix_expression(self) -> PrefixExpression:
        op_tok = self.current
        self.advance()
        operand = self.parse_expression(Precedence.PREFIX)
        return PrefixExpression(op_tok, op_tok.literal, operand)

    def parse_infix_expression(self, left: Expression) -> InfixExpression:
        op_tok = self.current
        precedence = self.current_precedence()
        self.advance()
        right = self.parse_expression(precedence)
        return InfixExpression(op_tok, left, op_tok.literal, right)

    def parse_grouped_expression(self) -> Expression:
        self.advance()
        expr = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TokenKind.RPAREN)
        return expr

    def parse_if_expression(self) -> IfExpression:
        if_tok = self.current

        self.expect_peek(TokenKind.LPAREN)
        self.advance()
        condition = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TokenKind.RPAREN)

        self.expect_peek(TokenKind.LBRACE)
        consequence = self.parse_block_statement()

        alternative = None
        if self.peek_is(TokenKind.ELSE):
            self.advance()
            self.expect_peek(TokenKind.LBRACE)
            alternative = self.parse_block_statement()

        return IfExpression(if_tok, condition, consequence, alternative)

    def parse_function_literal(self) -> FunctionLiteral:
        fn_tok = self.current

        self.expect_peek(TokenKind.LPAREN)
        parameters = self.parse_function_parameters()

        self.expect_peek(TokenKind.LBRACE)
        body = self.parse_block_statement()

        return FunctionLiteral(fn_tok, parameters, body)

    def parse_function_parameters(self) -> list[Identifier]:
        parameters: list[Identifier] = []

        if self.peek_is(TokenKind.RPAREN):
            self.advance()
            return parameters

        self.expect_peek(TokenKind.IDENT)
        parameters.append(Identifier(self.current, self.current.literal))

        while self.peek_is(TokenKind.COMMA):
            self.advance()
            self.expect_peek(TokenKind.IDENT)
            parameters.append(Identifier(self.current, self.current.literal))

        self.expect_peek(TokenKind.RPAREN)
        return parameters

    def parse_call_expression(self, function: Expression) -> CallExpression:
        return CallExpression(self.current, function, self.parse_call_arguments())

    def parse_call_arguments(self) -> list[Expression]:
        arguments: list[Expression] = []

        if self.peek_is(TokenKind.RPAREN):
            self.advance()
            return arguments

        self.advance()
        arguments.append(self.parse_expression(Precedence.LOWEST))

        while self.peek_is(TokenKind.COMMA):
            self.advance()
            self.advance()
            arguments.append(self.parse_expression(Precedence.LOWEST))

        self.expect_peek(TokenKind.RPAREN)
        return arguments


def parse(source: str) -> ParseResult:
    """Parse ``source`` and return the program together with every error found."""
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return ParseResult(program, parser.errors)


__all__ = ["ParseResult", "Parser", "ParsingError", "parse"]
