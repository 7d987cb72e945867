"""
Defines the abstract syntax tree (AST) node structure for the Monkey programming language.

The tree is a closed set of node classes, one per grammar production:

Expressions:
    Identifier, IntegerLiteral, BooleanLiteral, PrefixExpression, InfixExpression,
    IfExpression, FunctionLiteral, CallExpression, PlaceholderExpression

Statements:
    LetStatement, ReturnStatement, ExpressionStatement, BlockStatement

Root:
    Program

Every node keeps the first token consumed for it and exposes:
    token_literal(): The literal of that token, used for diagnostics and tests.
    __str__(): Canonical source text, with every operator expression parenthesised.
    to_dict(): A JSON-friendly ASTDict tree.

Each composite node exclusively owns its children; the tree has no sharing and
no cycles.
"""

from dataclasses import dataclass, field
from typing import Any, TypedDict

from monkey.monkey_lexer import Token


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of a Node used for serialization.

    Fields:
        kind (str): Node class name (e.g., "LetStatement", "InfixExpression").
        literal (str): Literal of the node's token.
        line (int): Line number in the source code where the node originates.
        col (int): Column number in the source code where the node originates.
        value (Any): Scalar payload (identifier name, integer, boolean) or child node.
        operator (str): Operator text for prefix and infix expressions.
        children (dict[str, Any]): Named child nodes or lists of child nodes.
    """

    kind: str
    literal: str
    line: int
    col: int
    value: Any
    operator: str
    children: dict[str, Any]


def _dump(value: Any) -> Any:
    if isinstance(value, Node):
        return value.to_dict()
    if isinstance(value, list):
        return [_dump(v) for v in value]
    return value


class Node:
    """Shared capability of every AST node."""

    token: Token

    def token_literal(self) -> str:
        return self.token.literal

    def _base_dict(self) -> ASTDict:
        return {
            "kind": type(self).__name__,
            "literal": self.token.literal,
            "line": self.token.line,
            "col": self.token.col,
        }

    def to_dict(self) -> ASTDict:
        return self._base_dict()


class Expression(Node):
    pass


class Statement(Node):
    pass


# Expressions


@dataclass
class Identifier(Expression):
    """A name. ``value`` always equals the token literal."""

    token: Token
    value: str

    def __str__(self) -> str:
        return self.value

    def to_dict(self) -> ASTDict:
        d = self._base_dict()
        d["value"] = self.value
        return d


@dataclass
class IntegerLiteral(Expression):
    token: Token
    value: int

    def __str__(self) -> str:
        return self.token.literal

    def to_dict(self) -> ASTDict:
        d = self._base_dict()
        d["value"] = self.value
        return d


@dataclass
class BooleanLiteral(Expression):
    token: Token
    value: bool

    def __str__(self) -> str:
        return self.token.literal

    def to_dict(self) -> ASTDict:
        d = self._base_dict()
        d["value"] = self.value
        return d


@dataclass
class PrefixExpression(Expression):
    """Unary operator applied to ``operand`` (``-x``, ``!x``)."""

    token: Token
    operator: str
    operand: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.operand})"

    def to_dict(self) -> ASTDict:
        d = self._base_dict()
        d["operator"] = self.operator
        d["children"] = {"operand": _dump(self.operand)}
        return d


@dataclass
class InfixExpression(Expression):
    """Binary operator; ``token`` is the operator token."""

    token: Token
    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"

    def to_dict(self) -> ASTDict:
        d = self._base_dict()
        d["operator"] = self.operator
        d["children"] = {"left": _dump(self.left), "right": _dump(self.right)}
        return d


@dataclass
class IfExpression(Expression):
    token: Token
    condition: Expression
    consequence: "BlockStatement"
    alternative: "BlockStatement | None" = None

    def __str__(self) -> str:
        out = f"if {self.condition} {self.consequence}"
        if self.alternative is not None:
            out += f" else {self.alternative}"
        return out

    def to_dict(self) -> ASTDict:
        d = self._base_dict()
        d["children"] = {
            "condition": _dump(self.condition),
            "consequence": _dump(self.consequence),
            "alternative": _dump(self.alternative),
        }
        return d


@dataclass
class FunctionLiteral(Expression):
    token: Token
    parameters: list[Identifier]
    body: "BlockStatement"

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"{self.token_literal()}({params}) {self.body}"

    def to_dict(self) -> ASTDict:
        d = self._base_dict()
        d["children"] = {
            "parameters": _dump(self.parameters),
            "body": _dump(self.body),
        }
        return d


@dataclass
class CallExpression(Expression):
    """``function(arguments...)``; ``token`` is the opening parenthesis."""

    token: Token
    function: Expression
    arguments: list[Expression] = field(default_factory=list)

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"

    def to_dict(self) -> ASTDict:
        d = self._base_dict()
        d["children"] = {
            "function": _dump(self.function),
            "arguments": _dump(self.arguments),
        }
        return d


@dataclass
class PlaceholderExpression(Expression):
    """Stands in for an expression whose production is not written yet.

    The parser never produces one: a missing production is reported as a
    ParsingError instead.
    """

    token: Token

    def __str__(self) -> str:
        return "<placeholder>"


# Statements


@dataclass
class LetStatement(Statement):
    token: Token
    identifier: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.identifier} = {self.value};"

    def to_dict(self) -> ASTDict:
        d = self._base_dict()
        d["children"] = {
            "identifier": _dump(self.identifier),
            "value": _dump(self.value),
        }
        return d


@dataclass
class ReturnStatement(Statement):
    token: Token
    value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.value};"

    def to_dict(self) -> ASTDict:
        d = self._base_dict()
        d["children"] = {"value": _dump(self.value)}
        return d


@dataclass
class ExpressionStatement(Statement):
    """A bare expression used as a statement; ``token`` is its first token."""

    token: Token
    value: Expression

    def __str__(self) -> str:
        return str(self.value)

    def to_dict(self) -> ASTDict:
        d = self._base_dict()
        d["children"] = {"value": _dump(self.value)}
        return d


@dataclass
class BlockStatement(Statement):
    """``{ ... }`` body of an if-expression or function literal."""

    token: Token
    statements: list[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        return "{ " + " ".join(str(s) for s in self.statements) + " }"

    def to_dict(self) -> ASTDict:
        d = self._base_dict()
        d["children"] = {"statements": _dump(self.statements)}
        return d


@dataclass
class Program:
    """Root of the tree: top-level statements in source order."""

    statements: list[Statement] = field(default_factory=list)

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self) -> str:
        return "\n".join(str(s) for s in self.statements)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "Program", "statements": _dump(self.statements)}


__all__ = [
    "ASTDict",
    "BlockStatement",
    "BooleanLiteral",
    "CallExpression",
    "Expression",
    "ExpressionStatement",
    "FunctionLiteral",
    "Identifier",
    "IfExpression",
    "InfixExpression",
    "IntegerLiteral",
    "LetStatement",
    "Node",
    "PlaceholderExpression",
    "PrefixExpression",
    "Program",
    "ReturnStatement",
    "Statement",
]
