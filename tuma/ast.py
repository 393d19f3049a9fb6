from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

from tuma.lexer import Position


@dataclass(frozen=True)
class Node:
    """Basic node class.

    Positions are informational only and never take part in node equality.
    """
    pos: Optional[Position] = field(default=None, compare=False, kw_only=True, repr=False)


@dataclass(frozen=True)
class Ident(Node):
    name: str


@dataclass(frozen=True)
class Number(Node):
    value: int


@dataclass(frozen=True)
class Var(Node):
    ident: Ident

    @property
    def name(self) -> str:
        return self.ident.name


@dataclass(frozen=True)
class Parenthesized(Node):
    expr: Expr


@dataclass(frozen=True)
class BinaryOperator(Node):
    """Base class for binary operators."""
    left: Expr
    right: Expr

    symbol = ""


@dataclass(frozen=True)
class Add(BinaryOperator):
    symbol = "+"


@dataclass(frozen=True)
class Sub(BinaryOperator):
    symbol = "-"


@dataclass(frozen=True)
class Mul(BinaryOperator):
    symbol = "*"


Expr = Union[Number, Var, Parenthesized, Add, Sub, Mul]


@dataclass(frozen=True)
class ExprStatement(Node):
    expr: Expr


@dataclass(frozen=True)
class Assignment(Node):
    lhs: Ident
    rhs: Expr


Statement = Union[ExprStatement, Assignment]


@dataclass(frozen=True)
class Program(Node):
    statements: Sequence[Statement] = ()

    def __post_init__(self):
        object.__setattr__(self, "statements", tuple(self.statements))
