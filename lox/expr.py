"""Expression tree produced by the parser and walked by the evaluator.

Nodes are frozen: evaluation never mutates a tree, and each node owns its
children outright (no sharing, no back references).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .types import Value


class UnaryOp(Enum):
    NEGATE = "-"
    NOT = "!"


class BinaryOp(Enum):
    EQUAL_EQUAL = "=="
    BANG_EQUAL = "!="
    LESS = "<"
    LESS_EQUAL = "<="
    GREATER = ">"
    GREATER_EQUAL = ">="
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"


@dataclass(frozen=True)
class Literal:
    value: Value

    def __str__(self) -> str:
        v = self.value
        if v is None:
            return "nil"
        if isinstance(v, bool):
            return "true" if v else "false"
        if isinstance(v, str):
            return f'"{v}"'
        return repr(v)


@dataclass(frozen=True)
class Unary:
    op: UnaryOp
    operand: "Expr"
    line: int = 0

    def __str__(self) -> str:
        return f"({self.op.value} {self.operand})"


@dataclass(frozen=True)
class Binary:
    left: "Expr"
    op: BinaryOp
    right: "Expr"
    line: int = 0

    def __str__(self) -> str:
        return f"({self.op.value} {self.left} {self.right})"


@dataclass(frozen=True)
class Grouping:
    """A parenthesized expression, kept as its own node.

    Statement-level parsing needs to tell `(a) = 1` apart from `a = 1`, so
    the parentheses are not folded away.
    """

    inner: "Expr"

    def __str__(self) -> str:
        return f"(group {self.inner})"


Expr = Union[Literal, Unary, Binary, Grouping]
