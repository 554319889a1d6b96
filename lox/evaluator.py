"""Tree-walk evaluator for Lox expression trees, with depth metering."""

import math
import operator
from typing import Any, Callable

from .expr import Binary, BinaryOp, Expr, Grouping, Literal, Unary, UnaryOp
from .types import Value, ValueKind, kind_of

# Two Python frames per nesting level; left-folded chains do not nest
MAX_DEPTH = 256


class EvalError(RuntimeError):
    def __init__(self, message: str, line: int = 0):
        super().__init__(f"{message} [line {line}]" if line else message)
        self.message = message
        self.line = line


class DepthExceeded(EvalError):
    pass


class LoxTypeError(EvalError):
    pass


class ExpectedNumber(LoxTypeError):
    def __init__(self, op: UnaryOp, line: int = 0):
        super().__init__(f"Operand of '{op.value}' must be a number.", line)


class ExpectedBoolean(LoxTypeError):
    def __init__(self, op: UnaryOp, line: int = 0):
        super().__init__(f"Operand of '{op.value}' must be a boolean.", line)


class NilOperand(LoxTypeError):
    def __init__(self, op: BinaryOp, line: int = 0):
        super().__init__(f"Operator '{op.value}' is not defined on nil.", line)


class UnsupportedOperator(LoxTypeError):
    def __init__(self, op: BinaryOp, kind: ValueKind, line: int = 0):
        super().__init__(f"Operator '{op.value}' is not supported for {kind.value}s.", line)


class MismatchedOperands(LoxTypeError):
    def __init__(self, op: BinaryOp, left: ValueKind, right: ValueKind, line: int = 0):
        super().__init__(
            f"Operands of '{op.value}' must have the same type, got {left.value} and {right.value}.",
            line,
        )


def _divide(x: float, y: float) -> float:
    # IEEE 754: x/0 is a signed infinity, 0/0 and nan/0 are nan
    try:
        return x / y
    except ZeroDivisionError:
        if x == 0 or math.isnan(x):
            return math.nan
        return math.copysign(math.inf, x) * math.copysign(1.0, y)


_NUMBER_OPS: dict[BinaryOp, Callable[[Any, Any], Value]] = {
    BinaryOp.EQUAL_EQUAL: operator.eq,
    BinaryOp.BANG_EQUAL: operator.ne,
    BinaryOp.LESS: operator.lt,
    BinaryOp.LESS_EQUAL: operator.le,
    BinaryOp.GREATER: operator.gt,
    BinaryOp.GREATER_EQUAL: operator.ge,
    BinaryOp.PLUS: operator.add,
    BinaryOp.MINUS: operator.sub,
    BinaryOp.STAR: operator.mul,
    BinaryOp.SLASH: _divide,
}

_BOOLEAN_OPS: dict[BinaryOp, Callable[[Any, Any], Value]] = {
    BinaryOp.EQUAL_EQUAL: operator.eq,
    BinaryOp.BANG_EQUAL: operator.ne,
}

_STRING_OPS: dict[BinaryOp, Callable[[Any, Any], Value]] = {
    BinaryOp.EQUAL_EQUAL: operator.eq,
    BinaryOp.BANG_EQUAL: operator.ne,
    BinaryOp.PLUS: operator.add,
}

# Every kind except NIL needs a table here; nil has no operators at all
OPS_BY_KIND: dict[ValueKind, dict[BinaryOp, Callable[[Any, Any], Value]]] = {
    ValueKind.BOOLEAN: _BOOLEAN_OPS,
    ValueKind.NUMBER: _NUMBER_OPS,
    ValueKind.STRING: _STRING_OPS,
}


class _EvalState:
    __slots__ = ("depth", "max_depth")

    def __init__(self, max_depth: int):
        self.depth = 0
        self.max_depth = max_depth


def evaluate(tree: Expr, *, max_depth: int = MAX_DEPTH) -> Value:
    """Evaluate an expression tree to a runtime value.

    Pure: the tree is not modified and no state survives the call, so the
    same tree always evaluates to the same value (or the same error).
    """
    return _eval(tree, _EvalState(max_depth))


def _eval(node: Expr, st: _EvalState) -> Value:
    st.depth += 1
    if st.depth > st.max_depth:
        st.depth -= 1
        raise DepthExceeded("max nesting depth exceeded")
    try:
        return _eval_inner(node, st)
    finally:
        st.depth -= 1


def _eval_inner(node: Expr, st: _EvalState) -> Value:
    if isinstance(node, Literal):
        return node.value

    if isinstance(node, Grouping):
        return _eval(node.inner, st)

    if isinstance(node, Unary):
        return _unary(node, _eval(node.operand, st))

    if isinstance(node, Binary):
        # A flat chain like 1 + 2 + 3 folds left: walk its left spine in a
        # loop so only real nesting counts toward the depth limit.
        spine = []
        while isinstance(node, Binary):
            spine.append(node)
            node = node.left
        value = _eval(node, st)
        # Both sides always run, left first; nothing short-circuits here
        for link in reversed(spine):
            right = _eval(link.right, st)
            value = _binary(link, value, right)
        return value

    raise EvalError(f"Unknown expression node: {type(node).__name__}")


def _unary(node: Unary, value: Value) -> Value:
    kind = kind_of(value)
    if node.op is UnaryOp.NEGATE:
        if kind is not ValueKind.NUMBER:
            raise ExpectedNumber(node.op, node.line)
        return -value

    if kind is not ValueKind.BOOLEAN:
        raise ExpectedBoolean(node.op, node.line)
    return not value


def _binary(node: Binary, left: Value, right: Value) -> Value:
    lk, rk = kind_of(left), kind_of(right)
    if lk is ValueKind.NIL or rk is ValueKind.NIL:
        raise NilOperand(node.op, node.line)
    if lk is not rk:
        raise MismatchedOperands(node.op, lk, rk, node.line)

    fn = OPS_BY_KIND[lk].get(node.op)
    if fn is None:
        raise UnsupportedOperator(node.op, lk, node.line)
    return fn(left, right)
