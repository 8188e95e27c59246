"""Expression evaluation against a workspace state.

Operand types must match exactly: there is no implicit conversion
between integers, floats and booleans. Integer arithmetic wraps to
64 bits. Integer division by zero is not checked here and surfaces as
ZeroDivisionError.
"""

from __future__ import annotations
import math
import operator

from wgslplus.errors import UndefinedVariableError, InvalidExpressionError
from wgslplus.parser.ast_nodes import (
    Expr, Literal, IntegerLit, FloatLit, BoolLit, Reference, Operator, Unary,
    Comparison, Parenthesized, BinaryOperator, UnaryOperator,
    ComparisonOperator, wrap_i64,
)


def _truncating_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _ieee_div(a: float, b: float) -> float:
    if b != 0.0:
        return a / b
    if a == 0.0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


_INTEGER_OPS = {
    BinaryOperator.ADD: operator.add,
    BinaryOperator.SUBTRACT: operator.sub,
    BinaryOperator.MULTIPLY: operator.mul,
    BinaryOperator.DIVIDE: _truncating_div,
    BinaryOperator.BITWISE_AND: operator.and_,
    BinaryOperator.BITWISE_OR: operator.or_,
}

_FLOAT_OPS = {
    BinaryOperator.ADD: operator.add,
    BinaryOperator.SUBTRACT: operator.sub,
    BinaryOperator.MULTIPLY: operator.mul,
    BinaryOperator.DIVIDE: _ieee_div,
}

_BOOL_OPS = {
    BinaryOperator.BITWISE_AND: operator.and_,
    BinaryOperator.BITWISE_OR: operator.or_,
}

_ORDERINGS = {
    ComparisonOperator.EQUAL: operator.eq,
    ComparisonOperator.NOT_EQUAL: operator.ne,
    ComparisonOperator.LESS_THAN: operator.lt,
    ComparisonOperator.LESS_THAN_OR_EQUAL: operator.le,
    ComparisonOperator.GREATER_THAN: operator.gt,
    ComparisonOperator.GREATER_THAN_OR_EQUAL: operator.ge,
}

# Literals of different kinds order by kind.
_KIND_RANK = {
    IntegerLit: 0,
    FloatLit: 1,
    BoolLit: 2,
}


def evaluate(expr: Expr, state) -> Literal:
    """Evaluate an expression tree.

    Args:
        expr: A parsed expression.
        state: Anything with a `get(name)` method returning a literal or None.

    Returns:
        The resulting IntegerLit, FloatLit or BoolLit.
    """
    if isinstance(expr, (IntegerLit, FloatLit, BoolLit)):
        return expr
    elif isinstance(expr, Reference):
        value = state.get(expr.name)
        if value is None:
            raise UndefinedVariableError(expr.name)
        return value
    elif isinstance(expr, Operator):
        left = evaluate(expr.left, state)
        right = evaluate(expr.right, state)
        return _apply_operator(expr.op, left, right)
    elif isinstance(expr, Unary):
        return _apply_unary(expr.op, evaluate(expr.operand, state))
    elif isinstance(expr, Comparison):
        return _apply_comparison(expr, state)
    elif isinstance(expr, Parenthesized):
        return evaluate(expr.inner, state)
    raise TypeError(f"Unknown expression type: {type(expr).__name__}")


def is_truthy(value: Literal) -> bool:
    """Nonzero numbers and `true` count as true."""
    if isinstance(value, BoolLit):
        return value.value
    return value.value != 0


def _apply_operator(op: BinaryOperator, left: Literal, right: Literal) -> Literal:
    if isinstance(left, IntegerLit) and isinstance(right, IntegerLit):
        return IntegerLit(wrap_i64(_INTEGER_OPS[op](left.value, right.value)))
    if isinstance(left, FloatLit) and isinstance(right, FloatLit) and op in _FLOAT_OPS:
        return FloatLit(_FLOAT_OPS[op](left.value, right.value))
    if isinstance(left, BoolLit) and isinstance(right, BoolLit) and op in _BOOL_OPS:
        return BoolLit(_BOOL_OPS[op](left.value, right.value))
    raise InvalidExpressionError(
        f"Cannot apply '{op.value}' to {_kind(left)} and {_kind(right)}"
    )


def _apply_unary(op: UnaryOperator, operand: Literal) -> Literal:
    if op is UnaryOperator.NEGATE:
        if isinstance(operand, IntegerLit):
            return IntegerLit(wrap_i64(-operand.value))
        if isinstance(operand, FloatLit):
            return FloatLit(-operand.value)
    elif op is UnaryOperator.NOT:
        if isinstance(operand, BoolLit):
            return BoolLit(not operand.value)
    elif op is UnaryOperator.BITWISE_NOT:
        if isinstance(operand, IntegerLit):
            return IntegerLit(~operand.value)
    raise InvalidExpressionError(f"Cannot apply '{op.value}' to {_kind(operand)}")


def _apply_comparison(expr: Comparison, state) -> Literal:
    left = evaluate(expr.left, state)

    if expr.op is ComparisonOperator.AND or expr.op is ComparisonOperator.OR:
        if not isinstance(left, BoolLit):
            raise InvalidExpressionError(
                f"Left operand of '{expr.op.value}' must be a bool, got {_kind(left)}"
            )
        # Short-circuit: the right side is only evaluated when it decides the result.
        if left.value == (expr.op is ComparisonOperator.AND):
            return evaluate(expr.right, state)
        return left

    right = evaluate(expr.right, state)
    if type(left) is type(right):
        return BoolLit(_ORDERINGS[expr.op](left.value, right.value))
    return BoolLit(_ORDERINGS[expr.op](_KIND_RANK[type(left)], _KIND_RANK[type(right)]))


def _kind(value: Literal) -> str:
    return {IntegerLit: "integer", FloatLit: "float", BoolLit: "bool"}[type(value)]
