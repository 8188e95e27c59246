"""Recursive-descent parser for directive expressions.

The parser works directly on the character stream, there is no separate
tokenizer pass. Binary operators take the whole remaining input as their
right operand, which makes every binary expression right-associative and
ignores operator precedence: `a - b - c` parses as `a - (b - c)` and
`1 + 2 * 3` as `1 + (2 * 3)`, but `2 * 3 + 1` as `2 * (3 + 1)`. Use
parentheses where the grouping matters.

Each binary operator and each nesting level costs one level of Python
recursion, so an expression of roughly a thousand operators exceeds the
interpreter limit and raises ExpressionTooDeepError.
"""

from __future__ import annotations
from typing import Optional

from wgslplus.errors import (
    NoExpressionError, NoClosingParenthesisError, DuplicatePeriodError,
    InvalidBaseError, IntegerConversionError, FloatConversionError,
    LeftoverCharsError, ExpressionTooDeepError,
)
from wgslplus.parser.ast_nodes import (
    Expr, IntegerLit, FloatLit, BoolLit, Reference, Operator, Unary,
    Comparison, Parenthesized, BinaryOperator, UnaryOperator,
    ComparisonOperator, I64_MAX,
)
from wgslplus.parser.cursor import CharCursor

_DECIMAL_DIGITS = frozenset("0123456789")
# Letters are hex digits after 0x, so 0xff is one literal rather than a
# base error on the first letter.
_HEX_LETTERS = frozenset("abcdef")

_RADIX_PREFIXES = {
    "b": 2,
    "o": 8,
    "x": 16,
}

_UNARY_OPERATORS = {
    "!": UnaryOperator.NOT,
    "~": UnaryOperator.BITWISE_NOT,
    "-": UnaryOperator.NEGATE,
}

# Two-character tokens come first so "&&" is not read as "&".
_BINARY_TOKENS = [
    ("&&", ComparisonOperator.AND),
    ("||", ComparisonOperator.OR),
    (">=", ComparisonOperator.GREATER_THAN_OR_EQUAL),
    ("<=", ComparisonOperator.LESS_THAN_OR_EQUAL),
    ("!=", ComparisonOperator.NOT_EQUAL),
    ("==", ComparisonOperator.EQUAL),
    ("+", BinaryOperator.ADD),
    ("-", BinaryOperator.SUBTRACT),
    ("*", BinaryOperator.MULTIPLY),
    ("/", BinaryOperator.DIVIDE),
    ("&", BinaryOperator.BITWISE_AND),
    ("|", BinaryOperator.BITWISE_OR),
    (">", ComparisonOperator.GREATER_THAN),
    ("<", ComparisonOperator.LESS_THAN),
]


def parse_expression(source: str) -> Expr:
    """Parse a complete expression. Whitespace anywhere in `source` is ignored."""
    cursor = CharCursor("".join(ch for ch in source if not ch.isspace()))
    try:
        expr = _parse_one(cursor, shallow=False)
    except RecursionError as exc:
        raise ExpressionTooDeepError() from exc
    if expr is None:
        raise NoExpressionError()
    if not cursor.at_end():
        raise LeftoverCharsError(cursor.rest())
    return expr


def _parse_one(cursor: CharCursor, shallow: bool) -> Optional[Expr]:
    """Parse a single term and, unless `shallow`, any binary continuation.

    Returns None when the cursor does not start an expression.
    """
    ch = cursor.peek()
    if ch is None:
        return None

    if ch in _UNARY_OPERATORS:
        cursor.advance()
        operand = _parse_one(cursor, shallow=True)
        if operand is None:
            raise NoExpressionError(f"Expected an operand after '{ch}'")
        single = Unary(_UNARY_OPERATORS[ch], operand)
    elif ch == "(":
        cursor.advance()
        inner = _parse_one(cursor, shallow=False)
        if inner is None:
            raise NoExpressionError("Expected an expression after '('")
        if cursor.peek() != ")":
            raise NoClosingParenthesisError()
        cursor.advance()
        single = Parenthesized(inner)
    elif ch in _DECIMAL_DIGITS:
        single = _parse_number(cursor)
    elif ch.isalpha() or ch == "_":
        single = _parse_identifier(cursor)
    else:
        return None

    if shallow:
        return single

    for token, op in _BINARY_TOKENS:
        if not cursor.startswith(token):
            continue
        cursor.advance(len(token))
        right = _parse_one(cursor, shallow=False)
        if right is None:
            raise NoExpressionError(f"Expected an expression after '{token}'")
        if isinstance(op, ComparisonOperator):
            return Comparison(single, op, right)
        return Operator(single, op, right)

    return single


def _parse_number(cursor: CharCursor) -> Expr:
    start = cursor.pos
    digits = [cursor.advance()]
    radix = 10
    period = False

    while True:
        ch = cursor.peek()
        if ch is None:
            break
        lower = ch.lower()
        if ch in _DECIMAL_DIGITS or (radix == 16 and lower in _HEX_LETTERS):
            digits.append(cursor.advance())
        elif ch == "_":
            cursor.advance()
        elif ch == ".":
            if period:
                raise DuplicatePeriodError()
            if radix != 10:
                raise InvalidBaseError(cursor.text[start:cursor.pos + 1])
            period = True
            digits.append(cursor.advance())
        elif lower in _RADIX_PREFIXES:
            if radix != 10 or digits != ["0"]:
                raise InvalidBaseError(cursor.text[start:cursor.pos + 1])
            cursor.advance()
            radix = _RADIX_PREFIXES[lower]
            digits = []
        else:
            break

    literal = "".join(digits)
    if period:
        try:
            return FloatLit(float(literal))
        except ValueError as exc:
            raise FloatConversionError(literal, str(exc)) from exc

    try:
        value = int(literal, radix)
    except ValueError as exc:
        raise IntegerConversionError(cursor.text[start:cursor.pos], str(exc)) from exc
    if value > I64_MAX:
        raise IntegerConversionError(
            cursor.text[start:cursor.pos], "number too large to fit in a 64-bit integer"
        )
    return IntegerLit(value)


def _parse_identifier(cursor: CharCursor) -> Expr:
    name = [cursor.advance()]
    while True:
        ch = cursor.peek()
        if ch is None or not (ch.isalnum() or ch == "_"):
            break
        name.append(cursor.advance())

    name = "".join(name)
    if name == "true":
        return BoolLit(True)
    if name == "false":
        return BoolLit(False)
    return Reference(name)
