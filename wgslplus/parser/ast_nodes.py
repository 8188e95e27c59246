"""AST node definitions for expressions and shader segments."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

I64_MIN = -(1 << 63)
I64_MAX = (1 << 63) - 1


def wrap_i64(value: int) -> int:
    """Wrap an arbitrary Python int to the signed 64-bit range."""
    value &= (1 << 64) - 1
    if value > I64_MAX:
        value -= 1 << 64
    return value


# --- Literals ---

@dataclass(frozen=True)
class IntegerLit:
    value: int

    def __post_init__(self):
        if not I64_MIN <= self.value <= I64_MAX:
            raise ValueError(f"Integer literal out of 64-bit range: {self.value}")


@dataclass(frozen=True)
class FloatLit:
    value: float


@dataclass(frozen=True)
class BoolLit:
    value: bool


Literal = Union[IntegerLit, FloatLit, BoolLit]


# --- Operators ---

class BinaryOperator(Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    BITWISE_AND = "&"
    BITWISE_OR = "|"


class UnaryOperator(Enum):
    NEGATE = "-"
    NOT = "!"
    BITWISE_NOT = "~"


class ComparisonOperator(Enum):
    EQUAL = "=="
    NOT_EQUAL = "!="
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL = "<="
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="
    AND = "&&"
    OR = "||"


# --- Expressions ---

@dataclass
class Reference:
    name: str


@dataclass
class Operator:
    left: Expr
    op: BinaryOperator
    right: Expr


@dataclass
class Unary:
    op: UnaryOperator
    operand: Expr


@dataclass
class Comparison:
    left: Expr
    op: ComparisonOperator
    right: Expr


@dataclass
class Parenthesized:
    inner: Expr


Expr = Union[IntegerLit, FloatLit, BoolLit, Reference, Operator, Unary, Comparison, Parenthesized]


# --- Segments ---

@dataclass
class Text:
    text: str


@dataclass
class Include:
    path: str


@dataclass
class Constant:
    name: str


@dataclass
class Conditional:
    condition: Expr
    if_true: Segment
    if_false: Optional[Segment] = None


@dataclass
class Sequence:
    """Ordered run of segments.

    Never holds two adjacent Text children or a directly nested Sequence;
    build it through wgslplus.parser.concat to keep it that way.
    """
    segments: list[Segment] = field(default_factory=list)


Segment = Union[Text, Include, Constant, Conditional, Sequence]


class EndReason(Enum):
    NONE = "none"  # input ran out before any line was read
    END_OF_FILE = "end_of_file"
    ELSE_SEEN = "else"
    END_SEEN = "end"
