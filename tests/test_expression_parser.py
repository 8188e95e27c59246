"""Tests for the directive expression parser."""

import pytest
from wgslplus.parser.expression_parser import parse_expression
from wgslplus.parser.ast_nodes import (
    IntegerLit, FloatLit, BoolLit, Reference, Operator, Unary, Comparison,
    Parenthesized, BinaryOperator, UnaryOperator, ComparisonOperator,
)
from wgslplus.errors import (
    NoExpressionError, NoClosingParenthesisError, DuplicatePeriodError,
    InvalidBaseError, IntegerConversionError, LeftoverCharsError,
    ExpressionTooDeepError, WgslError,
)


class TestLiterals:
    def test_decimal_integer(self):
        assert parse_expression("42") == IntegerLit(42)

    def test_underscores_are_skipped(self):
        assert parse_expression("1_000_000") == IntegerLit(1000000)

    @pytest.mark.parametrize("src, expected", [
        ("0b1010", 10),
        ("0B1_1", 3),
        ("0o17", 15),
        ("0x10", 16),
        ("0xff", 255),
        ("0xDead_Beef", 0xDEADBEEF),
        ("0xb", 11),
    ])
    def test_radix_prefixes(self, src, expected):
        assert parse_expression(src) == IntegerLit(expected)

    def test_float(self):
        assert parse_expression("1.5") == FloatLit(1.5)

    def test_float_trailing_period(self):
        assert parse_expression("2.") == FloatLit(2.0)

    def test_booleans(self):
        assert parse_expression("true") == BoolLit(True)
        assert parse_expression("false") == BoolLit(False)

    def test_reference(self):
        assert parse_expression("USE_TANGENTS") == Reference("USE_TANGENTS")

    def test_reference_with_leading_underscore_and_digits(self):
        assert parse_expression("_light2") == Reference("_light2")

    def test_keyword_prefix_is_a_reference(self):
        assert parse_expression("trueish") == Reference("trueish")

    def test_max_i64(self):
        assert parse_expression("9223372036854775807") == IntegerLit(2**63 - 1)


class TestWhitespace:
    def test_surrounding_whitespace(self):
        assert parse_expression("   7  ") == IntegerLit(7)

    def test_whitespace_is_removed_everywhere(self):
        # "1 2" reads as "12"
        assert parse_expression("1 2") == IntegerLit(12)

    def test_spacing_inside_operators(self):
        assert parse_expression("a = = b") == Comparison(
            Reference("a"), ComparisonOperator.EQUAL, Reference("b")
        )


class TestOperators:
    @pytest.mark.parametrize("src, op", [
        ("a+b", BinaryOperator.ADD),
        ("a-b", BinaryOperator.SUBTRACT),
        ("a*b", BinaryOperator.MULTIPLY),
        ("a/b", BinaryOperator.DIVIDE),
        ("a&b", BinaryOperator.BITWISE_AND),
        ("a|b", BinaryOperator.BITWISE_OR),
    ])
    def test_binary_operators(self, src, op):
        assert parse_expression(src) == Operator(Reference("a"), op, Reference("b"))

    @pytest.mark.parametrize("src, op", [
        ("a==b", ComparisonOperator.EQUAL),
        ("a!=b", ComparisonOperator.NOT_EQUAL),
        ("a<b", ComparisonOperator.LESS_THAN),
        ("a<=b", ComparisonOperator.LESS_THAN_OR_EQUAL),
        ("a>b", ComparisonOperator.GREATER_THAN),
        ("a>=b", ComparisonOperator.GREATER_THAN_OR_EQUAL),
        ("a&&b", ComparisonOperator.AND),
        ("a||b", ComparisonOperator.OR),
    ])
    def test_comparisons(self, src, op):
        assert parse_expression(src) == Comparison(Reference("a"), op, Reference("b"))

    def test_right_associative(self):
        expr = parse_expression("a - b - c")
        assert expr == Operator(
            Reference("a"),
            BinaryOperator.SUBTRACT,
            Operator(Reference("b"), BinaryOperator.SUBTRACT, Reference("c")),
        )

    def test_no_precedence(self):
        # the multiplication takes everything to its right
        expr = parse_expression("2 * 3 + 1")
        assert expr == Operator(
            IntegerLit(2),
            BinaryOperator.MULTIPLY,
            Operator(IntegerLit(3), BinaryOperator.ADD, IntegerLit(1)),
        )

    def test_parentheses_group(self):
        expr = parse_expression("(a - b) - c")
        assert expr == Operator(
            Parenthesized(Operator(Reference("a"), BinaryOperator.SUBTRACT, Reference("b"))),
            BinaryOperator.SUBTRACT,
            Reference("c"),
        )


class TestUnary:
    @pytest.mark.parametrize("src, op", [
        ("-x", UnaryOperator.NEGATE),
        ("!x", UnaryOperator.NOT),
        ("~x", UnaryOperator.BITWISE_NOT),
    ])
    def test_prefix_operators(self, src, op):
        assert parse_expression(src) == Unary(op, Reference("x"))

    def test_unary_binds_tighter_than_binary(self):
        expr = parse_expression("!a && b")
        assert expr == Comparison(
            Unary(UnaryOperator.NOT, Reference("a")),
            ComparisonOperator.AND,
            Reference("b"),
        )

    def test_nested_unary(self):
        assert parse_expression("--1") == Unary(
            UnaryOperator.NEGATE, Unary(UnaryOperator.NEGATE, IntegerLit(1))
        )

    def test_negated_parenthesis(self):
        assert parse_expression("-(1+2)") == Unary(
            UnaryOperator.NEGATE,
            Parenthesized(Operator(IntegerLit(1), BinaryOperator.ADD, IntegerLit(2))),
        )


class TestErrors:
    def test_empty(self):
        with pytest.raises(NoExpressionError):
            parse_expression("")

    def test_whitespace_only(self):
        with pytest.raises(NoExpressionError):
            parse_expression("   ")

    def test_missing_right_operand(self):
        with pytest.raises(NoExpressionError):
            parse_expression("1+")

    def test_missing_unary_operand(self):
        with pytest.raises(NoExpressionError):
            parse_expression("!")

    def test_empty_parentheses(self):
        with pytest.raises(NoExpressionError):
            parse_expression("()")

    def test_missing_closing_parenthesis(self):
        with pytest.raises(NoClosingParenthesisError):
            parse_expression("(1+2")

    def test_duplicate_period(self):
        with pytest.raises(DuplicatePeriodError):
            parse_expression("1.2.3")

    @pytest.mark.parametrize("src", ["12x4", "0x0x1", "0b1o1", "0x1.5", "1.0b1"])
    def test_invalid_base(self, src):
        with pytest.raises(InvalidBaseError):
            parse_expression(src)

    def test_invalid_binary_digit(self):
        with pytest.raises(IntegerConversionError):
            parse_expression("0b102")

    def test_prefix_without_digits(self):
        with pytest.raises(IntegerConversionError):
            parse_expression("0x")

    def test_integer_overflow(self):
        with pytest.raises(IntegerConversionError) as exc_info:
            parse_expression("9223372036854775808")
        assert exc_info.value.literal == "9223372036854775808"

    def test_conversion_error_chains_cause(self):
        with pytest.raises(IntegerConversionError) as exc_info:
            parse_expression("0o9")
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_lone_equals_is_leftover(self):
        with pytest.raises(LeftoverCharsError) as exc_info:
            parse_expression("a = b")
        assert exc_info.value.text == "=b"

    def test_lone_bang_is_leftover(self):
        with pytest.raises(LeftoverCharsError) as exc_info:
            parse_expression("a!")
        assert exc_info.value.text == "!"

    def test_trailing_close_parenthesis(self):
        with pytest.raises(LeftoverCharsError) as exc_info:
            parse_expression("1)")
        assert exc_info.value.text == ")"

    def test_very_long_chain(self):
        with pytest.raises(ExpressionTooDeepError) as exc_info:
            parse_expression("+".join(["1"] * 5000))
        assert isinstance(exc_info.value, WgslError)
        assert isinstance(exc_info.value.__cause__, RecursionError)

    def test_very_deep_nesting(self):
        with pytest.raises(ExpressionTooDeepError):
            parse_expression("(" * 5000 + "1" + ")" * 5000)
