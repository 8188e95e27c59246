"""Renders a segment tree to shader text."""

from __future__ import annotations

from wgslplus.errors import UndefinedVariableError
from wgslplus.evaluation.evaluator import evaluate, is_truthy
from wgslplus.parser.ast_nodes import (
    Segment, Literal, Text, Include, Constant, Conditional, Sequence,
    IntegerLit, FloatLit, BoolLit,
)


def format_float(val: float) -> str:
    """Format a float ensuring a decimal point is preserved."""
    s = repr(val)
    if "." not in s and "e" not in s and "inf" not in s and "nan" not in s:
        s += ".0"
    return s


def format_literal(value: Literal) -> str:
    if isinstance(value, BoolLit):
        return "true" if value.value else "false"
    if isinstance(value, FloatLit):
        return format_float(value.value)
    if isinstance(value, IntegerLit):
        return str(value.value)
    raise TypeError(f"Unknown literal type: {type(value).__name__}")


def write_segment(segment: Segment, out: list[str], workspace, chain: tuple = ()) -> None:
    """Append the rendered text of `segment` to `out`.

    `workspace` provides `state` for variable lookup and
    `get_shader(path, chain)` for fully resolved include text. `chain` is
    the include path of the shader being rendered.
    """
    if isinstance(segment, Text):
        out.append(segment.text)
    elif isinstance(segment, Sequence):
        for child in segment.segments:
            write_segment(child, out, workspace, chain)
    elif isinstance(segment, Include):
        out.append(workspace.get_shader(segment.path, chain))
        out.append("\n")
    elif isinstance(segment, Conditional):
        if is_truthy(evaluate(segment.condition, workspace.state)):
            write_segment(segment.if_true, out, workspace, chain)
        elif segment.if_false is not None:
            write_segment(segment.if_false, out, workspace, chain)
    elif isinstance(segment, Constant):
        value = workspace.state.get(segment.name)
        if value is None:
            raise UndefinedVariableError(segment.name)
        out.append(f"const {segment.name} = {format_literal(value)};\n")
    else:
        raise TypeError(f"Unknown segment type: {type(segment).__name__}")
