"""Line-oriented directive parser that builds the segment tree.

A directive line starts with `//:` followed by an operation keyword and
an optional parameter:

    //:include common/lighting.wgsl
    //:const MAX_LIGHTS
    //:if USE_TANGENTS && BIT_2 == 4
    //:else
    //:end

Every other line is copied to the output as-is.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from lark import Lark, Transformer
from lark.exceptions import UnexpectedInput

from wgslplus.errors import (
    UnknownOperationError, InvalidIfBlockError, LeftoverLinesError,
)
from wgslplus.parser.ast_nodes import (
    Segment, Text, Include, Constant, Conditional, EndReason,
)
from wgslplus.parser.concat import concat
from wgslplus.parser.cursor import LineCursor
from wgslplus.parser.expression_parser import parse_expression

DIRECTIVE_MARKER = "//:"

_GRAMMAR_PATH = Path(__file__).parent.parent / "grammar" / "directive.lark"

_parser = Lark(
    _GRAMMAR_PATH.read_text(encoding="utf-8"),
    parser="lalr",
)


@dataclass
class Directive:
    keyword: str
    parameter: str = ""


class DirectiveTransformer(Transformer):
    """Transforms a directive parse tree into a Directive."""

    def directive(self, args):
        keyword = str(args[0])
        parameter = args[1] if len(args) > 1 else ""
        return Directive(keyword, parameter)

    def parameter(self, args):
        return str(args[0])


def parse_directive(text: str) -> Directive:
    """Split directive text (marker already removed) into keyword and parameter."""
    try:
        tree = _parser.parse(text)
    except UnexpectedInput as exc:
        raise UnknownOperationError(text.partition(" ")[0]) from exc
    return DirectiveTransformer().transform(tree)


def parse_segments(lines: LineCursor) -> tuple[Optional[Segment], EndReason]:
    """Parse lines until end of input or an `else`/`end` directive.

    Returns the accumulated segment (None if nothing was read) and the
    reason parsing stopped. `else` and `end` lines are consumed; the
    caller decides what follows them.
    """
    segment: Optional[Segment] = None
    read_any = False

    def append(other: Segment) -> None:
        nonlocal segment
        segment = other if segment is None else concat(segment, other)

    while True:
        line = lines.next_line()
        if line is None:
            break
        read_any = True
        line = line.strip()

        if not line.startswith(DIRECTIVE_MARKER):
            append(Text(f"{line}\n"))
            continue

        directive = parse_directive(line[len(DIRECTIVE_MARKER):])

        if directive.keyword == "include":
            append(Include(directive.parameter))
        elif directive.keyword == "const":
            append(Constant(directive.parameter))
        elif directive.keyword == "if":
            append(_parse_conditional(directive.parameter, lines))
        elif directive.keyword == "else":
            return _or_empty(segment), EndReason.ELSE_SEEN
        elif directive.keyword == "end":
            return _or_empty(segment), EndReason.END_SEEN
        else:
            raise UnknownOperationError(directive.keyword)

    if not read_any:
        return None, EndReason.NONE
    return _or_empty(segment), EndReason.END_OF_FILE


def _parse_conditional(parameter: str, lines: LineCursor) -> Conditional:
    condition = parse_expression(parameter)

    if_true, reason = parse_segments(lines)
    if reason is EndReason.ELSE_SEEN:
        if_false, else_reason = parse_segments(lines)
        if else_reason not in (EndReason.END_SEEN, EndReason.END_OF_FILE):
            raise InvalidIfBlockError(f"Invalid else block in 'if {parameter}'")
        return Conditional(condition, if_true, if_false)
    if reason in (EndReason.END_SEEN, EndReason.END_OF_FILE):
        return Conditional(condition, if_true)
    raise InvalidIfBlockError(f"Missing body for 'if {parameter}'")


def _or_empty(segment: Optional[Segment]) -> Segment:
    return Text("") if segment is None else segment


def parse_lines(lines: list[str]) -> Segment:
    """Parse a complete shader body, rejecting unmatched `else`/`end` lines."""
    cursor = LineCursor(lines)
    segment, reason = parse_segments(cursor)

    if reason in (EndReason.ELSE_SEEN, EndReason.END_SEEN):
        raise LeftoverLinesError(lines[cursor.pos - 1:])
    return _or_empty(segment)


def source_lines(source: str) -> list[str]:
    """Split shader source into trimmed, non-blank lines."""
    return [line.strip() for line in source.splitlines() if line.strip()]
