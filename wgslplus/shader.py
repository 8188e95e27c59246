"""A parsed shader template."""

from __future__ import annotations
from dataclasses import dataclass

from wgslplus.evaluation.writer import write_segment
from wgslplus.parser.ast_nodes import Segment
from wgslplus.parser.segment_parser import parse_lines, source_lines


@dataclass
class Shader:
    segment: Segment
    capacity: int  # source length, a size hint for the rendered text

    def evaluate(self, workspace, chain: tuple = ()) -> str:
        out: list[str] = []
        write_segment(self.segment, out, workspace, chain)
        return "".join(out)


def parse_shader(source: str) -> Shader:
    """Parse shader source text into a Shader."""
    return Shader(parse_lines(source_lines(source)), len(source))
