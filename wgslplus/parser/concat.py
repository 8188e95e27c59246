"""Segment concatenation that keeps the segment tree flat.

Appending fragments one at a time would otherwise build a right-nested
chain whose depth grows with the shader length. Instead adjacent Text
runs are joined in place and sequences are spliced together, so a
Sequence only ever holds non-mergeable neighbours.
"""

from __future__ import annotations
from wgslplus.parser.ast_nodes import Segment, Sequence, Text


def can_concat_fast(left: Segment, right: Segment) -> bool:
    """True if `right` can be merged into `left` without wrapping both."""
    if isinstance(left, Sequence) or isinstance(right, Sequence):
        return True
    return isinstance(left, Text) and isinstance(right, Text)


def append_segment(sequence: Sequence, segment: Segment) -> None:
    """Append a segment to a sequence, merging into the last child if possible."""
    if sequence.segments and can_concat_fast(sequence.segments[-1], segment):
        sequence.segments[-1] = concat(sequence.segments[-1], segment)
    else:
        sequence.segments.append(segment)


def concat(left: Segment, right: Segment) -> Segment:
    """Return a segment representing `left` followed by `right`.

    `left` or `right` is reused in place where the shapes allow it, so
    callers must always continue with the returned node.
    """
    if isinstance(left, Sequence) and isinstance(right, Sequence):
        for segment in right.segments:
            append_segment(left, segment)
        return left

    if isinstance(left, Text) and isinstance(right, Text):
        left.text += right.text
        return left

    if isinstance(right, Sequence):
        if right.segments and isinstance(left, Text) and isinstance(right.segments[0], Text):
            right.segments[0] = concat(left, right.segments[0])
        else:
            right.segments.insert(0, left)
        return right

    if isinstance(left, Sequence):
        append_segment(left, right)
        return left

    return Sequence([left, right])
