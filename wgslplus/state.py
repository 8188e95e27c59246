"""Two-tier variable environment consulted while rendering shaders."""

from __future__ import annotations
from typing import Optional

from wgslplus.parser.ast_nodes import (
    Literal, IntegerLit, FloatLit, BoolLit, wrap_i64,
)


def to_literal(value) -> Literal:
    """Convert a Python bool, int or float (or an existing literal) to a literal."""
    if isinstance(value, (IntegerLit, FloatLit, BoolLit)):
        return value
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return BoolLit(value)
    if isinstance(value, int):
        return IntegerLit(value)
    if isinstance(value, float):
        return FloatLit(value)
    raise TypeError(f"Unsupported variable value: {value!r}")


class WorkspaceState:
    """Global variables plus local overrides; overrides win on lookup."""

    def __init__(self):
        self.global_variables: dict[str, Literal] = {}
        self.local_overrides: dict[str, Literal] = {}
        for i in range(64):
            self.global_variables[f"BIT_{i}"] = IntegerLit(wrap_i64(1 << i))

    def get(self, key: str) -> Optional[Literal]:
        if key in self.local_overrides:
            return self.local_overrides[key]
        return self.global_variables.get(key)
