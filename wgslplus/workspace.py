"""A set of named shader templates sharing one variable environment."""

from __future__ import annotations
from pathlib import Path, PurePosixPath
from typing import Iterable, Mapping, Union

from wgslplus.errors import ShaderNotFoundError, CircularIncludeError
from wgslplus.parser.ast_nodes import Literal, IntegerLit, FloatLit, BoolLit
from wgslplus.shader import Shader, parse_shader
from wgslplus.state import WorkspaceState, to_literal


def _key(path: Union[str, PurePosixPath]) -> PurePosixPath:
    return PurePosixPath(path)


class Workspace:
    """Maps relative paths to parsed shaders and renders them.

    Includes are resolved by looking the path up in the same workspace,
    so every shader that can be included has to be added first.
    """

    def __init__(self, root: Union[str, Path] = "."):
        self.root = Path(root)
        self.shaders: dict[PurePosixPath, Shader] = {}
        self._state = WorkspaceState()

    @classmethod
    def from_memory(
        cls,
        root: Union[str, Path],
        shaders: Union[Mapping[str, str], Iterable[tuple[str, str]]],
    ) -> Workspace:
        """Build a workspace from `(path, source)` pairs, paths relative to `root`."""
        workspace = cls(root)
        items = shaders.items() if isinstance(shaders, Mapping) else shaders
        for path, source in items:
            workspace.add_shader(path, source)
        return workspace

    @classmethod
    def from_files(cls, root: Union[str, Path], paths: Iterable[Union[str, Path]]) -> Workspace:
        """Build a workspace from the listed files, keyed relative to `root`."""
        workspace = cls(root)
        for path in paths:
            path = Path(path)
            full_path = path if path.is_absolute() else workspace.root / path
            relative = full_path.resolve().relative_to(workspace.root.resolve())
            workspace.add_shader(relative.as_posix(), full_path.read_text(encoding="utf-8"))
        return workspace

    @property
    def state(self) -> WorkspaceState:
        return self._state

    def add_shader(self, path: str, source: str) -> Shader:
        shader = parse_shader(source)
        self.shaders[_key(path)] = shader
        return shader

    # --- Variables ---

    def set_global(self, key: str, value) -> None:
        self._state.global_variables[key] = to_literal(value)

    def set_global_i64(self, key: str, value: int) -> None:
        self._state.global_variables[key] = IntegerLit(int(value))

    def set_global_f64(self, key: str, value: float) -> None:
        self._state.global_variables[key] = FloatLit(float(value))

    def set_global_bool(self, key: str, value: bool) -> None:
        self._state.global_variables[key] = BoolLit(bool(value))

    def set_override(self, key: str, value) -> None:
        self._state.local_overrides[key] = to_literal(value)

    def clear_overrides(self) -> None:
        self._state.local_overrides.clear()

    def get_variable(self, key: str) -> Literal | None:
        return self._state.get(key)

    # --- Rendering ---

    def get_shader(
        self,
        path: Union[str, PurePosixPath],
        chain: tuple[PurePosixPath, ...] = (),
    ) -> str:
        """Return the fully resolved text of the shader at `path`.

        `chain` holds the shaders whose includes led here. It travels with
        the render, so the workspace itself is only read while rendering.
        """
        key = _key(path)
        shader = self.shaders.get(key)
        if shader is None:
            raise ShaderNotFoundError(str(path))
        if key in chain:
            cycle = chain[chain.index(key):] + (key,)
            raise CircularIncludeError([str(p) for p in cycle])

        return shader.evaluate(self, chain + (key,))
