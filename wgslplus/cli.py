"""Command-line interface for the wgsl-plus preprocessor."""

import argparse
import sys
from pathlib import Path, PurePosixPath

from wgslplus.errors import WgslError


def parse_define(text: str, state):
    """Parse a `NAME=VALUE` define. VALUE is an expression; a bare NAME means true."""
    from wgslplus.evaluation.evaluator import evaluate
    from wgslplus.parser.ast_nodes import BoolLit
    from wgslplus.parser.expression_parser import parse_expression

    name, sep, value = text.partition("=")
    name = name.strip()
    if not name:
        raise ValueError(f"Invalid define '{text}'")
    if not sep:
        return name, BoolLit(True)
    return name, evaluate(parse_expression(value), state)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="wgslplus",
        description="wgsl-plus preprocessor — expands //: directives in shader templates",
    )
    parser.add_argument("input", nargs="?", help="Shader to render")
    parser.add_argument(
        "extra", nargs="*",
        help="Additional shaders available to //:include",
    )
    parser.add_argument(
        "--root", type=Path, default=None,
        help="Workspace root that include paths are relative to (default: directory of input)",
    )
    parser.add_argument(
        "-D", "--define", action="append", default=[], metavar="NAME[=VALUE]",
        help="Set a global variable (repeatable, VALUE is an expression)",
    )
    parser.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Write the rendered shader here instead of stdout",
    )
    parser.add_argument(
        "--dump-tree", action="store_true", help="Dump the segment tree and exit"
    )
    parser.add_argument(
        "--version", action="version", version="wgslplus 0.1.0"
    )

    args = parser.parse_args(argv)

    if args.input is None:
        parser.print_help()
        sys.exit(0)

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: file not found: {input_path}", file=sys.stderr)
        sys.exit(1)

    from wgslplus.workspace import Workspace

    root = args.root or input_path.parent
    try:
        workspace = Workspace.from_files(
            root, [input_path.resolve(), *(Path(p).resolve() for p in args.extra)]
        )
        for define in args.define:
            name, value = parse_define(define, workspace.state)
            workspace.set_global(name, value)

        key = input_path.resolve().relative_to(Path(root).resolve()).as_posix()

        if args.dump_tree:
            _dump_tree(workspace.shaders[PurePosixPath(key)].segment)
            return

        text = workspace.get_shader(key)
    except (WgslError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text, encoding="utf-8")
        print(f"Wrote {args.output}")
    else:
        sys.stdout.write(text)


def _dump_tree(segment):
    import dataclasses, json

    def _ser(obj):
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            d = {"_type": type(obj).__name__}
            d.update({f.name: _ser(getattr(obj, f.name)) for f in dataclasses.fields(obj)})
            return d
        if isinstance(obj, list):
            return [_ser(x) for x in obj]
        return obj

    print(json.dumps(_ser(segment), indent=2, default=str))


if __name__ == "__main__":
    main()
