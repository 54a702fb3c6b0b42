"""
Command-line entry point:

1) Load a family tree from a JSON tree document or a GEDCOM file.
2) Optionally validate it for cycles, dangling links and impossible ages.
3) Lay out the direct lineage of the focused person.
4) Write the layout as JSON or DOT (or print JSON to stdout).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import ConfigError, LayoutConfig
from .export import compute_viewbox, layout_to_dict, write_layout
from .layout import LayoutEngine
from .parsing import TreeFormatError, load_tree
from .validation import validate_people

MAX_WARNINGS_SHOWN = 10


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="famtree-layout",
        description="Compute a family tree layout around a focused person.",
    )
    parser.add_argument("input", type=Path, help="Tree document (.json) or GEDCOM file (.ged)")
    parser.add_argument("--focus", help="Person id to centre on (default: the tree's root)")
    parser.add_argument(
        "-o", "--output", type=Path, help="Write the layout to a .json or .dot file"
    )
    parser.add_argument(
        "--validate", action="store_true", help="Report data problems before laying out"
    )
    parser.add_argument("--max-up", type=int, help="Ancestor generations to show")
    parser.add_argument("--max-down", type=int, help="Descendant generations to show")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = LayoutConfig.from_env().with_overrides(
            max_layers_up=args.max_up, max_layers_down=args.max_down
        )
    except ConfigError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    # Progress goes to stderr when the layout itself is printed to stdout
    out = sys.stdout if args.output else sys.stderr

    print(f"Loading tree: {args.input}", file=out)
    try:
        tree = load_tree(args.input)
    except (FileNotFoundError, TreeFormatError) as e:
        print(f"Could not load tree: {e}", file=sys.stderr)
        return 1
    print(f"  Found {len(tree.people)} people", file=out)

    if args.validate:
        print("Validating tree...", file=out)
        warnings = validate_people(tree.people)
        if warnings:
            print(f"  Found {len(warnings)} validation warnings:", file=out)
            for w in warnings[:MAX_WARNINGS_SHOWN]:
                print(f"    - {w}", file=out)
            if len(warnings) > MAX_WARNINGS_SHOWN:
                print(f"    ... and {len(warnings) - MAX_WARNINGS_SHOWN} more", file=out)
        else:
            print("  No validation issues found", file=out)

    focus = args.focus or tree.root_id
    if focus is None or focus not in tree.people:
        print(f"Person {focus!r} not found in tree", file=sys.stderr)
        return 1

    result = LayoutEngine(config).compute_layout(focus, tree.people)
    viewbox = " ".join(f"{v:g}" for v in compute_viewbox(result.bounds))
    print(
        f"Laid out {len(result.nodes)} people and {len(result.connections)} connections "
        f"(viewBox {viewbox})",
        file=out,
    )

    if args.output:
        try:
            write_layout(result, args.output)
        except ValueError as e:
            print(str(e), file=sys.stderr)
            return 1
        print(f"Layout saved to {args.output}", file=out)
    else:
        json.dump(layout_to_dict(result), sys.stdout, indent=2)
        sys.stdout.write("\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
