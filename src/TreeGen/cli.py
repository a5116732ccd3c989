"""Command-line entry point for TreeGen (``tgen``).

Renders a directory as tree text, or rebuilds a directory hierarchy from a
tree file or from tree text piped on stdin.
"""

from __future__ import annotations

import argparse
import io
import locale
import logging
import os
import sys
from typing import TextIO

from TreeGen import filesystem
from TreeGen.builder import BuildError, build_structure, build_structure_from_stream
from TreeGen.ignore_loader import load_ignore_patterns
from TreeGen.models import BuildResult
from TreeGen.renderer import DEFAULT_MAX_DEPTH, render_tree

logger = logging.getLogger(__name__)

DEFAULT_TREE_FILENAME = "tree.txt"

EXAMPLES = """\
examples:
  tgen ./project
      Print the tree of the given directory
  tgen ./project -o ./path/tree.txt
      Render the tree and save it to the given file
  tgen ./path/tree.txt -a -i .ignore
      Rebuild folders and empty files next to tree.txt
  tgen ./path/tree.txt -o ./new-structure/
      Rebuild the structure in a different directory
  cat ./path/tree.txt | tgen -o ./new-structure/ -a
      Rebuild the structure from tree text read on stdin
"""


def _non_negative_int(value: str) -> int:
    """argparse type for non-negative integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tgen",
        description="Render a directory as an ASCII tree, or rebuild a directory from one.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("path", nargs="?", help="directory to render or tree file to rebuild")
    parser.add_argument(
        "-a", "--all", action="store_true",
        help="create empty files as well as folders when rebuilding",
    )
    parser.add_argument("-o", "--output", help="where to save the tree or rebuild the structure")
    parser.add_argument("-i", "--ignore", help="file listing names to leave out of the tree")
    parser.add_argument("-d", "--debug", action="store_true", help="log every folder and file created")
    parser.add_argument("-s", "--show", action="store_true", help="print the tree before or while rebuilding")
    parser.add_argument(
        "-m", "--max-depth", type=_non_negative_int, default=DEFAULT_MAX_DEPTH,
        help=f"deepest directory level to descend into (default: {DEFAULT_MAX_DEPTH})",
    )
    return parser


def resolve_output_path(output: str) -> str:
    """Use *output* as the file path if it has an extension, else put tree.txt inside it."""
    full = os.path.abspath(output)
    if os.path.splitext(full)[1]:
        return full
    return os.path.join(full, DEFAULT_TREE_FILENAME)


def main(argv: list[str] | None = None, stdin: TextIO | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    stdin = stdin if stdin is not None else sys.stdin

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(levelname)s: %(message)s",
    )
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        logger.debug("System collation locale unavailable; using default order")

    piped = not stdin.isatty()
    if args.path is None and not piped:
        parser.print_help()
        return 0

    try:
        if args.path is not None and os.path.isfile(args.path):
            _rebuild_from_file(args)
        elif args.path is None:
            _rebuild_from_stream(args, stdin)
        elif os.path.isdir(args.path):
            _render(args)
        else:
            raise BuildError(f"Path does not exist or is not a file/directory: {args.path}")
    except (BuildError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def _rebuild_from_file(args: argparse.Namespace) -> None:
    tree_text = filesystem.read_text(args.path)
    target = args.output or os.path.dirname(os.path.abspath(args.path))

    if args.show:
        print("\nStructure to be created:")
        print(tree_text)

    result = build_structure(tree_text, target, create_files=args.all, debug=args.debug)
    _report(result)


def _rebuild_from_stream(args: argparse.Namespace, stdin: TextIO) -> None:
    if not args.output:
        raise BuildError("Reading from stdin requires -o <directory>.")
    if isinstance(stdin, io.TextIOWrapper):
        stdin.reconfigure(errors="replace")
    echo = print if args.show else None
    result = build_structure_from_stream(
        stdin, args.output, create_files=args.all, debug=args.debug, echo=echo
    )
    _report(result)


def _render(args: argparse.Namespace) -> None:
    ignore = load_ignore_patterns(args.ignore)
    result = render_tree(args.path, ignore=ignore, max_depth=args.max_depth)

    if not args.output or args.show:
        print(result.text)

    if args.output:
        final_path = resolve_output_path(args.output)
        filesystem.write_text(final_path, result.text)
        print(f"\nTree saved to: {final_path}")


def _report(result: BuildResult) -> None:
    if result.warnings:
        logger.info("%d line(s) skipped with warnings", len(result.warnings))
    print(f"Structure created in: {result.target_dir}")


if __name__ == "__main__":
    sys.exit(main())
