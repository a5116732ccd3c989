"""Reconstruct a directory hierarchy from tree text."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable

from TreeGen import filesystem
from TreeGen.grammar import LineDecodeError, decode_line, is_hierarchy_line, is_root_path_line
from TreeGen.models import BuildResult, PathStack

logger = logging.getLogger(__name__)


class BuildError(Exception):
    """Raised when a build cannot start (no usable target directory)."""


class TreeBuilder:
    """Apply decoded tree lines to the filesystem below one target directory.

    Each instance owns its path stack and result; create a new builder per
    build.
    """

    def __init__(self, target_dir: str, create_files: bool = False, debug: bool = False):
        if not target_dir or not str(target_dir).strip():
            raise BuildError("Target directory not specified.")
        self.create_files = create_files
        self._log = logger.info if debug else logger.debug

        root = os.path.abspath(target_dir)
        self._log("Creating base directory: %s", root)
        try:
            filesystem.make_directory(root)
        except OSError as exc:
            raise BuildError(f"Cannot create target directory {root}: {exc}") from exc

        self.stack = PathStack(root)
        self.result = BuildResult(target_dir=root)

    def apply_line(self, line: str) -> None:
        """Decode one line and create its entry. Problems become warnings."""
        try:
            decoded = decode_line(line)
            if decoded is None or (not decoded.is_dir and not self.create_files):
                self.result.skipped_lines += 1
                return

            self.stack.truncate(decoded.depth)
            current = self._child_path(decoded.name)

            if decoded.is_dir:
                self._log("Creating directory: %s", current)
                filesystem.make_directory(current)
                self.stack.push(current)
                self.result.created_dirs.append(current)
            else:
                self._log("Creating file: %s", current)
                filesystem.make_directory(os.path.dirname(current))
                filesystem.create_empty_file(current)
                self.result.created_files.append(current)
        except (LineDecodeError, OSError) as exc:
            message = f"Error processing line {line.rstrip()!r}: {exc}"
            logger.warning(message)
            self.result.warnings.append(message)
            self.result.skipped_lines += 1

    def _child_path(self, name: str) -> str:
        """Join *name* under the current top, keeping the result inside the root."""
        current = os.path.join(self.stack.top, name.lstrip("/\\"))
        root = self.stack.root
        if os.path.commonpath([root, os.path.abspath(current)]) != root:
            raise LineDecodeError(f"Path escapes target directory: {name!r}")
        return current


def build_structure(
    tree_text: str,
    target_dir: str,
    create_files: bool = False,
    debug: bool = False,
) -> BuildResult:
    """Build the hierarchy described by a complete tree text.

    The first line is always treated as the root line and discarded.
    Directories are always created; files only when *create_files* is set.
    """
    builder = TreeBuilder(target_dir, create_files=create_files, debug=debug)
    lines = tree_text.strip().splitlines()
    for line in lines[1:]:
        builder.apply_line(line)
    logger.debug("Structure created in: %s", builder.result.target_dir)
    return builder.result


def build_structure_from_stream(
    lines: Iterable[str],
    target_dir: str,
    create_files: bool = False,
    debug: bool = False,
    echo: Callable[[str], None] | None = None,
) -> BuildResult:
    """Build the hierarchy from lines as they arrive (e.g. piped stdin).

    There is no guaranteed root line, so every line up to the first
    hierarchy line is skipped. After that each line is applied exactly as
    in `build_structure`. *echo* receives every raw line before processing.
    """
    builder = TreeBuilder(target_dir, create_files=create_files, debug=debug)
    found_first = False

    for raw in lines:
        line = raw.rstrip("\r\n")
        if echo is not None:
            echo(line)
        if not line.strip():
            continue

        if not found_first:
            if is_root_path_line(line) or not is_hierarchy_line(line):
                builder.result.skipped_lines += 1
                continue
            found_first = True

        builder.apply_line(line)

    logger.debug("Structure created in: %s", builder.result.target_dir)
    return builder.result
