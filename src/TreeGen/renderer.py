"""ASCII tree renderer for a directory on disk."""

from __future__ import annotations

import locale
import logging
import os
from collections.abc import Iterable

from TreeGen import filesystem
from TreeGen.grammar import DIR_SUFFIX, format_line, pad_for
from TreeGen.ignore_loader import DEFAULT_IGNORE
from TreeGen.models import DirectoryEntry, RenderResult, TreeLine

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 20


def sort_entries(entries: Iterable[DirectoryEntry]) -> list[DirectoryEntry]:
    """Directories first, then names in locale order."""
    return sorted(
        entries,
        key=lambda e: (not e.is_dir, locale.strxfrm(e.name.casefold()), e.name),
    )


def render_tree(
    root: str,
    ignore: Iterable[str] = DEFAULT_IGNORE,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> RenderResult:
    """Render *root* as tree text, starting with the ``<name>/`` root line.

    Example output:
        project/
        ├── src/
        │   └── main.py
        └── README.md

    Unreadable directories and branches below *max_depth* are skipped and
    reported in ``RenderResult.warnings``.
    """
    result = RenderResult()
    ignored = frozenset(ignore)
    lines = [root_line(root)]
    _render_dir(root, "", ignored, 0, max_depth, lines, result.warnings)
    result.text = "\n".join(lines) + "\n"
    return result


def root_line(root: str) -> str:
    name = os.path.basename(os.path.normpath(os.path.abspath(root)))
    # Filesystem root has no basename
    return f"{name}{DIR_SUFFIX}" if name else DIR_SUFFIX


def _render_dir(
    path: str,
    prefix: str,
    ignored: frozenset[str],
    depth: int,
    max_depth: int,
    lines: list[str],
    warnings: list[str],
) -> None:
    """Recursively append the lines for the children of *path*."""
    try:
        entries = filesystem.list_directory(path)
    except OSError as exc:
        _warn(warnings, f"Cannot read directory {path}: {exc}")
        return

    entries = sort_entries(e for e in entries if e.name not in ignored)
    for i, entry in enumerate(entries):
        is_last = i == len(entries) - 1
        lines.append(format_line(prefix, TreeLine(depth, entry.name, entry.is_dir, is_last)))

        if not entry.is_dir:
            continue
        child = os.path.join(path, entry.name)
        if depth + 1 > max_depth:
            _warn(warnings, f"Maximum depth ({max_depth}) reached at: {child}")
            continue
        _render_dir(child, prefix + pad_for(is_last), ignored, depth + 1, max_depth, lines, warnings)


def _warn(warnings: list[str], message: str) -> None:
    logger.warning(message)
    warnings.append(message)
