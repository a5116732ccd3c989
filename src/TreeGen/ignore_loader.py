"""Loading of the ignore list: literal entry names excluded from rendering."""

from __future__ import annotations

import logging

from TreeGen import filesystem

logger = logging.getLogger(__name__)

DEFAULT_IGNORE: tuple[str, ...] = ("node_modules",)


def parse_ignore_text(text: str) -> list[str]:
    """Split ignore-file content into names.

    Whitespace around each line is stripped. Blank lines and lines starting
    with ``#`` are ignored. Duplicates keep their first position.
    """
    names: list[str] = []
    for line in text.splitlines():
        name = line.strip()
        if name and not name.startswith("#") and name not in names:
            names.append(name)
    return names


def parse_ignore_input(raw: str) -> list[str]:
    """Split a comma-separated string into names. Empty segments are ignored."""
    if not raw or not raw.strip():
        return []
    return [p.strip() for p in raw.split(",") if p.strip()]


def load_ignore_patterns(path: str | None) -> list[str]:
    """Load the ignore list from *path*.

    Without a path, or when the file cannot be read, the default list
    (``node_modules``) is returned.
    """
    if not path:
        return list(DEFAULT_IGNORE)
    try:
        return parse_ignore_text(filesystem.read_text(path))
    except OSError as exc:
        logger.warning("Ignore file not readable: %s (%s). Using default.", path, exc)
        return list(DEFAULT_IGNORE)
