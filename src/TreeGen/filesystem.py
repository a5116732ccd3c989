"""Small filesystem wrappers used by the renderer, the builder and the CLI."""

from __future__ import annotations

import os

from TreeGen.models import DirectoryEntry


def list_directory(path: str) -> list[DirectoryEntry]:
    """List the immediate children of *path*. Raises `OSError` if unreadable."""
    with os.scandir(path) as it:
        return [DirectoryEntry(name=e.name, is_dir=e.is_dir()) for e in it]


def make_directory(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def create_empty_file(path: str) -> None:
    """Create an empty file at *path*, truncating any existing content."""
    with open(path, "w", encoding="utf-8"):
        pass


def read_text(path: str) -> str:
    """Read UTF-8 text; undecodable bytes become U+FFFD instead of failing."""
    with open(path, encoding="utf-8", errors="replace") as f:
        return f.read()


def write_text(path: str, text: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        make_directory(parent)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
