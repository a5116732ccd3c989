"""Data classes for TreeGen."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class DirectoryEntry:
    name: str
    is_dir: bool = False


@dataclass
class TreeLine:
    depth: int
    name: str
    is_dir: bool = False
    is_last: bool = False


@dataclass
class DecodedLine:
    depth: int
    name: str
    is_dir: bool = False


@dataclass
class RenderResult:
    text: str = ""
    warnings: list[str] = field(default_factory=list)


@dataclass
class BuildResult:
    target_dir: str
    created_dirs: list[str] = field(default_factory=list)
    created_files: list[str] = field(default_factory=list)
    skipped_lines: int = 0
    warnings: list[str] = field(default_factory=list)


class PathStack:
    """Currently open ancestor directories, indexed by depth.

    Index 0 is always the resolved build root and is never removed.
    """

    def __init__(self, root: str):
        self._paths: list[str] = [root]

    def __len__(self) -> int:
        return len(self._paths)

    @property
    def root(self) -> str:
        return self._paths[0]

    @property
    def top(self) -> str:
        return self._paths[-1]

    @property
    def depth(self) -> int:
        return len(self._paths) - 1

    def truncate(self, depth: int) -> None:
        """Drop every entry above *depth* so the top is the parent for that depth."""
        del self._paths[max(depth, 0) + 1:]

    def push(self, path: str) -> None:
        self._paths.append(path)

    def as_list(self) -> list[str]:
        return list(self._paths)
