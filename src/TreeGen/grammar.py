"""Line grammar shared by the tree renderer and the tree parser.

A tree line looks like::

    <prefix><connector><name>[/][ #comment]

where *prefix* is zero or more 4-character units (``PIPE_PAD`` or
``SPACE_PAD``) and *connector* is ``BRANCH`` or ``LAST_BRANCH``. The
number of prefix units is the depth of the entry below the root line.
"""

from __future__ import annotations

from TreeGen.models import DecodedLine, TreeLine

UNIT_WIDTH = 4

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_PAD = "│   "
SPACE_PAD = " " * UNIT_WIDTH

COMMENT_CHAR = "#"
DIR_SUFFIX = "/"

# Glyphs whose presence marks a line as part of a drawn hierarchy
HIERARCHY_GLYPHS: tuple[str, ...] = (BRANCH.rstrip(), LAST_BRANCH.rstrip(), PIPE_PAD.rstrip())

# `tree` and some editors emit non-breaking spaces inside the glyph blocks
_NBSP = "\u00a0"


class LineDecodeError(Exception):
    """Raised when a line does not follow the tree line grammar."""


def connector_for(is_last: bool) -> str:
    return LAST_BRANCH if is_last else BRANCH


def pad_for(is_last: bool) -> str:
    """Return the prefix unit that children of an entry inherit."""
    return SPACE_PAD if is_last else PIPE_PAD


def format_name(name: str, is_dir: bool) -> str:
    return f"{name}{DIR_SUFFIX}" if is_dir else name


def format_line(prefix: str, line: TreeLine) -> str:
    """Format an entry below the root; *prefix* holds one unit per ancestor."""
    if len(prefix) != line.depth * UNIT_WIDTH:
        raise ValueError(f"Prefix {prefix!r} does not match depth {line.depth}")
    return f"{prefix}{connector_for(line.is_last)}{format_name(line.name, line.is_dir)}"


def decode_line(line: str) -> DecodedLine | None:
    """Decode a single tree line.

    Returns ``None`` when the line carries no entry (blank, or the name is
    empty once the comment is stripped). Raises `LineDecodeError` when the
    line is not built from whole prefix units followed by a connector.
    """
    text = line.rstrip("\r\n").replace(_NBSP, " ")
    if not text.strip():
        return None

    depth = 0
    pos = 0
    while text.startswith(PIPE_PAD, pos) or text.startswith(SPACE_PAD, pos):
        depth += 1
        pos += UNIT_WIDTH

    rest = text[pos:]
    if rest.startswith(BRANCH) or rest.startswith(LAST_BRANCH):
        raw_name = rest[UNIT_WIDTH:]
    elif rest.rstrip() in (BRANCH.rstrip(), LAST_BRANCH.rstrip()):
        return None
    elif COMMENT_CHAR in rest and not rest.split(COMMENT_CHAR, 1)[0].strip():
        # Pure comment line inside the hierarchy
        return None
    else:
        raise LineDecodeError(f"No connector after {depth} indentation unit(s): {text!r}")

    name = raw_name.split(COMMENT_CHAR, 1)[0].strip()
    if not name:
        return None

    is_dir = name.endswith(DIR_SUFFIX)
    if is_dir:
        name = name.rstrip(DIR_SUFFIX).strip()
        if not name:
            return None
    return DecodedLine(depth=depth, name=name, is_dir=is_dir)


def is_hierarchy_line(line: str) -> bool:
    """Return True if the line contains any connector or continuation glyph."""
    return any(glyph in line for glyph in HIERARCHY_GLYPHS)


def is_root_path_line(line: str) -> bool:
    """Return True for lines that look like a root designator (``./``, ``pkg/``, ``..``)."""
    if is_hierarchy_line(line):
        return False
    stripped = line.strip()
    if not stripped:
        return False
    return (
        stripped.startswith("./")
        or stripped.startswith("../")
        or stripped.endswith(DIR_SUFFIX)
        or stripped in (".", "..")
    )
