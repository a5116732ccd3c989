"""Streamlit UI for TreeGen."""

from __future__ import annotations

import os

import streamlit as st

from TreeGen.builder import BuildError, build_structure
from TreeGen.ignore_loader import DEFAULT_IGNORE, parse_ignore_input
from TreeGen.renderer import DEFAULT_MAX_DEPTH, render_tree

_PREVIEW_MAX_LINES = 1000


def _qp(key: str, default: str = "") -> str:
    """Read a query parameter, returning *default* if absent."""
    params = st.query_params
    return params.get(key, default)


def _qp_int(key: str, default: int) -> int:
    """Read an integer query parameter, falling back to *default* if absent or invalid."""
    try:
        return int(_qp(key, str(default)))
    except ValueError:
        return default


def main() -> None:
    st.set_page_config(
        page_title="TreeGen",
        page_icon="🌳",
        layout="wide",
    )

    st.title("TreeGen")
    st.caption(
        "Render a folder as an ASCII tree, or rebuild a folder structure from one."
    )

    render_tab, build_tab = st.tabs(["Render", "Build"])
    with render_tab:
        _render_tab()
    with build_tab:
        _build_tab()


def _render_tab() -> None:
    root = st.text_input("Directory", value=_qp("dir"), placeholder="./my-project")
    ignore_raw = st.text_input(
        "Ignore (names, comma-separated)",
        value=_qp("ignore", ", ".join(DEFAULT_IGNORE)),
        help="Entries whose name matches exactly are left out of the tree.",
    )
    max_depth = st.number_input(
        "Max depth",
        min_value=0,
        max_value=100,
        value=min(max(_qp_int("max_depth", DEFAULT_MAX_DEPTH), 0), 100),
        step=1,
    )

    if st.button("Render", type="primary", use_container_width=True):
        if not root:
            st.error("Please enter a directory.")
        elif not os.path.isdir(root):
            st.error(f"Not a directory: {root}")
        else:
            result = render_tree(root, ignore=parse_ignore_input(ignore_raw), max_depth=int(max_depth))
            st.session_state["render_result"] = {
                "text": result.text,
                "filename": "tree.txt",
                "warnings": result.warnings,
            }

    if "render_result" in st.session_state:
        _show_render_result(st.session_state["render_result"])


def _show_render_result(result: dict) -> None:
    """Display download button and preview from a stored render result."""
    text = result["text"]
    _show_warnings(result["warnings"])

    st.download_button(
        label="Download tree.txt",
        data=text,
        file_name=result["filename"],
        mime="text/plain",
        use_container_width=True,
    )

    preview_lines = text.split("\n")
    with st.expander("Preview", expanded=True):
        if len(preview_lines) > _PREVIEW_MAX_LINES:
            st.code("\n".join(preview_lines[:_PREVIEW_MAX_LINES]), language="text")
            st.caption(
                f"Preview is truncated to {_PREVIEW_MAX_LINES:,} lines "
                f"(total {len(preview_lines):,} lines). "
                "Download the file for the full content."
            )
        else:
            st.code(text, language="text")


def _build_tab() -> None:
    tree_text = st.text_area(
        "Tree text",
        height=300,
        placeholder="project/\n├── src/\n│   └── main.py\n└── README.md",
        help="The first line is the root line and is not created.",
    )
    target = st.text_input("Target directory", value=_qp("out"), placeholder="./rebuilt")
    create_files = st.checkbox("Create empty files", value=_qp("all") == "1")

    if not st.button("Build", type="primary", use_container_width=True):
        return
    if not tree_text.strip():
        st.error("Please paste a tree.")
        return

    try:
        result = build_structure(tree_text, target, create_files=create_files)
    except BuildError as exc:
        st.error(str(exc))
        return

    st.success(
        f"Structure created in {result.target_dir}: "
        f"{len(result.created_dirs)} folders, {len(result.created_files)} files."
    )
    _show_warnings(result.warnings)


def _show_warnings(warnings: list[str]) -> None:
    if warnings:
        with st.expander(f"⚠ {len(warnings)} warnings", expanded=False):
            for warning in warnings:
                st.text(warning)


if __name__ == "__main__":
    main()
