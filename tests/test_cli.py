"""Tests for cli module."""

import io
import os
from unittest import mock

import pytest

from TreeGen.cli import build_parser, main, resolve_output_path

SAMPLE = """root/
├── src/
│   └── main.txt
└── README.md
"""


class _TtyInput(io.StringIO):
    def isatty(self):
        return True


@pytest.fixture
def project(tmp_path):
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / "src" / "main.py").write_text("print()")
    (root / "node_modules" / "dep").mkdir(parents=True)
    (root / "README.md").write_text("# readme")
    return root


class TestResolveOutputPath:
    def test_path_with_extension_is_file(self, tmp_path):
        target = tmp_path / "out" / "listing.txt"
        assert resolve_output_path(str(target)) == str(target)

    def test_directory_gets_default_name(self, tmp_path):
        assert resolve_output_path(str(tmp_path / "out")) == os.path.join(str(tmp_path / "out"), "tree.txt")


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.path is None
        assert args.all is False
        assert args.max_depth == 20

    def test_short_flags(self):
        args = build_parser().parse_args(["tree.txt", "-a", "-d", "-s", "-o", "out", "-i", ".ignore", "-m", "3"])
        assert (args.all, args.debug, args.show) == (True, True, True)
        assert args.output == "out"
        assert args.ignore == ".ignore"
        assert args.max_depth == 3

    def test_negative_depth_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["-m", "-1"])


class TestRenderMode:
    def test_prints_tree(self, project, capsys):
        assert main([str(project)], stdin=_TtyInput()) == 0
        out = capsys.readouterr().out
        assert out.splitlines()[:5] == [
            "project/",
            "├── src/",
            "│   └── main.py",
            "└── README.md",
            "",
        ]

    def test_saves_to_output_dir(self, project, tmp_path, capsys):
        out_dir = tmp_path / "listing"
        assert main([str(project), "-o", str(out_dir)], stdin=_TtyInput()) == 0

        saved = (out_dir / "tree.txt").read_text(encoding="utf-8")
        assert saved.startswith("project/\n├── src/")
        out = capsys.readouterr().out
        assert "Tree saved to:" in out
        assert "├── src/" not in out

    def test_show_prints_and_saves(self, project, tmp_path, capsys):
        target = tmp_path / "t.txt"
        assert main([str(project), "-o", str(target), "-s"], stdin=_TtyInput()) == 0
        assert target.is_file()
        assert "├── src/" in capsys.readouterr().out

    def test_ignore_file(self, project, tmp_path, capsys):
        ignore = tmp_path / ".ignore"
        ignore.write_text("src\n", encoding="utf-8")
        assert main([str(project), "-i", str(ignore)], stdin=_TtyInput()) == 0
        out = capsys.readouterr().out
        assert "src/" not in out
        assert "node_modules/" in out


class TestRebuildFromFile:
    def test_undecodable_byte_in_file(self, tmp_path):
        tree_file = tmp_path / "tree.txt"
        tree_file.write_bytes("root/\n├── a/\n├── bad".encode() + b"\xff" + "/\n└── z/\n".encode())
        out = tmp_path / "out"

        assert main([str(tree_file), "-o", str(out)], stdin=_TtyInput()) == 0
        assert (out / "a").is_dir()
        assert (out / "z").is_dir()

    def test_defaults_to_directory_of_tree_file(self, tmp_path, capsys):
        tree_file = tmp_path / "tree.txt"
        tree_file.write_text(SAMPLE, encoding="utf-8")

        assert main([str(tree_file), "-a"], stdin=_TtyInput()) == 0
        assert (tmp_path / "src" / "main.txt").is_file()
        assert (tmp_path / "README.md").is_file()
        assert f"Structure created in: {tmp_path}" in capsys.readouterr().out

    def test_output_directory(self, tmp_path):
        tree_file = tmp_path / "tree.txt"
        tree_file.write_text(SAMPLE, encoding="utf-8")
        out = tmp_path / "rebuilt"

        assert main([str(tree_file), "-o", str(out)], stdin=_TtyInput()) == 0
        assert (out / "src").is_dir()
        assert not (out / "README.md").exists()

    def test_show_prints_tree_first(self, tmp_path, capsys):
        tree_file = tmp_path / "tree.txt"
        tree_file.write_text(SAMPLE, encoding="utf-8")
        main([str(tree_file), "-s", "-o", str(tmp_path / "o")], stdin=_TtyInput())
        out = capsys.readouterr().out
        assert out.index("Structure to be created:") < out.index("Structure created in:")
        assert "│   └── main.txt" in out


class TestRebuildFromStdin:
    def test_undecodable_byte_does_not_stop_build(self, tmp_path):
        out = tmp_path / "piped"
        raw = "root/\n├── a/\n├── bad".encode() + b"\xff" + "/\n└── z/\n".encode()
        stdin = io.TextIOWrapper(io.BytesIO(raw), encoding="utf-8")

        assert main(["-o", str(out)], stdin=stdin) == 0
        assert (out / "a").is_dir()
        assert (out / "z").is_dir()

    def test_builds_from_piped_text(self, tmp_path, capsys):
        out = tmp_path / "piped"
        assert main(["-o", str(out), "-a"], stdin=io.StringIO(SAMPLE)) == 0
        assert (out / "src" / "main.txt").is_file()
        assert "Structure created in:" in capsys.readouterr().out

    def test_show_echoes_lines(self, tmp_path, capsys):
        main(["-o", str(tmp_path), "-s"], stdin=io.StringIO(SAMPLE))
        out = capsys.readouterr().out
        assert "root/" in out
        assert "│   └── main.txt" in out

    def test_output_required(self, capsys):
        assert main([], stdin=io.StringIO(SAMPLE)) == 1
        assert "requires -o" in capsys.readouterr().err


class TestFatalErrors:
    def test_help_on_tty_without_arguments(self, capsys):
        assert main([], stdin=_TtyInput()) == 0
        assert "usage: tgen" in capsys.readouterr().out

    def test_missing_path(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope")], stdin=_TtyInput()) == 1
        assert "does not exist" in capsys.readouterr().err

    def test_unbuildable_target(self, tmp_path, capsys):
        tree_file = tmp_path / "tree.txt"
        tree_file.write_text(SAMPLE, encoding="utf-8")
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        assert main([str(tree_file), "-o", str(blocker / "x")], stdin=_TtyInput()) == 1
        assert "Error:" in capsys.readouterr().err

    def test_warnings_do_not_change_exit_code(self, tmp_path):
        tree_file = tmp_path / "tree.txt"
        tree_file.write_text("root/\n  ├── bad\n└── good/\n", encoding="utf-8")
        with mock.patch("TreeGen.cli.logger") as fake_logger:
            assert main([str(tree_file)], stdin=_TtyInput()) == 0
        fake_logger.info.assert_called_once()
        assert (tmp_path / "good").is_dir()
