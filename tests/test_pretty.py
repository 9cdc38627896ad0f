import sys
from pathlib import Path

import pytest

from fsviz import (
    ANSI,
    UNRESOLVED,
    DirectoryEntry,
    FileEntry,
    SymlinkEntry,
    path_tree,
    render,
    render_lines,
    strip_ansi,
    walk,
)


def _make_file(p: Path, content: str = "x"):
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content, encoding="utf-8")


def _lines(s: str):
    return s.splitlines()


def test_render_single_level(tmp_path: Path):
    # Root contains two dirs and two files
    (tmp_path / "bDir").mkdir()
    (tmp_path / "ADir").mkdir()
    _make_file(tmp_path / "z.txt")
    _make_file(tmp_path / "A.txt")

    lines = render_lines(walk(tmp_path))

    # The root itself is not drawn; dirs first, then files
    assert lines == [
        "├── ADir/",
        "├── bDir/",
        "├── A.txt",
        "└── z.txt",
    ]


def test_render_nested_structure(tmp_path: Path):
    # project/
    #   src/
    #     a.py
    #   docs/
    #     readme.md
    (tmp_path / "src").mkdir()
    (tmp_path / "docs").mkdir()
    _make_file(tmp_path / "src/a.py")
    _make_file(tmp_path / "docs/readme.md")

    out = render(walk(tmp_path))

    # ├── docs/
    # │   └── readme.md
    # └── src/
    #     └── a.py
    assert _lines(out) == [
        "├── docs/",
        "│   └── readme.md",
        "└── src/",
        "    └── a.py",
    ]


def test_render_deep_prefixes_are_depth_first():
    # Built by hand: the renderer never touches the filesystem
    a = DirectoryEntry("a")
    b = DirectoryEntry("b", parent=a)
    FileEntry("b1.txt", parent=b)
    FileEntry("b2.txt", parent=b)
    FileEntry("a1.txt", parent=a)
    c = DirectoryEntry("c")
    d = DirectoryEntry("d", parent=c)
    FileEntry("d1.txt", parent=d)
    top = FileEntry("top.txt")

    assert render_lines([a, c, top]) == [
        "├── a/",
        "│   ├── b/",
        "│   │   ├── b1.txt",
        "│   │   └── b2.txt",
        "│   └── a1.txt",
        "├── c/",
        "│   └── d/",
        "│       └── d1.txt",
        "└── top.txt",
    ]


def test_render_simple_mode_is_flat():
    a = DirectoryEntry("a")
    FileEntry("inner.txt", parent=a)
    top = FileEntry("top.txt")

    assert render_lines([a, top], simple=True) == [
        "- a/",
        "- inner.txt",
        "- top.txt",
    ]


def test_symlink_labels():
    ok = SymlinkEntry("link", "target.txt")
    broken = SymlinkEntry("broken", UNRESOLVED)

    assert render_lines([ok, broken]) == [
        "├── link [symbolic link -> target.txt]",
        "└── broken [symbolic link -> unresolved]",
    ]


def test_palette_decorates_and_strip_removes():
    d = DirectoryEntry("dir")
    link = SymlinkEntry("link", "dir")

    out = render([d, link], palette=ANSI)
    assert "\x1b[34mdir\x1b[0m/" in out
    assert "\x1b[36mlink\x1b[0m" in out
    assert strip_ansi(out) == render([d, link])


def test_render_empty_forest():
    assert render_lines([]) == []
    assert render([]) == ""


@pytest.mark.skipif(sys.platform.startswith("win"), reason="Symlink creation needs privileges on Windows")
def test_path_tree_matches_walk_and_render(tmp_path: Path):
    # real/
    #   inside.txt
    # linkdir -> real (symlink)
    real = tmp_path / "real"
    real.mkdir()
    _make_file(real / "inside.txt")
    (tmp_path / "linkdir").symlink_to("real", target_is_directory=True)

    s = path_tree(tmp_path)
    assert s == render(walk(tmp_path))
    assert _lines(s) == [
        "├── real/",
        "│   └── inside.txt",
        "└── linkdir [symbolic link -> real]",
    ]

    assert _lines(path_tree(tmp_path, dirs_only=True, simple=True)) == ["- real/"]


def test_path_tree_returns_string_and_does_not_print(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    _make_file(tmp_path / "a.txt")
    out = path_tree(tmp_path)
    # It should return a string
    assert isinstance(out, str)
    # And not print anything by itself
    captured = capsys.readouterr()
    assert captured.out == ""
    assert out == "└── a.txt"
