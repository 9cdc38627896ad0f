# fsviz/render.py

"""
Tree rendering.

Turns a forest of entries into display lines, either with box-drawing
connectors (``├──``, ``└──``, ``│``) or as a flat dash list. Colours are
supplied as a :class:`Palette` value; :data:`PLAIN` produces undecorated
text and :func:`strip_ansi` removes decoration from already rendered text.
"""


from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from anytree import ContStyle, PreOrderIter, RenderTree

from fsviz.entry import DirectoryEntry, Entry, SymlinkEntry

STYLE = ContStyle()

_ANSI_SGR = re.compile(r"\x1b\[[0-9;]*m")


@dataclass(frozen=True)
class Palette:
    """Escape sequences wrapped around directory and symlink names."""

    directory: str = ""
    symlink: str = ""
    reset: str = ""


PLAIN = Palette()
ANSI = Palette(directory="\x1b[34m", symlink="\x1b[36m", reset="\x1b[0m")


def strip_ansi(text: str) -> str:
    """Remove ANSI colour sequences from ``text``."""
    return _ANSI_SGR.sub("", text)


def label(entry: Entry, palette: Palette = PLAIN) -> str:
    """
    Return the display label of a single entry.

    Directories get a trailing ``/``; symbolic links are annotated with
    their target (or ``unresolved``).
    """

    if isinstance(entry, DirectoryEntry):
        return f"{palette.directory}{entry.name}{palette.reset}/"
    if isinstance(entry, SymlinkEntry):
        return (
            f"{palette.symlink}{entry.name}{palette.reset}"
            f" [symbolic link -> {entry.target}]"
        )
    return entry.name


def render_lines(
    entries: Sequence[Entry],
    *,
    simple: bool = False,
    palette: Palette = PLAIN,
) -> list[str]:
    """
    Render a forest of entries as display lines, depth-first.

    In the default mode each line is prefixed with the connectors of
    :class:`anytree.ContStyle`: the last sibling gets ``└── `` and hands
    blank padding to its subtree, the others get ``├── `` and hand down a
    ``│   `` continuation. In ``simple`` mode every line is ``- `` followed
    by the label, whatever its depth.

    Parameters
    ----------
    entries : Sequence[Entry]
        Top-level entries as returned by :func:`fsviz.tree.walk`.
    simple : bool, default=False
        Render a flat dash list instead of tree art.
    palette : Palette, default=PLAIN
        Colours for directory and symlink names.

    Returns
    -------
    list[str]
        One line per entry, in pre-order.
    """

    if simple:
        return [f"- {label(node, palette)}" for top in entries for node in PreOrderIter(top)]

    lines: list[str] = []
    for i, top in enumerate(entries):
        last = i == len(entries) - 1
        branch = STYLE.end if last else STYLE.cont
        ext = STYLE.empty if last else STYLE.vertical
        for pre, _fill, node in RenderTree(top, style=STYLE):
            if node is top:
                lines.append(branch + label(node, palette))
            else:
                lines.append(ext + pre + label(node, palette))
    return lines


def render(
    entries: Sequence[Entry],
    *,
    simple: bool = False,
    palette: Palette = PLAIN,
) -> str:
    """Render a forest of entries as a single newline-joined string."""
    return "\n".join(render_lines(entries, simple=simple, palette=palette))
