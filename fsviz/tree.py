# fsviz/tree.py

"""
Filesystem traversal.

This module walks a directory and builds an in-memory forest of
:mod:`fsviz.entry` nodes, one tree per top-level entry. The traversal root
itself is not part of the result.

Traversal is deterministic: names are sorted by code point, then
directories are listed before files and symbolic links, keeping the name
order inside each group. Filtering is pruning-based: an ignored directory
is skipped together with its whole subtree.

Symbolic links are recorded as leaves and never followed, so link cycles
cannot cause infinite recursion. Failures on individual nodes are logged
and the node is left out; the walk always returns what it could read.

The main entry point is :func:`walk`; :func:`path_tree` walks and renders
in a single call.
"""


from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Any, Callable

import structlog

from fsviz.entry import (
    UNRESOLVED,
    DirectoryEntry,
    Entry,
    EntryKind,
    FileEntry,
    SymlinkEntry,
)
from fsviz.render import PLAIN, Palette, render

logger = structlog.get_logger(__name__)

DEFAULT_MAX_DEPTH = 10


def entry_kind(p: Path) -> EntryKind:
    """
    Classify a path without following symbolic links.

    Parameters
    ----------
    p : pathlib.Path
        Path to inspect.

    Returns
    -------
    EntryKind
        ``SYMLINK`` for any link, ``DIRECTORY`` for a real directory and
        ``FILE`` for everything else (regular files, fifos, sockets, ...).

    Raises
    ------
    OSError
        If the path cannot be stat'ed (e.g. it vanished after listing).
    """

    mode = p.lstat().st_mode
    if stat.S_ISLNK(mode):
        return EntryKind.SYMLINK
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    return EntryKind.FILE


def read_link(p: Path) -> str:
    """
    Best-effort read of a symbolic link target.

    Returns the raw target string, or :data:`~fsviz.entry.UNRESOLVED` when
    the link cannot be read or points at something that no longer exists.
    Never raises.
    """

    try:
        target = os.readlink(p)
    except OSError as exc:
        logger.warning("Cannot read symbolic link %s: %s", p, exc)
        return UNRESOLVED
    if not os.path.exists(p):
        logger.debug("Dangling symbolic link %s -> %s", p, target)
        return UNRESOLVED
    return target


def list_names(d: Path) -> list[str]:
    """Return the names in directory ``d`` in code point order."""
    return sorted(child.name for child in d.iterdir())


def walk(
    root: str | os.PathLike[str],
    *,
    ignore: Callable[[str], bool] | None = None,
    dirs_only: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[Entry]:
    """
    Walk a directory and return its contents as a forest of entries.

    Parameters
    ----------
    root : str | os.PathLike
        Directory to scan. It is not itself represented in the result.
    ignore : Callable[[str], bool] | None, optional
        Predicate over POSIX paths relative to ``root`` (for instance a
        :class:`~fsviz.pattern.GlobMatcher`). Matching entries are skipped;
        matching directories are not descended into.
    dirs_only : bool, default=False
        Keep directories only. Symbolic links are dropped too, whatever
        they point at.
    max_depth : int, default=10
        Deepest level listed; top-level entries are at depth 1. Directories
        at this depth are reported without children.

    Returns
    -------
    list[Entry]
        Top-level entries, directories first. Each directory's children are
        fully populated.

    Raises
    ------
    ValueError
        If ``max_depth`` is smaller than 1.
    OSError
        If ``root`` does not exist, is not a directory, or cannot be listed.
    """

    if max_depth < 1:
        raise ValueError(f"max_depth must be at least 1, got {max_depth}")

    root = Path(root)
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")
    names = list_names(root)  # errors on the root itself propagate
    visited = {os.path.realpath(root)}

    def expand(d: Path, name: str, relpath: str, depth: int) -> DirectoryEntry | None:
        """
        Build the entry for child directory ``d`` and everything below it.

        Returns ``None`` when the directory cannot be listed; the caller then
        leaves it out.
        """

        if depth >= max_depth:
            logger.debug("Depth limit %d reached at %s", max_depth, relpath)
            return DirectoryEntry(name)

        real = os.path.realpath(d)
        if real in visited:
            logger.debug("Already visited %s, not descending", relpath)
            return DirectoryEntry(name)

        try:
            child_names = list_names(d)
        except OSError as exc:
            logger.warning("Cannot read directory %s: %s", d, exc)
            return None

        visited.add(real)
        entry = DirectoryEntry(name)
        entry.children = rec(d, child_names, relpath + "/", depth + 1)
        return entry

    def rec(d: Path, names: list[str], prefix: str, depth: int) -> list[Entry]:
        """
        Build the entries listed in directory ``d``.

        ``prefix`` is the relative path of ``d`` with a trailing slash (empty
        for the root), ``depth`` the depth of the entries being built.
        """

        dirs: list[tuple[str, Path]] = []
        others: list[tuple[str, Path, EntryKind]] = []
        for name in names:
            if name in (".", ".."):
                continue
            if ignore is not None and ignore(prefix + name):
                continue
            child = d / name
            try:
                kind = entry_kind(child)
            except OSError as exc:
                logger.warning("Cannot stat %s: %s", child, exc)
                continue
            if kind is EntryKind.DIRECTORY:
                dirs.append((name, child))
            elif not dirs_only:
                others.append((name, child, kind))

        entries: list[Entry] = []
        for name, child in dirs:
            entry = expand(child, name, prefix + name, depth)
            if entry is not None:
                entries.append(entry)
        for name, child, kind in others:
            if kind is EntryKind.SYMLINK:
                entries.append(SymlinkEntry(name, read_link(child)))
            else:
                entries.append(FileEntry(name))
        return entries

    return rec(root, names, "", 1)


def path_tree(
    root: str | os.PathLike[str],
    *,
    simple: bool = False,
    palette: Palette = PLAIN,
    **walk_options: Any,
) -> str:
    """
    Walk ``root`` and render it as a tree in one call.

    Parameters
    ----------
    root : str | os.PathLike
        Directory to display.
    simple : bool, default=False
        Use the flat dash list instead of box-drawing connectors.
    palette : fsviz.render.Palette, default=PLAIN
        Colours for the labels.
    **walk_options
        Forwarded to :func:`walk` (``ignore``, ``dirs_only``, ``max_depth``).

    Returns
    -------
    str
        The rendered tree, one entry per line.
    """

    entries = walk(root, **walk_options)
    return render(entries, simple=simple, palette=palette)
