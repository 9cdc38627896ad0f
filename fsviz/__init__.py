"""
fsviz — display and export directory structures.

This package walks a directory into an in-memory tree and:
- renders it as a readable tree (box-drawing or flat dash list),
- exports it as nested JSON or flattened CSV,
- filters entries with glob patterns over paths relative to the root.

The API is based on ``pathlib.Path`` and ``anytree`` nodes, and is
deterministic: the same directory always yields the same output.
"""

from __future__ import annotations

__version__ = "1.0.0"

from .entry import UNRESOLVED, DirectoryEntry, Entry, EntryKind, FileEntry, SymlinkEntry
from .export import entries_from_json, flatten, to_csv, to_json
from .pattern import GlobError, GlobMatcher, compile_patterns
from .render import ANSI, PLAIN, Palette, render, render_lines, strip_ansi
from .tree import path_tree, walk

__all__ = [
    "ANSI",
    "PLAIN",
    "UNRESOLVED",
    "DirectoryEntry",
    "Entry",
    "EntryKind",
    "FileEntry",
    "GlobError",
    "GlobMatcher",
    "Palette",
    "SymlinkEntry",
    "compile_patterns",
    "entries_from_json",
    "flatten",
    "path_tree",
    "render",
    "render_lines",
    "strip_ansi",
    "to_csv",
    "to_json",
    "walk",
]
