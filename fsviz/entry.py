# fsviz/entry.py

"""
Tree entries.

Every filesystem node found by the walker is represented by one of three
:class:`anytree.NodeMixin` subclasses: :class:`FileEntry`,
:class:`DirectoryEntry` and :class:`SymlinkEntry`. Only directories may
hold children and only symbolic links carry a ``target``.

The traversal root is not an entry: a walk yields a list of top-level
entries, each of which is the root of its own anytree tree.
"""


from __future__ import annotations

from enum import Enum

from anytree import NodeMixin

#: Target recorded for a symbolic link that cannot be read or whose target is gone.
UNRESOLVED = "unresolved"


class EntryKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"


class Entry(NodeMixin):
    """
    Base class of all entries.

    Parameters
    ----------
    name : str
        Base name of the node; must not contain a path separator.
    parent : DirectoryEntry | None, optional
        Directory holding this entry. ``None`` for top-level entries.
    """

    kind: EntryKind

    def __init__(self, name: str, parent: DirectoryEntry | None = None) -> None:
        if not name or "/" in name:
            raise ValueError(f"Invalid entry name: {name!r}")
        super().__init__()
        self.name = name
        self.parent = parent

    @property
    def relpath(self) -> str:
        """POSIX path relative to the traversal root."""
        return "/".join(node.name for node in self.path)

    def _pre_attach(self, parent: NodeMixin) -> None:
        if not isinstance(parent, DirectoryEntry):
            raise TypeError(
                f"{type(parent).__name__} cannot hold children (attaching {self.name!r})"
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.relpath!r})"


class FileEntry(Entry):
    kind = EntryKind.FILE


class DirectoryEntry(Entry):
    kind = EntryKind.DIRECTORY


class SymlinkEntry(Entry):
    kind = EntryKind.SYMLINK

    def __init__(
        self, name: str, target: str = UNRESOLVED, parent: DirectoryEntry | None = None
    ) -> None:
        super().__init__(name, parent=parent)
        self.target = target
