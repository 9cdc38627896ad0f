# fsviz/export.py

"""
Structured export of entry forests.

JSON keeps the nesting (``children`` lists); CSV flattens the forest in
pre-order, one row per entry. Every function here is a pure function of
its input: nothing touches the filesystem and no colour codes are ever
produced.
"""


from __future__ import annotations

import csv
import io
import json
from typing import Any, Sequence

from anytree import PreOrderIter

from fsviz.entry import DirectoryEntry, Entry, EntryKind, FileEntry, SymlinkEntry

CSV_FIELDS = ("path", "name", "type", "target")


def flatten(entries: Sequence[Entry]) -> list[Entry]:
    """Return every entry of the forest in pre-order, parents before children."""
    return [node for top in entries for node in PreOrderIter(top)]


def entry_to_dict(entry: Entry) -> dict[str, Any]:
    """
    Convert an entry and its subtree to plain JSON-compatible data.

    Directories always carry a ``children`` list, empty or not; only
    symbolic links carry a ``target``.
    """

    data: dict[str, Any] = {
        "name": entry.name,
        "path": entry.relpath,
        "type": entry.kind.value,
    }
    if isinstance(entry, SymlinkEntry):
        data["target"] = entry.target
    if isinstance(entry, DirectoryEntry):
        data["children"] = [entry_to_dict(child) for child in entry.children]
    return data


def to_json(entries: Sequence[Entry], *, indent: int = 2) -> str:
    """Serialize a forest as an indented JSON array."""
    return json.dumps([entry_to_dict(e) for e in entries], indent=indent, ensure_ascii=False)


def entry_from_dict(data: Any) -> Entry:
    """
    Rebuild an entry (and its subtree) from :func:`entry_to_dict` output.

    The ``path`` field is ignored: it is derived from the nesting.

    Raises
    ------
    ValueError
        If ``data`` is not a well-formed entry object.
    """

    if not isinstance(data, dict):
        raise ValueError(f"Expected an object, got {type(data).__name__}")
    try:
        name = data["name"]
        kind = EntryKind(data["type"])
    except KeyError as exc:
        raise ValueError(f"Missing field {exc.args[0]!r} in {data!r}") from exc
    if not isinstance(name, str):
        raise ValueError(f"'name' must be a string, got {name!r}")

    if kind is EntryKind.DIRECTORY:
        entry: Entry = DirectoryEntry(name)
        children = data.get("children", [])
        if not isinstance(children, list):
            raise ValueError(f"'children' of {name!r} must be a list")
        entry.children = [entry_from_dict(child) for child in children]
    elif kind is EntryKind.SYMLINK:
        target = data.get("target")
        if not isinstance(target, str):
            raise ValueError(f"Symbolic link {name!r} needs a string 'target'")
        entry = SymlinkEntry(name, target)
    else:
        entry = FileEntry(name)
    return entry


def entries_from_json(text: str) -> list[Entry]:
    """Parse :func:`to_json` output back into a forest of entries."""
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("Expected a JSON array of entries")
    return [entry_from_dict(item) for item in data]


def to_csv(entries: Sequence[Entry]) -> str:
    """
    Serialize a forest as CSV.

    The header row is ``path,name,type,target``; each entry follows in
    pre-order. ``target`` is empty for anything but a symbolic link.
    Quoting follows the :mod:`csv` module's minimal quoting rules.
    """

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_FIELDS)
    for entry in flatten(entries):
        target = entry.target if isinstance(entry, SymlinkEntry) else ""
        writer.writerow([entry.relpath, entry.name, entry.kind.value, target])
    return buf.getvalue()
