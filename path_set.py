"""Path entries and the deduplicated, ordered set of discovered paths."""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List


class EntryKind(Enum):
    FOLDER = "folder"
    FILE = "file"


def canonical_path(path: str, kind: EntryKind) -> str:
    """Expand ~, make absolute and resolve symlinks.

    Folders are resolved fully. For files only the parent directory is
    resolved, so a symlinked image is sorted as the link itself.
    """
    path = os.path.abspath(os.path.expanduser(os.fspath(path)))
    if kind is EntryKind.FOLDER:
        return os.path.realpath(path)
    parent, name = os.path.split(path)
    return os.path.join(os.path.realpath(parent), name)


@dataclass(frozen=True)
class PathEntry:
    path: str
    kind: EntryKind

    @classmethod
    def folder(cls, path: str) -> "PathEntry":
        return cls(canonical_path(path, EntryKind.FOLDER), EntryKind.FOLDER)

    @classmethod
    def file(cls, path: str) -> "PathEntry":
        return cls(canonical_path(path, EntryKind.FILE), EntryKind.FILE)

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    @property
    def directory(self) -> str:
        return os.path.dirname(self.path)

    def __str__(self) -> str:
        return self.path


class PathSet:
    """Insertion-ordered collection of entries, unique by canonical path."""

    def __init__(self, entries: Iterable[PathEntry] = ()):
        self._entries: Dict[str, PathEntry] = {}
        self.extend(entries)

    def add(self, entry: PathEntry) -> bool:
        """Insert entry. Returns False if its path is already known."""
        if entry.path in self._entries:
            return False
        self._entries[entry.path] = entry
        return True

    def extend(self, entries: Iterable[PathEntry]) -> List[PathEntry]:
        """Insert entries in order, returning only the ones that were new."""
        return [e for e in entries if self.add(e)]

    @property
    def folders(self) -> List[PathEntry]:
        return [e for e in self._entries.values() if e.kind is EntryKind.FOLDER]

    @property
    def files(self) -> List[PathEntry]:
        return [e for e in self._entries.values() if e.kind is EntryKind.FILE]

    def __contains__(self, entry: object) -> bool:
        if isinstance(entry, PathEntry):
            return entry.path in self._entries
        return False

    def __iter__(self) -> Iterator[PathEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)
