"""The working set of images and the pointer to the current one."""

import logging
from typing import Iterable, List, Optional, Set

from path_set import PathEntry

logger = logging.getLogger(__name__)


class Navigator:
    """Ordered working set plus a pointer.

    The pointer is either Positioned(i) with 0 <= i < len, or Empty. Empty is
    stored as index == len, which covers both an empty working set and a
    pointer that has advanced past the last entry.

    advance and retreat are for browsing. Undo and redo restore the exact
    recorded index through insert and seek instead of stepping back.
    """

    def __init__(self, entries: Iterable[PathEntry] = ()):
        self._entries: List[PathEntry] = []
        self._paths: Set[str] = set()
        self._index = 0
        self.extend(entries)

    @property
    def entries(self) -> List[PathEntry]:
        return list(self._entries)

    @property
    def position(self) -> Optional[int]:
        """Index of the current entry, or None when Empty."""
        return self._index if self._index < len(self._entries) else None

    @property
    def is_empty(self) -> bool:
        return self._index >= len(self._entries)

    def current(self) -> Optional[PathEntry]:
        if self.is_empty:
            return None
        return self._entries[self._index]

    def remaining_count(self) -> int:
        return len(self._entries) - self._index

    def advance(self):
        if self.is_empty:
            return
        self._index += 1
        logger.debug("Advanced to %s", self.position)

    def retreat(self):
        if self._index > 0:
            self._index -= 1
        logger.debug("Retreated to %s", self.position)

    def remove_current(self) -> Optional[PathEntry]:
        """Drop the current entry; the next one slides into its index."""
        if self.is_empty:
            return None
        entry = self._entries.pop(self._index)
        self._paths.discard(entry.path)
        logger.debug("Removed %s, now at %s", entry.name, self.position)
        return entry

    def insert(self, index: int, entry: PathEntry):
        """Put an entry back at index, e.g. when a move is undone."""
        if entry.path in self._paths:
            raise ValueError(f"{entry.path} is already in the working set")
        if not 0 <= index <= len(self._entries):
            raise IndexError(f"insert index {index} out of range")
        self._entries.insert(index, entry)
        self._paths.add(entry.path)

    def discard(self, path: str) -> Optional[PathEntry]:
        """Drop the entry for path wherever it sits, keeping the pointer on
        the same entry."""
        if path not in self._paths:
            return None
        index = next(i for i, e in enumerate(self._entries) if e.path == path)
        entry = self._entries.pop(index)
        self._paths.discard(path)
        if index < self._index:
            self._index -= 1
        return entry

    def seek(self, index: int):
        """Move the pointer to index; len(entries) means Empty."""
        if not 0 <= index <= len(self._entries):
            raise IndexError(f"seek index {index} out of range")
        self._index = index

    def extend(self, entries: Iterable[PathEntry]) -> int:
        """Append entries not already in the working set.

        A pointer that had run off the end lands on the first new entry.
        """
        added = 0
        for entry in entries:
            if entry.path in self._paths:
                continue
            self._entries.append(entry)
            self._paths.add(entry.path)
            added += 1
        return added

    def __contains__(self, entry: object) -> bool:
        return isinstance(entry, PathEntry) and entry.path in self._paths

    def __len__(self) -> int:
        return len(self._entries)
