"""Registry of folders the current image can be moved into."""

import logging
import os
from typing import Iterable, Iterator, List

from errors import InvalidPathError
from path_set import PathEntry, PathSet

logger = logging.getLogger(__name__)


class DestinationRegistry:
    def __init__(self):
        self._folders = PathSet()

    def add(self, folder_path) -> bool:
        """Register a folder. Returns False if it was already registered.

        The path is resolved (home shorthand, symlinks) before insertion so
        two spellings of one directory end up as a single destination.
        """
        if isinstance(folder_path, PathEntry):
            folder_path = folder_path.path
        if not folder_path or not str(folder_path).strip():
            raise InvalidPathError("empty folder path")
        entry = PathEntry.folder(str(folder_path).strip())
        if not os.path.isdir(entry.path):
            raise InvalidPathError(f"'{folder_path}' is not an existing directory")
        added = self._folders.add(entry)
        if added:
            logger.info("Added destination %s", entry.path)
        return added

    def add_many(self, folder_paths: Iterable) -> int:
        return sum(1 for p in folder_paths if self.add(p))

    def clear(self):
        logger.info("Cleared %d destination(s)", len(self._folders))
        self._folders = PathSet()

    @property
    def folders(self) -> List[PathEntry]:
        return self._folders.folders

    def __contains__(self, folder) -> bool:
        if not isinstance(folder, PathEntry):
            folder = PathEntry.folder(str(folder))
        return folder in self._folders

    def __iter__(self) -> Iterator[PathEntry]:
        return iter(self._folders)

    def __len__(self) -> int:
        return len(self._folders)
