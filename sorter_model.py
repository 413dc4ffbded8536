"""Sorting session: working set, destinations, and undo history."""

import logging
import os
import threading
from typing import Iterable, List, Optional, Union

from constants import HOLDING_ROOT, SCAN_RECURSIVE, THREAD_POOL_WORKERS
from destinations import DestinationRegistry
from errors import InvalidPathError, StaleEntryError
from file_mover import Action, execute
from folder_scanner import FolderScanner, ScanResult, scan_folders
from holding_area import HoldingArea
from navigator import Navigator
from operation_log import OperationLog
from operations import Operation
from path_set import PathEntry, PathSet

logger = logging.getLogger(__name__)

Roots = Union[str, os.PathLike, Iterable[Union[str, os.PathLike]]]


class SorterModel:
    """Engine behind a sorting front end.

    Actions and pointer movement are separate calls: after move_current,
    delete_current or skip_current the caller invokes advance(), which
    removes the entry (move/delete) or steps past it (skip).
    """

    def __init__(
        self,
        holding_dir: str = HOLDING_ROOT,
        workers: int = THREAD_POOL_WORKERS,
        recursive: bool = SCAN_RECURSIVE,
    ):
        self.paths = PathSet()
        self.navigator = Navigator()
        self.destinations = DestinationRegistry()
        self.log = OperationLog()
        self.holding = HoldingArea(holding_dir)
        self.scanner = FolderScanner(workers=workers, recursive=recursive, exclude=[self.holding.root])
        self.pwd: Optional[str] = None
        self._pending: Optional[Operation] = None

        # Undo history lives in memory only, so sessions whose process has
        # exited can never undo their deletes again
        self.holding.purge_orphans()

    # Loading

    def load(
        self,
        roots: Roots,
        register_folders: bool = True,
        cancel_event: Optional[threading.Event] = None,
    ) -> ScanResult:
        """Scan roots and merge what is found into the session.

        New image files are appended to the working set; files and folders
        already known are not added twice. Discovered sub-folders become
        destinations unless register_folders is False.
        """
        roots = [os.path.expanduser(str(r).strip()) for r in _as_list(roots)]
        valid = [r for r in roots if r and os.path.isdir(r)]
        if not valid:
            raise InvalidPathError(f"no loadable directory in {roots}")

        result = self.scanner.scan(
            [r for r in roots if r],
            cancel_event=cancel_event,
            known=self.paths,
        )
        self.navigator.extend(result.files)
        if register_folders:
            self.destinations.add_many(result.folders)
        self.pwd = PathEntry.folder(valid[0]).path
        logger.info(
            "Loaded %d new file(s); %d in working set", len(result.files), len(self.navigator)
        )
        return result

    def load_destinations(self, directory: str) -> List[PathEntry]:
        """Register the sub-folders of directory without touching the files."""
        directory = os.path.expanduser(str(directory).strip())
        if not os.path.isdir(directory):
            raise InvalidPathError(f"'{directory}' is not an existing directory")
        folders = scan_folders([directory], workers=1, exclude=[self.holding.root])
        self.paths.extend(folders)
        self.destinations.add_many(folders)
        return folders

    def add_folder(self, path: str) -> bool:
        added = self.destinations.add(path)
        self.paths.add(PathEntry.folder(os.path.expanduser(str(path).strip())))
        return added

    def clear_destinations(self):
        self.destinations.clear()

    # Queries

    @property
    def file_count(self) -> int:
        return len(self.navigator)

    def current_image(self) -> Optional[PathEntry]:
        return self.navigator.current()

    def remaining_count(self) -> int:
        return self.navigator.remaining_count()

    def current_directory(self) -> Optional[str]:
        return self.pwd

    # Actions
    #
    # Passing entry guards against acting on an image the front end no
    # longer shows; without it the current image is used.

    def move_current(self, destination, entry: Optional[PathEntry] = None) -> Operation:
        return self._execute(Action.MOVE, entry, destination)

    def delete_current(self, entry: Optional[PathEntry] = None) -> Operation:
        return self._execute(Action.DELETE, entry)

    def skip_current(self, entry: Optional[PathEntry] = None) -> Operation:
        return self._execute(Action.SKIP, entry)

    def _execute(self, action: Action, entry: Optional[PathEntry], destination=None) -> Operation:
        if self._pending is not None:
            raise StaleEntryError(f"call advance() after '{self._pending}' first")
        current = self.navigator.current()
        op = execute(
            action,
            current if entry is None else entry,
            current,
            destination=destination,
            destinations=self.destinations,
            holding=self.holding,
        )
        self.log.push(op, self.navigator.position)
        self._pending = op
        return op

    def advance(self):
        """Move the pointer past the current image.

        After a move or delete the entry is dropped from the working set;
        otherwise the pointer steps forward.
        """
        pending, self._pending = self._pending, None
        if pending is not None and pending.removes_entry:
            self.navigator.remove_current()
        else:
            self.navigator.advance()

    def undo(self) -> Operation:
        self._commit_pending()
        return self.log.undo(self.navigator)

    def redo(self) -> Operation:
        self._commit_pending()
        return self.log.redo(self.navigator)

    def _commit_pending(self):
        if self._pending is not None:
            self.advance()

    # Maintenance

    def purge_holding_area(self, force: bool = False) -> int:
        """Erase held deletes that no undo or redo can reach any more.

        With force=True everything is erased; undoing one of those deletes
        afterwards raises ReversalConflictError.
        """
        keep = set() if force else self.log.referenced_holding_paths()
        return self.holding.purge(keep)

    def close(self):
        self._commit_pending()
        self.log.clear()
        self.holding.close()


def _as_list(roots: Roots) -> list:
    if isinstance(roots, (str, os.PathLike)):
        return [roots]
    return list(roots)
