"""Threaded directory scanning for image files and destination folders.

Each root (and, in recursive mode, each sub-directory subtree) is listed on
its own worker. Workers return plain lists; the results are merged into one
PathSet on the calling thread in submission order, so the output order does
not depend on which worker finishes first.
"""

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set

from constants import SCAN_RECURSIVE, SKIP_HIDDEN, SUPPORTED_EXTENSIONS, THREAD_POOL_WORKERS
from path_set import EntryKind, PathEntry, PathSet, canonical_path

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    folders: List[PathEntry] = field(default_factory=list)
    files: List[PathEntry] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    cancelled: bool = False


@dataclass
class _Listing:
    folders: List[PathEntry] = field(default_factory=list)
    files: List[PathEntry] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def is_image(name: str) -> bool:
    return os.path.splitext(name)[1].lower() in SUPPORTED_EXTENSIONS


class FolderScanner:
    def __init__(
        self,
        workers: int = THREAD_POOL_WORKERS,
        recursive: bool = SCAN_RECURSIVE,
        exclude: Iterable[str] = (),
        skip_hidden: bool = SKIP_HIDDEN,
    ):
        self.workers = workers
        self.recursive = recursive
        self.skip_hidden = skip_hidden
        self.exclude: Set[str] = {canonical_path(p, EntryKind.FOLDER) for p in exclude}

    def scan(
        self,
        roots: Iterable[str],
        cancel_event: Optional[threading.Event] = None,
        known: Optional[PathSet] = None,
    ) -> ScanResult:
        """Scan roots and return newly discovered folders and image files.

        Entries already present in `known` are left out of the result and
        `known` is updated with everything new. Unreadable directories end
        up in `errors` instead of aborting the scan.
        """
        cancel_event = cancel_event or threading.Event()
        known = known if known is not None else PathSet()
        result = ScanResult()

        root_dirs = []
        for root in roots:
            root_dir = canonical_path(root, EntryKind.FOLDER)
            if not os.path.isdir(root_dir):
                msg = f"{root}: not a directory"
                logger.warning("Skipping root %s", msg)
                result.errors.append(msg)
                continue
            if root_dir not in root_dirs:
                root_dirs.append(root_dir)

        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            futures = [pool.submit(self._list_root, d, pool, cancel_event) for d in root_dirs]
            listings: List[_Listing] = []
            for future in futures:
                root_listing, subtree_futures = future.result()
                listings.append(root_listing)
                listings.extend(f.result() for f in subtree_futures)

        for listing in listings:
            result.folders.extend(known.extend(listing.folders))
            result.files.extend(known.extend(listing.files))
            result.errors.extend(listing.errors)

        result.cancelled = cancel_event.is_set()
        logger.info(
            "Scanned %d root(s): %d folder(s), %d file(s), %d error(s)%s",
            len(root_dirs), len(result.folders), len(result.files), len(result.errors),
            " (cancelled)" if result.cancelled else "",
        )
        return result

    def _list_root(self, directory: str, pool: ThreadPoolExecutor, cancel_event: threading.Event):
        listing = self._list_directory(directory, cancel_event)
        subtree_futures = []
        if self.recursive:
            subtree_futures = [
                pool.submit(self._walk_subtree, folder.path, cancel_event)
                for folder in listing.folders
            ]
        return listing, subtree_futures

    def _list_directory(self, directory: str, cancel_event: threading.Event) -> _Listing:
        """List the immediate children of one directory."""
        listing = _Listing()
        if cancel_event.is_set():
            return listing
        try:
            with os.scandir(directory) as it:
                children = sorted(it, key=lambda e: e.name.lower())
        except OSError as e:
            logger.warning("Cannot read %s: %s", directory, e)
            listing.errors.append(f"{directory}: {e}")
            return listing

        for child in children:
            if self.skip_hidden and child.name.startswith("."):
                continue
            try:
                if child.is_dir():
                    folder = PathEntry.folder(child.path)
                    if folder.path not in self.exclude:
                        listing.folders.append(folder)
                elif child.is_file() and is_image(child.name):
                    listing.files.append(PathEntry.file(child.path))
            except OSError as e:
                logger.warning("Cannot stat %s: %s", child.path, e)
                listing.errors.append(f"{child.path}: {e}")
        return listing

    def _walk_subtree(self, top: str, cancel_event: threading.Event) -> _Listing:
        """Collect image files below a folder, at every depth."""
        listing = _Listing()
        pending = [top]
        visited: Set[str] = set()
        while pending and not cancel_event.is_set():
            directory = pending.pop(0)
            if directory in visited:
                continue
            visited.add(directory)
            level = self._list_directory(directory, cancel_event)
            listing.files.extend(level.files)
            listing.errors.extend(level.errors)
            pending.extend(folder.path for folder in level.folders)
        return listing


def scan_folders(roots: Iterable[str], **kwargs) -> List[PathEntry]:
    """Folders-only view of a scan."""
    return FolderScanner(**kwargs).scan(roots).folders


def scan_files(roots: Iterable[str], **kwargs) -> List[PathEntry]:
    """Files-only view of a scan."""
    return FolderScanner(**kwargs).scan(roots).files
