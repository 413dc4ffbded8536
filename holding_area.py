"""Process-managed holding area for soft-deleted files.

A deleted image is moved here instead of being erased, so the delete can be
undone. Files are only erased by an explicit purge.

Every session holds its files in its own sub-directory of the holding root,
named after the owning process id. A session only ever purges its own
directory, plus directories left behind by processes that no longer run.
"""

import logging
import os
import re
import shutil
import tempfile
from typing import AbstractSet, List

from constants import HOLDING_ROOT, SESSION_PREFIX

logger = logging.getLogger(__name__)

_SESSION_RE = re.compile(rf"^{re.escape(SESSION_PREFIX)}(\d+)_")


def _unique_dest(dest_path: str) -> str:
    """If dest_path exists, append _1, _2, etc. until unique."""
    if not os.path.lexists(dest_path):
        return dest_path
    base, ext = os.path.splitext(dest_path)
    counter = 1
    while True:
        candidate = f"{base}_{counter}{ext}"
        if not os.path.lexists(candidate):
            return candidate
        counter += 1


def _pid_alive(pid: int) -> bool:
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except OSError:
        # Exists but belongs to someone else, or the platform can't tell
        return True
    return True


class HoldingArea:
    def __init__(self, root: str = HOLDING_ROOT):
        self.root = os.path.realpath(os.path.expanduser(root))
        os.makedirs(self.root, exist_ok=True)
        self.directory = tempfile.mkdtemp(prefix=f"{SESSION_PREFIX}{os.getpid()}_", dir=self.root)

    def stash(self, path: str) -> str:
        """Move a file into the holding area and return where it went.

        Raises OSError if the move fails.
        """
        os.makedirs(self.directory, exist_ok=True)
        dest = _unique_dest(os.path.join(self.directory, os.path.basename(path)))
        shutil.move(path, dest)
        logger.info("Held %s as %s", path, os.path.basename(dest))
        return dest

    def held_files(self) -> List[str]:
        try:
            names = sorted(os.listdir(self.directory))
        except FileNotFoundError:
            return []
        return [os.path.join(self.directory, n) for n in names]

    def purge(self, keep: AbstractSet[str] = frozenset()) -> int:
        """Permanently erase held files, except those listed in keep.

        Returns the number of files erased. Raises OSError on the first file
        that cannot be removed.
        """
        keep = {os.path.abspath(p) for p in keep}
        purged = 0
        for path in self.held_files():
            if path in keep:
                continue
            if os.path.isdir(path) and not os.path.islink(path):
                shutil.rmtree(path)
            else:
                os.unlink(path)
            purged += 1
        if purged:
            logger.warning("Purged %d file(s) from %s", purged, self.directory)
        return purged

    def purge_orphans(self) -> int:
        """Remove session directories whose process has exited.

        Returns the number of directories removed.
        """
        removed = 0
        for name in sorted(os.listdir(self.root)):
            match = _SESSION_RE.match(name)
            path = os.path.join(self.root, name)
            if not match or path == self.directory or not os.path.isdir(path):
                continue
            if _pid_alive(int(match.group(1))):
                continue
            shutil.rmtree(path)
            removed += 1
        if removed:
            logger.warning("Removed %d orphaned session(s) from %s", removed, self.root)
        return removed

    def close(self):
        """Erase this session's directory and everything in it."""
        if os.path.isdir(self.directory):
            shutil.rmtree(self.directory)
