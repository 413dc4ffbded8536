"""Reversible operations: move, delete (a move into the holding area), skip."""

import logging
import os
import shutil
from dataclasses import dataclass

from errors import FilesystemIOError, ReversalConflictError
from path_set import PathEntry

logger = logging.getLogger(__name__)


def _relocate(src: str, dst: str):
    """Move src to dst, refusing to guess when either end has drifted."""
    if not os.path.lexists(src):
        raise ReversalConflictError(f"'{src}' no longer exists")
    if os.path.lexists(dst):
        raise ReversalConflictError(f"'{dst}' is already occupied")
    try:
        shutil.move(src, dst)
    except OSError as e:
        raise FilesystemIOError(f"moving '{src}' to '{dst}' failed: {e}") from e


@dataclass(frozen=True)
class Operation:
    entry: PathEntry

    # Whether applying the operation takes the entry out of the working set
    removes_entry = False

    def undo(self):
        """Reverse the filesystem effect."""

    def redo(self):
        """Apply the filesystem effect again."""


@dataclass(frozen=True)
class SkipOperation(Operation):
    def __str__(self) -> str:
        return f"skip {self.entry.name}"


@dataclass(frozen=True)
class MoveOperation(Operation):
    source: str
    destination: str

    removes_entry = True

    def undo(self):
        _relocate(self.destination, self.source)
        logger.info("Undid %s", self)

    def redo(self):
        _relocate(self.source, self.destination)
        logger.info("Redid %s", self)

    def __str__(self) -> str:
        return f"move {self.entry.name} -> {os.path.dirname(self.destination)}"


@dataclass(frozen=True)
class DeleteOperation(MoveOperation):
    @property
    def original_path(self) -> str:
        return self.source

    @property
    def holding_path(self) -> str:
        return self.destination

    def __str__(self) -> str:
        return f"delete {self.entry.name}"
