"""Apply a move, delete or skip to the current image.

The executor keeps no state and never touches the pointer; the caller
records the returned operation and then advances the navigator.
"""

import logging
import os
import shutil
from enum import Enum
from typing import Collection, Optional

from errors import (
    DestinationCollisionError,
    FilesystemIOError,
    NoDestinationError,
    StaleEntryError,
)
from holding_area import HoldingArea
from operations import DeleteOperation, MoveOperation, Operation, SkipOperation
from path_set import PathEntry

logger = logging.getLogger(__name__)


class Action(Enum):
    MOVE = "move"
    DELETE = "delete"
    SKIP = "skip"


def move_file(entry: PathEntry, destination: PathEntry) -> MoveOperation:
    dest = os.path.join(destination.path, entry.name)
    if os.path.lexists(dest):
        raise DestinationCollisionError(f"'{entry.name}' already exists in {destination.path}")
    try:
        shutil.move(entry.path, dest)
    except OSError as e:
        raise FilesystemIOError(f"moving '{entry.path}' failed: {e}") from e
    logger.info("Moved %s -> %s", entry.path, destination.path)
    return MoveOperation(entry, entry.path, dest)


def delete_file(entry: PathEntry, holding: HoldingArea) -> DeleteOperation:
    try:
        held = holding.stash(entry.path)
    except OSError as e:
        raise FilesystemIOError(f"deleting '{entry.path}' failed: {e}") from e
    logger.info("Deleted %s", entry.path)
    return DeleteOperation(entry, entry.path, held)


def execute(
    action: Action,
    entry: Optional[PathEntry],
    current: Optional[PathEntry],
    destination=None,
    destinations: Collection[PathEntry] = (),
    holding: Optional[HoldingArea] = None,
) -> Operation:
    """Apply action to entry, which must be the navigator's current entry.

    Raises an ExecError subclass: StaleEntryError, NoDestinationError,
    DestinationCollisionError or FilesystemIOError.
    """
    if entry is None or current is None or entry != current:
        raise StaleEntryError(f"'{entry}' is not the current image")

    if action is Action.SKIP:
        return SkipOperation(entry)

    if action is Action.DELETE:
        if holding is None:
            raise ValueError("delete needs a holding area")
        return delete_file(entry, holding)

    if destination is None:
        raise NoDestinationError("no destination folder chosen")
    if not isinstance(destination, PathEntry):
        destination = PathEntry.folder(str(destination))
    if destination not in destinations:
        raise NoDestinationError(f"'{destination.path}' is not a registered destination")
    return move_file(entry, destination)
