"""Two-stack undo/redo log of operations applied through the navigator."""

import logging
from dataclasses import dataclass
from typing import List, Set

from errors import NothingToRedoError, NothingToUndoError, ReversalConflictError
from navigator import Navigator
from operations import DeleteOperation, Operation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogRecord:
    operation: Operation
    pointer_before: int


class OperationLog:
    """Linear undo history.

    Pushing a fresh operation drops the redo stack. Undo and redo leave both
    stacks and the navigator untouched when they fail.
    """

    def __init__(self):
        self._undoable: List[LogRecord] = []
        self._redoable: List[LogRecord] = []

    def push(self, operation: Operation, pointer_before: int):
        self._undoable.append(LogRecord(operation, pointer_before))
        self._redoable.clear()
        logger.debug("Logged %s at %d", operation, pointer_before)

    def undo(self, navigator: Navigator) -> Operation:
        """Reverse the most recent operation and put the pointer back.

        Raises NothingToUndoError, ReversalConflictError or FilesystemIOError.
        """
        if not self._undoable:
            raise NothingToUndoError("nothing to undo")
        record = self._undoable[-1]
        op = record.operation

        limit = len(navigator) if op.removes_entry else len(navigator) - 1
        if record.pointer_before > limit or (op.removes_entry and op.entry in navigator):
            raise ReversalConflictError(f"working set no longer matches '{op}'")

        op.undo()
        if op.removes_entry:
            # The file may have been picked up again at its new location
            navigator.discard(op.destination)
            navigator.insert(min(record.pointer_before, len(navigator)), op.entry)
        navigator.seek(record.pointer_before)

        self._redoable.append(self._undoable.pop())
        logger.info("Undo: %s", op)
        return op

    def redo(self, navigator: Navigator) -> Operation:
        """Re-apply the most recently undone operation.

        Raises NothingToRedoError, ReversalConflictError or FilesystemIOError.
        """
        if not self._redoable:
            raise NothingToRedoError("nothing to redo")
        record = self._redoable[-1]
        op = record.operation

        entries = navigator.entries
        if record.pointer_before >= len(entries) or entries[record.pointer_before] != op.entry:
            raise ReversalConflictError(f"working set no longer matches '{op}'")

        op.redo()
        navigator.seek(record.pointer_before)
        if op.removes_entry:
            navigator.remove_current()
        else:
            navigator.advance()

        self._undoable.append(self._redoable.pop())
        logger.info("Redo: %s", op)
        return op

    def referenced_holding_paths(self) -> Set[str]:
        """Held files that some undo or redo could still need."""
        return {
            r.operation.holding_path
            for r in self._undoable + self._redoable
            if isinstance(r.operation, DeleteOperation)
        }

    def clear(self):
        self._undoable.clear()
        self._redoable.clear()

    @property
    def can_undo(self) -> bool:
        return bool(self._undoable)

    @property
    def can_redo(self) -> bool:
        return bool(self._redoable)

    @property
    def undo_depth(self) -> int:
        return len(self._undoable)

    @property
    def redo_depth(self) -> int:
        return len(self._redoable)
