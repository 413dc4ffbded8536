"""Exception hierarchy for the sorting engine.

Each public call raises from one family: loading and folder registration
raise InvalidPathError, actions raise ExecError, undo raises UndoError and
redo raises RedoError. Failures that can happen in more than one place
(filesystem errors, reversal conflicts) belong to every family they can
surface in.
"""


class SorterError(Exception):
    """Base class for everything the engine raises."""


class InvalidPathError(SorterError):
    """A path could not be resolved to an existing directory."""


class ExecError(SorterError):
    """An action on the current image could not be applied."""


class UndoError(SorterError):
    pass


class RedoError(SorterError):
    pass


class NoDestinationError(ExecError):
    """Move requested without a registered destination folder."""


class DestinationCollisionError(ExecError):
    """A file with the same name already exists in the destination."""


class StaleEntryError(ExecError):
    """The entry acted on is not the navigator's current entry."""


class NothingToUndoError(UndoError):
    pass


class NothingToRedoError(RedoError):
    pass


class ReversalConflictError(UndoError, RedoError):
    """The filesystem no longer matches what the operation recorded."""


class FilesystemIOError(ExecError, UndoError, RedoError):
    """An underlying move, copy or delete failed."""
