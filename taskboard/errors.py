"""Error taxonomy for the task document store.

Every failure surfaced by the store or the mutation operations derives from
``TaskboardError`` and carries a stable ``code``. Codes are mapped to
problem titles in ``taskboard.error_mapping``.
"""

from __future__ import annotations


class TaskboardError(Exception):
    code = "TASKBOARD_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class StorageIOError(TaskboardError):
    """The backing file could not be read or written."""

    code = "STORE_IO_ERROR"


class DocumentParseError(TaskboardError):
    """The backing file does not hold a structurally valid document."""

    code = "STORE_PARSE_ERROR"


class NotFoundError(TaskboardError):
    """A referenced folder or task id does not exist."""

    code = "NOT_FOUND"


class ValidationError(TaskboardError):
    """Caller-supplied arguments are inconsistent with the document."""

    code = "VALIDATION_ERROR"


__all__ = [
    "TaskboardError",
    "StorageIOError",
    "DocumentParseError",
    "NotFoundError",
    "ValidationError",
]
