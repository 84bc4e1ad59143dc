"""Lookup helpers shared by folder and task operations."""

from __future__ import annotations

from taskboard.errors import NotFoundError, ValidationError
from taskboard.models.folder import Document, Folder
from taskboard.models.task import Task


def find_folder(doc: Document, folder_id: str) -> Folder:
    for folder in doc:
        if folder.id == folder_id:
            return folder
    raise NotFoundError(f"Couldn't find folder with id {folder_id!r}")


def find_task_index(folder: Folder, task_id: str) -> int:
    for index, task in enumerate(folder.tasks):
        if task.id == task_id:
            return index
    raise NotFoundError(f"Couldn't find task with id {task_id!r} in folder {folder.id!r}")


def find_task(folder: Folder, task_id: str) -> Task:
    return folder.tasks[find_task_index(folder, task_id)]


def folder_id_exists(doc: Document, folder_id: str) -> bool:
    return any(folder.id == folder_id for folder in doc)


def task_id_exists(folder: Folder, task_id: str) -> bool:
    return any(task.id == task_id for task in folder.tasks)


def clamp_index(index: int, length: int) -> int:
    """Clamp an insertion index into ``[0, length]``."""
    if isinstance(index, bool) or not isinstance(index, int):
        raise ValidationError(f"Index must be an integer, got {index!r}")
    return max(0, min(index, length))


__all__ = [
    "find_folder",
    "find_task",
    "find_task_index",
    "folder_id_exists",
    "task_id_exists",
    "clamp_index",
]
