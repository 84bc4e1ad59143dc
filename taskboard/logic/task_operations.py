"""Task mutations over the whole task document.

Every operation locates its folder (and task) inside one
``DocumentStore.transaction`` and mutates only after all lookups succeed,
so a ``NotFoundError`` or ``ValidationError`` never leaves a partially
applied change behind in memory or on disk.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Union

from taskboard.errors import ValidationError
from taskboard.logic.document_store import DocumentStore
from taskboard.logic.lookup import (
    clamp_index,
    find_folder,
    find_task,
    find_task_index,
    task_id_exists,
)
from taskboard.models.folder import Document
from taskboard.models.task import Task

logger = logging.getLogger(__name__)

TaskPayload = Union[Task, Mapping[str, Any]]


def _coerce_task(payload: TaskPayload) -> Task:
    if isinstance(payload, Task):
        return payload.model_copy(deep=True)
    if not isinstance(payload, Mapping):
        raise ValidationError(f"Task payload must be an object, got {type(payload).__name__}")
    return Task.model_validate(dict(payload))


def create_task(store: DocumentStore, task: TaskPayload, folder_id: str) -> Task:
    """Append ``task`` to the end of the folder's task list.

    Raises ``ValidationError`` when the task id is already used in that folder.
    """
    with store.transaction() as doc:
        new_task = _coerce_task(task)
        folder = find_folder(doc, folder_id)
        if task_id_exists(folder, new_task.id):
            raise ValidationError(f"Task id {new_task.id!r} already exists in folder {folder_id!r}")
        folder.tasks.append(new_task)
    logger.info("task_created task_id=%s folder_id=%s", new_task.id, folder_id)
    return new_task.model_copy(deep=True)


def edit_task(store: DocumentStore, task_id: str, folder_id: str, new_text: str, new_colour: str) -> Task:
    with store.transaction() as doc:
        task = find_task(find_folder(doc, folder_id), task_id)
        task.text = new_text
        task.colour = new_colour
    logger.info("task_edited task_id=%s folder_id=%s", task_id, folder_id)
    return task.model_copy(deep=True)


def complete_task(store: DocumentStore, task_id: str, folder_id: str) -> Task:
    """Flip the completion flag of a task."""
    with store.transaction() as doc:
        task = find_task(find_folder(doc, folder_id), task_id)
        task.completed = not task.completed
    logger.info("task_completion_toggled task_id=%s folder_id=%s completed=%s", task_id, folder_id, task.completed)
    return task.model_copy(deep=True)


def delete_task(store: DocumentStore, task_id: str, folder_id: str) -> None:
    """Filter a task out of its folder. An unknown task id is a no-op."""
    with store.transaction() as doc:
        folder = find_folder(doc, folder_id)
        before = len(folder.tasks)
        folder.tasks = [task for task in folder.tasks if task.id != task_id]
        removed = before - len(folder.tasks)
    logger.info("task_deleted task_id=%s folder_id=%s removed=%d", task_id, folder_id, removed)


def duplicate_task(store: DocumentStore, task_id: str, clone_task_id: str, folder_id: str) -> Task:
    """Copy a task under ``clone_task_id`` and append it to the same folder."""
    with store.transaction() as doc:
        folder = find_folder(doc, folder_id)
        source = find_task(folder, task_id)
        if task_id_exists(folder, clone_task_id):
            raise ValidationError(f"Task id {clone_task_id!r} already exists in folder {folder_id!r}")
        clone = source.model_copy(deep=True)
        clone.id = clone_task_id
        folder.tasks.append(clone)
    logger.info("task_duplicated task_id=%s clone_id=%s folder_id=%s", task_id, clone_task_id, folder_id)
    return clone.model_copy(deep=True)


def move_task_order(store: DocumentStore, task_id: str, folder_id: str, new_index: int) -> int:
    """Reposition a task inside its folder and return its final index.

    ``new_index`` is clamped to the bounds of the list once the task has been
    taken out, so oversized or negative indices never fail.
    """
    with store.transaction() as doc:
        folder = find_folder(doc, folder_id)
        old_index = find_task_index(folder, task_id)
        task = folder.tasks.pop(old_index)
        final_index = clamp_index(new_index, len(folder.tasks))
        folder.tasks.insert(final_index, task)
    logger.info(
        "task_reordered task_id=%s folder_id=%s from=%d to=%d",
        task_id,
        folder_id,
        old_index,
        final_index,
    )
    return final_index


def move_task_to_folder(store: DocumentStore, task_id: str, folder_id: str, new_folder_id: str) -> Task:
    """Move a task to the end of another folder's task list.

    Source folder, destination folder and task are all resolved before either
    list changes.
    """
    with store.transaction() as doc:
        task = _transfer(doc, task_id, folder_id, new_folder_id)
    logger.info("task_moved task_id=%s from_folder=%s to_folder=%s", task_id, folder_id, new_folder_id)
    return task.model_copy(deep=True)


def move_task_to_folder_and_reorder(
    store: DocumentStore,
    task_id: str,
    folder_id: str,
    new_folder_id: str,
    new_index: int,
) -> int:
    """Move a task to another folder and place it at ``new_index`` in one save.

    Returns the final index inside the destination folder.
    """
    with store.transaction() as doc:
        _transfer(doc, task_id, folder_id, new_folder_id)
        destination = find_folder(doc, new_folder_id)
        task = destination.tasks.pop()
        final_index = clamp_index(new_index, len(destination.tasks))
        destination.tasks.insert(final_index, task)
    logger.info(
        "task_moved task_id=%s from_folder=%s to_folder=%s index=%d",
        task_id,
        folder_id,
        new_folder_id,
        final_index,
    )
    return final_index


def _transfer(doc: Document, task_id: str, folder_id: str, new_folder_id: str) -> Task:
    source = find_folder(doc, folder_id)
    destination = find_folder(doc, new_folder_id)
    index = find_task_index(source, task_id)
    if destination is not source and task_id_exists(destination, task_id):
        raise ValidationError(f"Task id {task_id!r} already exists in folder {new_folder_id!r}")
    task = source.tasks.pop(index)
    destination.tasks.append(task)
    return task


__all__ = [
    "create_task",
    "edit_task",
    "complete_task",
    "delete_task",
    "duplicate_task",
    "move_task_order",
    "move_task_to_folder",
    "move_task_to_folder_and_reorder",
]
