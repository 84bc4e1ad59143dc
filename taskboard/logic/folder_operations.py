"""Folder mutations over the whole task document.

Each function runs one load-locate-mutate-save cycle through
``DocumentStore.transaction`` so a raised error leaves the persisted
document untouched. Functions return the affected folder (a detached
snapshot of the saved state) or ``None`` for deletions.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from taskboard.errors import ValidationError
from taskboard.logic.document_store import DocumentStore
from taskboard.logic.lookup import find_folder, folder_id_exists
from taskboard.models.folder import Folder

logger = logging.getLogger(__name__)


def create_folder(
    store: DocumentStore,
    folder_id: str,
    name: str,
    colour: str,
    width: int,
    height: int,
    x: int,
    y: int,
    zindex: int,
) -> Folder:
    """Append a new, empty and visible folder to the document.

    Raises ``ValidationError`` when ``folder_id`` is already in use.
    """
    with store.transaction() as doc:
        if folder_id_exists(doc, folder_id):
            raise ValidationError(f"Folder id {folder_id!r} already exists")
        folder = Folder(
            id=folder_id,
            name=name,
            colour=colour,
            visible=True,
            tasks=[],
            width=width,
            height=height,
            x=x,
            y=y,
            zindex=zindex,
        )
        doc.append(folder)
    logger.info("folder_created folder_id=%s", folder_id)
    return folder.model_copy(deep=True)


def edit_folder(store: DocumentStore, folder_id: str, new_name: str, new_colour: str) -> Folder:
    with store.transaction() as doc:
        folder = find_folder(doc, folder_id)
        folder.name = new_name
        folder.colour = new_colour
    logger.info("folder_edited folder_id=%s", folder_id)
    return folder.model_copy(deep=True)


def resize_folder(store: DocumentStore, folder_id: str, new_width: int, new_height: int) -> Folder:
    with store.transaction() as doc:
        folder = find_folder(doc, folder_id)
        folder.width = new_width
        folder.height = new_height
    logger.info("folder_resized folder_id=%s width=%s height=%s", folder_id, new_width, new_height)
    return folder.model_copy(deep=True)


def move_folder(store: DocumentStore, folder_id: str, x: int, y: int) -> Folder:
    with store.transaction() as doc:
        folder = find_folder(doc, folder_id)
        folder.x = x
        folder.y = y
    logger.info("folder_moved folder_id=%s x=%s y=%s", folder_id, x, y)
    return folder.model_copy(deep=True)


def toggle_folder_visibility(store: DocumentStore, folder_id: str) -> Folder:
    with store.transaction() as doc:
        folder = find_folder(doc, folder_id)
        folder.visible = not folder.visible
    logger.info("folder_visibility_toggled folder_id=%s visible=%s", folder_id, folder.visible)
    return folder.model_copy(deep=True)


def change_folder_zindex(store: DocumentStore, folder_id: str, new_zindex: int) -> Folder:
    with store.transaction() as doc:
        folder = find_folder(doc, folder_id)
        folder.zindex = new_zindex
    logger.info("folder_zindex_changed folder_id=%s zindex=%s", folder_id, new_zindex)
    return folder.model_copy(deep=True)


def delete_folder(store: DocumentStore, folder_id: str) -> None:
    """Remove a folder and all of its tasks. Unknown ids are a no-op."""
    with store.transaction() as doc:
        before = len(doc)
        doc[:] = [folder for folder in doc if folder.id != folder_id]
        removed = before - len(doc)
    logger.info("folder_deleted folder_id=%s removed=%d", folder_id, removed)


def duplicate_folder(
    store: DocumentStore,
    folder_id: str,
    folder_clone_id: str,
    task_clone_ids: Sequence[str],
) -> Folder:
    """Deep-copy a folder with its tasks and append the copy to the document.

    ``task_clone_ids`` maps 1:1, in order, onto the source folder's tasks.
    Raises ``NotFoundError`` for an unknown source and ``ValidationError``
    when the id list is not a list of strings, its length differs, ids
    repeat, or the new folder id is taken.
    """
    clone_ids = _clone_id_list(task_clone_ids)
    with store.transaction() as doc:
        source = find_folder(doc, folder_id)
        if len(clone_ids) != len(source.tasks):
            raise ValidationError(
                f"Expected {len(source.tasks)} task IDs, got {len(clone_ids)}"
            )
        if len(set(clone_ids)) != len(clone_ids):
            raise ValidationError("Task clone ids must be distinct")
        if folder_id_exists(doc, folder_clone_id):
            raise ValidationError(f"Folder id {folder_clone_id!r} already exists")
        clone = source.model_copy(deep=True)
        clone.id = folder_clone_id
        for task, new_id in zip(clone.tasks, clone_ids):
            task.id = new_id
        doc.append(clone)
    logger.info(
        "folder_duplicated folder_id=%s clone_id=%s tasks=%d",
        folder_id,
        folder_clone_id,
        len(clone_ids),
    )
    return clone.model_copy(deep=True)


def _clone_id_list(task_clone_ids: Sequence[str]) -> List[str]:
    # A bare string is a Sequence[str] too; it must not be split into characters
    if not isinstance(task_clone_ids, (list, tuple)):
        raise ValidationError(
            f"Task clone ids must be a list of strings, got {type(task_clone_ids).__name__}"
        )
    if not all(isinstance(clone_id, str) for clone_id in task_clone_ids):
        raise ValidationError("Task clone ids must all be strings")
    return list(task_clone_ids)


__all__ = [
    "create_folder",
    "edit_folder",
    "resize_folder",
    "move_folder",
    "toggle_folder_visibility",
    "change_folder_zindex",
    "delete_folder",
    "duplicate_folder",
]
