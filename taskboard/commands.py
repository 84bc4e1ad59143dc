"""Command handlers exposed to the desktop shell.

Each handler takes the store plus primitive arguments, runs exactly one
operation and returns an envelope: ``{"ok": True}`` (with ``data`` when the
operation yields something) on success, or a problem dict whose ``message``
is a human-readable error string. Handlers never raise for store or
operation failures.

``COMMANDS`` maps the command names used by the shell to handlers and
``invoke`` dispatches by name.
"""

from __future__ import annotations

import inspect
import logging
from functools import wraps
from typing import Any, Callable, Dict, Mapping, Sequence

from pydantic import BaseModel

from taskboard.errors import TaskboardError
from taskboard.logic import folder_operations, task_operations
from taskboard.logic.document_store import DocumentStore
from taskboard.logic.problem_factory import (
    problem_from_error,
    problem_invalid_arguments,
    problem_unknown_command,
)
from taskboard.models.folder import Document

logger = logging.getLogger(__name__)

Envelope = Dict[str, Any]


def _to_data(result: Any) -> Any:
    if isinstance(result, BaseModel):
        return result.model_dump()
    if isinstance(result, list):
        return [_to_data(item) for item in result]
    return result


def _command(fn: Callable[..., Any]) -> Callable[..., Envelope]:
    @wraps(fn)
    def handler(*args: Any, **kwargs: Any) -> Envelope:
        try:
            result = fn(*args, **kwargs)
        except TaskboardError as exc:
            return problem_from_error(exc)
        envelope: Envelope = {"ok": True}
        if result is not None:
            envelope["data"] = _to_data(result)
        return envelope

    return handler


@_command
def fetch_task_data(store: DocumentStore) -> Document:
    return store.load()


@_command
def create_folder(
    store: DocumentStore,
    folder_name: str,
    folder_id: str,
    folder_color: str,
    folder_width: int,
    folder_height: int,
    folder_pos_x: int,
    folder_pos_y: int,
    folder_zindex: int,
):
    return folder_operations.create_folder(
        store,
        folder_id=folder_id,
        name=folder_name,
        colour=folder_color,
        width=folder_width,
        height=folder_height,
        x=folder_pos_x,
        y=folder_pos_y,
        zindex=folder_zindex,
    )


@_command
def create_task(store: DocumentStore, t: Mapping[str, Any], folder_id: str):
    return task_operations.create_task(store, t, folder_id)


@_command
def complete_task(store: DocumentStore, task_id: str, folder_id: str):
    return task_operations.complete_task(store, task_id, folder_id)


@_command
def delete_task(store: DocumentStore, task_id: str, folder_id: str):
    return task_operations.delete_task(store, task_id, folder_id)


@_command
def duplicate_task(store: DocumentStore, task_id: str, clone_task_id: str, folder_id: str):
    return task_operations.duplicate_task(store, task_id, clone_task_id, folder_id)


@_command
def duplicate_folder(store: DocumentStore, folder_id: str, folder_clone_id: str, task_clone_ids: Sequence[str]):
    return folder_operations.duplicate_folder(store, folder_id, folder_clone_id, task_clone_ids)


@_command
def edit_task(store: DocumentStore, task_id: str, folder_id: str, new_text: str, new_colour: str):
    return task_operations.edit_task(store, task_id, folder_id, new_text, new_colour)


@_command
def edit_folder(store: DocumentStore, folder_id: str, new_name: str, new_colour: str):
    return folder_operations.edit_folder(store, folder_id, new_name, new_colour)


@_command
def resize_folder(store: DocumentStore, folder_id: str, new_width: int, new_height: int):
    return folder_operations.resize_folder(store, folder_id, new_width, new_height)


@_command
def move_folder(store: DocumentStore, folder_id: str, x: int, y: int):
    return folder_operations.move_folder(store, folder_id, x, y)


@_command
def move_task_order(store: DocumentStore, task_id: str, folder_id: str, new_index: int):
    return task_operations.move_task_order(store, task_id, folder_id, new_index)


@_command
def toggle_folder_visibility(store: DocumentStore, folder_id: str):
    return folder_operations.toggle_folder_visibility(store, folder_id)


@_command
def change_folder_zindex(store: DocumentStore, folder_id: str, new_zindex: int):
    return folder_operations.change_folder_zindex(store, folder_id, new_zindex)


@_command
def delete_folder(store: DocumentStore, folder_id: str):
    return folder_operations.delete_folder(store, folder_id)


@_command
def move_task_to_folder(store: DocumentStore, task_id: str, folder_id: str, new_folder_id: str):
    return task_operations.move_task_to_folder(store, task_id, folder_id, new_folder_id)


@_command
def move_task_to_folder_and_reorder(
    store: DocumentStore,
    task_id: str,
    folder_id: str,
    new_folder_id: str,
    new_index: int,
):
    return task_operations.move_task_to_folder_and_reorder(store, task_id, folder_id, new_folder_id, new_index)


# Names as registered by the desktop shell; the visibility and folder
# deletion commands keep their historical spellings.
COMMANDS: Dict[str, Callable[..., Envelope]] = {
    "fetch_task_data": fetch_task_data,
    "create_folder": create_folder,
    "create_task": create_task,
    "complete_task": complete_task,
    "delete_task": delete_task,
    "move_task_to_folder": move_task_to_folder,
    "move_task_to_folder_and_reorder": move_task_to_folder_and_reorder,
    "edit_task": edit_task,
    "toggle_visability_folder": toggle_folder_visibility,
    "delete_tasks_folder": delete_folder,
    "duplicate_task": duplicate_task,
    "duplicate_folder": duplicate_folder,
    "move_task_order": move_task_order,
    "edit_folder": edit_folder,
    "resize_folder": resize_folder,
    "move_folder": move_folder,
    "change_folder_zindex": change_folder_zindex,
}


def invoke(name: str, store: DocumentStore, **kwargs: Any) -> Envelope:
    """Dispatch a command by name with keyword arguments."""
    handler = COMMANDS.get(name)
    if handler is None:
        return problem_unknown_command(name)
    try:
        inspect.signature(handler).bind(store, **kwargs)
    except TypeError as exc:
        return problem_invalid_arguments(name, str(exc))
    logger.debug("command_invoke name=%s args=%s", name, sorted(kwargs))
    return handler(store, **kwargs)


__all__ = [
    "COMMANDS",
    "invoke",
    "fetch_task_data",
    "create_folder",
    "create_task",
    "complete_task",
    "delete_task",
    "duplicate_task",
    "duplicate_folder",
    "edit_task",
    "edit_folder",
    "resize_folder",
    "move_folder",
    "move_task_order",
    "toggle_folder_visibility",
    "change_folder_zindex",
    "delete_folder",
    "move_task_to_folder",
    "move_task_to_folder_and_reorder",
]
