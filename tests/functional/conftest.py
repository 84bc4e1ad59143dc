"""Functional test bootstrap for the task document store.

Every test gets its own document file under pytest's ``tmp_path`` so no test
touches the real application-data directory. ``seed`` writes raw JSON to
the store location to set up documents without going through operations.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest

from taskboard.logic.document_store import DocumentStore


def make_task(task_id: str, text: str = "", colour: str = "#ffffff", completed: bool = False) -> Dict[str, Any]:
    return {"text": text or f"task {task_id}", "colour": colour, "completed": completed, "id": task_id}


def make_folder(folder_id: str, tasks: List[Dict[str, Any]] | None = None, **overrides: Any) -> Dict[str, Any]:
    folder = {
        "id": folder_id,
        "name": f"folder {folder_id}",
        "colour": "#000000",
        "visible": True,
        "tasks": list(tasks or []),
        "width": 300,
        "height": 200,
        "x": 10,
        "y": 20,
        "zindex": 1,
    }
    folder.update(overrides)
    return folder


@pytest.fixture
def tasks_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "Tasks.json"


@pytest.fixture
def store(tasks_path: Path) -> DocumentStore:
    s = DocumentStore(tasks_path)
    s.initialize()
    return s


@pytest.fixture
def seed(store: DocumentStore) -> Callable[[List[Dict[str, Any]]], DocumentStore]:
    def _seed(folders: List[Dict[str, Any]]) -> DocumentStore:
        store.path.write_text(json.dumps(folders, indent=2), encoding="utf-8")
        return store

    return _seed


@pytest.fixture
def sample_store(seed) -> DocumentStore:
    """Two folders; f1 holds three tasks, f2 holds one."""
    return seed(
        [
            make_folder("f1", [make_task("t1"), make_task("t2"), make_task("t3")]),
            make_folder("f2", [make_task("u1")], zindex=2),
        ]
    )
