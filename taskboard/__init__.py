"""Whole-document JSON store for task folders.

This package exposes the document store, the folder/task mutation catalog
and a command surface returning success or problem envelopes. Persistence
lives in `taskboard/logic/document_store.py`, mutations in
`taskboard/logic/`, and shell-facing handlers in `taskboard/commands.py`.
"""

from __future__ import annotations

from taskboard.logic.document_store import DocumentStore
from taskboard.main import build_store, create_store

__all__ = ["DocumentStore", "build_store", "create_store"]
