"""Document data models."""

from __future__ import annotations

from taskboard.models.folder import DOCUMENT_ADAPTER, Document, Folder
from taskboard.models.task import Task

__all__ = ["Task", "Folder", "Document", "DOCUMENT_ADAPTER"]
