"""Pydantic models for folders and the whole task document.

A document is an ordered list of folders; each folder owns an ordered list
of tasks. Order is display order (tasks) and creation order (folders) and is
preserved verbatim through parse and dump. Geometry fields are signed 32-bit
integers as stored by the desktop shell.
"""

from __future__ import annotations

from typing import Annotated, List

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from taskboard.models.task import Task

Int32 = Annotated[int, Field(ge=-(2**31), le=2**31 - 1)]


class Folder(BaseModel):
    model_config = ConfigDict(strict=True, validate_assignment=True)

    id: str
    name: str
    colour: str
    visible: bool
    tasks: List[Task]
    width: Int32
    height: Int32
    x: Int32
    y: Int32
    zindex: Int32


Document = List[Folder]

DOCUMENT_ADAPTER: TypeAdapter[List[Folder]] = TypeAdapter(List[Folder])


__all__ = ["Folder", "Document", "DOCUMENT_ADAPTER", "Int32"]
