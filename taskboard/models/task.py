"""Pydantic model for a single task held inside a folder."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Task(BaseModel):
    # Strict so a stored "true" string or 0/1 integer fails closed on load
    model_config = ConfigDict(strict=True, validate_assignment=True)

    text: str
    colour: str
    completed: bool
    id: str


__all__ = ["Task"]
