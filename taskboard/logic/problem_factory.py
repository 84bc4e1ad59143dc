"""Centralised construction of problem payloads for failed commands.

Provides helpers that return dicts with stable codes so command handlers
never embed string literals. ``message`` is the human-readable string the
desktop shell shows to the user.
"""

from __future__ import annotations

from typing import Dict
import logging

from taskboard.error_mapping import ERROR_MAP, INTERNAL, INVALID_ARGUMENTS, UNKNOWN_COMMAND
from taskboard.errors import TaskboardError


logger = logging.getLogger(__name__)


def _problem(entry: Dict[str, str], detail: str) -> Dict[str, object]:
    problem = {
        "ok": False,
        "title": entry["title"],
        "code": entry["code"],
        "detail": detail,
        "message": detail,
    }
    logger.info("error_handler.handle code=%s detail=%s", problem["code"], detail)
    return problem


def problem_from_error(exc: TaskboardError) -> Dict[str, object]:
    """Return a problem describing a store or operation failure."""
    entry = ERROR_MAP.get(exc.code, INTERNAL)
    return _problem(entry, exc.message)


def problem_unknown_command(name: str) -> Dict[str, object]:
    """Return a problem for a command name with no registered handler."""
    return _problem(UNKNOWN_COMMAND, f"Unknown command {name!r}")


def problem_invalid_arguments(name: str, detail: str) -> Dict[str, object]:
    """Return a problem for arguments that do not fit the handler signature."""
    return _problem(INVALID_ARGUMENTS, f"Invalid arguments for {name!r}: {detail}")


__all__ = [
    "problem_from_error",
    "problem_unknown_command",
    "problem_invalid_arguments",
]
