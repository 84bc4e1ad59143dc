"""Configuration utilities for the task document store.

This module loads application configuration with the following rules:
- Primary source: `taskboard_config.json` in the working directory.
- Overrides: environment variables.
- Defaults: the platform application-data directory.
- Validation: Pydantic models enforce required fields and value constraints.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator


ROOT_TASKBOARD_CONFIG = Path("taskboard_config.json")
APP_DIR_NAME = "desktop-app"
DEFAULT_TASKS_FILE = "Tasks.json"
logger = logging.getLogger(__name__)


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


def default_data_dir() -> Path:
    """Return the platform application-data directory for the store.

    Windows uses %APPDATA%, macOS uses ~/Library/Application Support, and
    everything else follows the XDG base directory convention.
    """
    if sys.platform.startswith("win"):
        base = _env("APPDATA") or str(Path.home() / "AppData" / "Roaming")
    elif sys.platform == "darwin":
        base = str(Path.home() / "Library" / "Application Support")
    else:
        base = _env("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    return Path(base) / APP_DIR_NAME


class StorageConfig(BaseModel):
    data_dir: Path
    tasks_file: str = Field(default=DEFAULT_TASKS_FILE)

    @field_validator("tasks_file")
    @classmethod
    def tasks_file_must_be_bare_name(cls, v: str) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("storage.tasks_file must be a non-empty string")
        if Path(v).name != v:
            raise ValueError("storage.tasks_file must be a file name, not a path")
        return v

    @property
    def tasks_path(self) -> Path:
        return self.data_dir / self.tasks_file


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")

    @field_validator("level")
    @classmethod
    def level_must_be_known(cls, v: str) -> str:
        allowed = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
        normalized = str(v).strip().upper()
        if normalized not in allowed:
            raise ValueError(f"logging.level must be one of {sorted(allowed)}")
        return normalized


class AppConfig(BaseModel):
    storage: StorageConfig
    logging: LoggingConfig


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            data = json.loads(path.read_text(encoding="utf-8"))
            if isinstance(data, dict):
                return data
            logger.warning("Ignoring config %s: top level is not an object", path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) taskboard_config.json (or ``config_path`` when given)
    3) Platform defaults
    """

    base = _read_json_file(config_path or ROOT_TASKBOARD_CONFIG)

    def _base(path: str, default: Optional[str] = None) -> Optional[str]:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        return str(cur) if cur is not None else default

    data_dir = _env("TASKBOARD_DATA_DIR") or _base("storage.data_dir")
    tasks_file = _env("TASKBOARD_TASKS_FILE") or _base("storage.tasks_file", DEFAULT_TASKS_FILE)
    level = _env("TASKBOARD_LOG_LEVEL") or _base("logging.level", "INFO")

    try:
        cfg = AppConfig(
            storage=StorageConfig(
                data_dir=Path(data_dir).expanduser() if data_dir else default_data_dir(),
                tasks_file=tasks_file,
            ),
            logging=LoggingConfig(level=level),
        )
        return cfg
    except PydanticValidationError as e:
        logger.error("Invalid application configuration: %s", e)
        raise


__all__ = [
    "AppConfig",
    "StorageConfig",
    "LoggingConfig",
    "default_data_dir",
    "load_config",
]
