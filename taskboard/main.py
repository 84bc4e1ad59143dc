"""Store bootstrap for the desktop shell.

``create_store`` wires configuration and logging, builds the document store
for the configured location and makes sure the backing file exists. The
shell calls it once at startup and passes the store to command handlers.
"""

from __future__ import annotations

import logging
from typing import Optional

from taskboard.config import AppConfig, load_config
from taskboard.logging_setup import configure_logging
from taskboard.logic.document_store import DocumentStore

logger = logging.getLogger(__name__)


def build_store(config: Optional[AppConfig] = None) -> DocumentStore:
    cfg = config or load_config()
    return DocumentStore(cfg.storage.tasks_path)


def create_store(config: Optional[AppConfig] = None) -> DocumentStore:
    cfg = config or load_config()
    configure_logging(cfg.logging.level)
    store = build_store(cfg)
    store.initialize()
    logger.info("store_ready path=%s", store.path)
    return store
