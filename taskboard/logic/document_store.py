"""Whole-document JSON store for task folders.

The backing file holds the entire document: a JSON array of folders. Every
read parses and validates the full file and every write replaces it. Writes
go to a sibling temporary file which is fsynced and then moved over the
target with ``os.replace`` so readers never observe a half-written document.

The store keeps no cached document between calls; the file is the single
source of truth. ``transaction()`` serialises load-mutate-save sequences of
callers sharing one ``DocumentStore`` instance.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

from pydantic import ValidationError as PydanticValidationError

from taskboard.errors import DocumentParseError, StorageIOError, ValidationError
from taskboard.models.folder import DOCUMENT_ADAPTER, Document

logger = logging.getLogger(__name__)

EMPTY_DOCUMENT: Document = []


class DocumentStore:
    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return f"DocumentStore(path={str(self.path)!r})"

    def load(self) -> Document:
        """Read and validate the whole document.

        Raises ``StorageIOError`` when the file cannot be read and
        ``DocumentParseError`` when its content is not a valid document.
        """
        try:
            raw = self.path.read_bytes()
        except OSError as e:
            logger.error("document_load_failed path=%s error=%s", self.path, e)
            raise StorageIOError(f"Could not read {self.path}: {e}") from e
        try:
            doc = DOCUMENT_ADAPTER.validate_json(raw)
        except PydanticValidationError as e:
            logger.error("document_parse_failed path=%s errors=%d", self.path, e.error_count())
            raise DocumentParseError(f"Invalid task document in {self.path}: {e}") from e
        logger.debug("document_loaded path=%s folders=%d", self.path, len(doc))
        return doc

    def save(self, doc: Document) -> None:
        """Serialise ``doc`` and atomically replace the backing file.

        The replacement keeps the permission bits of the existing file and the
        directory entry is fsynced after the rename. On failure the previous
        file content is left untouched, the temporary file is removed and
        ``StorageIOError`` is raised.
        """
        payload = DOCUMENT_ADAPTER.dump_json(doc, indent=2)
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="wb",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            _copy_mode(self.path, tmp_name)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None:
                _discard(tmp_name)
            logger.error("document_save_failed path=%s error=%s", self.path, e)
            raise StorageIOError(f"Could not write {self.path}: {e}") from e
        _fsync_dir(self.path.parent)
        logger.debug("document_saved path=%s folders=%d bytes=%d", self.path, len(doc), len(payload))

    def initialize(self) -> None:
        """Ensure the data directory exists and the document file is seeded.

        An absent or zero-length file is replaced by an empty document. Any
        other existing file is left as is, so this is safe on every startup.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            needs_seed = not self.path.exists() or self.path.stat().st_size == 0
        except OSError as e:
            logger.error("document_initialize_failed path=%s error=%s", self.path, e)
            raise StorageIOError(f"Could not prepare {self.path}: {e}") from e
        if needs_seed:
            self.save(list(EMPTY_DOCUMENT))
            logger.info("document_seeded path=%s", self.path)
        else:
            logger.info("document_present path=%s", self.path)

    @contextmanager
    def transaction(self) -> Iterator[Document]:
        """Yield a freshly loaded document and save it when the block exits.

        If the block raises, nothing is written and the error propagates.
        Model validation failures inside the block surface as
        ``ValidationError``.
        """
        with self._lock:
            doc = self.load()
            try:
                yield doc
            except PydanticValidationError as e:
                raise ValidationError(f"Invalid value: {e}") from e
            self.save(doc)


def _copy_mode(target: Path, tmp_name: str) -> None:
    # The temp file is created 0600; keep the permissions of the file it replaces
    try:
        mode = stat.S_IMODE(os.stat(target).st_mode)
    except FileNotFoundError:
        return
    os.chmod(tmp_name, mode)


def _fsync_dir(directory: Path) -> None:
    # The rename already happened; a failure here only weakens durability
    if os.name == "nt":
        return
    try:
        fd = os.open(directory, os.O_RDONLY)
        try:
            os.fsync(fd)
        finally:
            os.close(fd)
    except OSError as e:
        logger.warning("directory_fsync_failed path=%s error=%s", directory, e)


def _discard(tmp_name: str) -> None:
    try:
        os.unlink(tmp_name)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("temp_cleanup_failed path=%s error=%s", tmp_name, e)


__all__ = ["DocumentStore", "EMPTY_DOCUMENT"]
