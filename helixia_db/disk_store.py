from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Any

from .errors import DatabaseFileNotFoundError
from .interfaces import KeyValueDocumentStore
from .json_store import atomic_write_json, read_json
from .values import Document, validate_document

logger = logging.getLogger(__name__)


class DiskJsonDocumentStore(KeyValueDocumentStore):
    """
    Stores a single JSON document on disk at a fixed path.

    - Returns None from load() when the file is missing.
    - Raises InvalidFormatError when the file is not a JSON object.
    - Writes atomically.
    """

    def __init__(self, path: Path, *, indent: int | None = 2, sort_keys: bool = False):
        self._path = path
        self._indent = indent
        self._sort_keys = sort_keys

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def load(self) -> Document | None:
        if not self.exists():
            return None
        # A file holding JSON null is malformed, not missing.
        return validate_document(read_json(self._path))

    def save(self, doc: dict[str, Any]) -> None:
        atomic_write_json(self._path, doc, indent=self._indent, sort_keys=self._sort_keys)
        logger.debug("saved %d keys to %s", len(doc), self._path)

    def delete(self) -> None:
        try:
            self._path.unlink()
        except FileNotFoundError as e:
            raise DatabaseFileNotFoundError(f"The database file {self._path} could not be found.") from e

    def copy_to(self, target: Path) -> Path:
        """Copy the backing file verbatim to ``target``."""
        if not self.exists():
            raise DatabaseFileNotFoundError(f"The database file {self._path} could not be found.")
        if target.exists() and target.samefile(self._path):
            return target
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(self._path, target)
        return target

    def copy_from(self, source: Path) -> None:
        """Replace the backing file with a verbatim copy of ``source``."""
        if not source.is_file():
            raise DatabaseFileNotFoundError(f"Backup file not found: {source}")
        if self.exists() and source.samefile(self._path):
            # Restoring a file onto itself only needs the reload.
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, self._path)
