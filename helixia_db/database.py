from __future__ import annotations

import copy
import logging
import math as _math
from pathlib import Path
from typing import Any, Iterator

from pydantic import JsonValue

from .disk_store import DiskJsonDocumentStore
from .errors import (
    ArrayNotFoundError,
    DivisionByZeroError,
    InvalidOperatorError,
    InvalidValueError,
    KeyNotFoundError,
    NotANumberError,
    ObjectNotFoundError,
)
from .json_store import dumps_json
from .settings import Settings, get_settings
from .values import Document, coerce_value, is_mapping, is_number, is_sequence, json_equal

logger = logging.getLogger(__name__)

OPERATORS = ("+", "-", "*", "/")

# Distinguishes "no value passed" from an explicit None (stored as JSON null).
_MISSING: Any = object()


class Database:
    """
    A key-value store over a single JSON object document on disk.

    The document is loaded once on construction and kept in memory. Every
    mutating operation validates first, then applies the change and rewrites
    the whole file. Reads never touch the disk.
    """

    def __init__(self, file: str | Path | None = None, *, settings: Settings | None = None):
        self._settings = settings or get_settings()
        self._path = Path(file if file is not None else self._settings.default_file)
        self._store = DiskJsonDocumentStore(
            self._path,
            indent=self._settings.indent,
            sort_keys=self._settings.sort_keys,
        )
        self._data: Document = {}
        self.reload()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self._path)!r})"

    @property
    def path(self) -> Path:
        return self._path

    @property
    def backup_path(self) -> Path:
        """Default backup location: ``<file>.bak``."""
        return self._path.with_name(self._path.name + ".bak")

    # -------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------
    def reload(self) -> None:
        """Re-read the backing file into memory, creating an empty one if absent."""
        try:
            doc = self._store.load()
        except ValueError:
            logger.warning("failed to load %s: malformed document", self._path)
            raise
        if doc is None:
            logger.info("creating new database file %s", self._path)
            self._commit({})
        else:
            self._data = doc

    def _commit(self, doc: Document) -> None:
        # The cache only takes the new document once it is on disk.
        self._store.save(doc)
        self._data = doc

    # -------------------------------------------------------------------
    # Backups
    # -------------------------------------------------------------------
    def create_backup(self, path: str | Path | None = None) -> Path:
        """
        Copy the backing file verbatim to ``path`` (default ``<file>.bak``).

        Returns the backup path.
        """
        target = Path(path) if path is not None else self.backup_path
        self._store.copy_to(target)
        logger.info("backed up %s to %s", self._path, target)
        return target

    def restore_backup(self, path: str | Path | None = None) -> None:
        """
        Replace the backing file with the backup at ``path`` and reload.

        The backup is validated before the primary file is touched, so a
        malformed backup leaves the current database intact.
        """
        source = Path(path) if path is not None else self.backup_path
        doc = DiskJsonDocumentStore(source).load()
        self._store.copy_from(source)
        self._data = doc if doc is not None else {}
        logger.info("restored %s from %s", self._path, source)

    def destroy(self) -> None:
        """Delete the backing file. The in-memory document is kept."""
        self._store.delete()
        logger.info("destroyed database file %s", self._path)

    # -------------------------------------------------------------------
    # Top-level keys
    # -------------------------------------------------------------------
    def set(self, key: str, value: Any = _MISSING) -> None:
        if value is _MISSING:
            raise InvalidValueError()
        self._commit({**self._data, key: coerce_value(value)})

    def get(self, key: str, default: Any = None) -> JsonValue:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def fetch(self, key: str, default: Any = None) -> JsonValue:
        """Alias of :meth:`get`."""
        return self.get(key, default)

    def has(self, key: str) -> bool:
        return key in self._data

    def remove(self, key: str) -> None:
        doc = dict(self._data)
        doc.pop(key, None)
        self._commit(doc)

    def all(self) -> Document:
        return copy.deepcopy(self._data)

    def clear(self) -> None:
        self._commit({})

    # -------------------------------------------------------------------
    # Arrays and objects
    # -------------------------------------------------------------------
    def _require_array(self, key: str) -> list[JsonValue]:
        value = self._data.get(key)
        if not is_sequence(value):
            raise ArrayNotFoundError()
        return value  # type: ignore[return-value]

    def _require_object(self, key: str) -> dict[str, JsonValue]:
        value = self._data.get(key)
        if not is_mapping(value):
            raise ObjectNotFoundError()
        return value  # type: ignore[return-value]

    def delete(self, key: str, value: Any) -> None:
        """Remove every element equal to ``value`` from the array at ``key``."""
        items = self._require_array(key)
        self._commit({**self._data, key: [item for item in items if not json_equal(item, value)]})

    def delete_key(self, key: str, sub_key: str) -> None:
        """Remove ``sub_key`` from the object at ``key``."""
        obj = dict(self._require_object(key))
        obj.pop(sub_key, None)
        self._commit({**self._data, key: obj})

    def delete_each(self, value: Any) -> None:
        """
        Strip ``value`` from every array and drop every key whose value equals it.
        """
        doc: Document = {}
        for key, current in self._data.items():
            if is_sequence(current):
                doc[key] = [item for item in current if not json_equal(item, value)]
            elif not json_equal(current, value):
                doc[key] = current
        self._commit(doc)

    def fetch_object(self, key: str, sub_key: str, default: Any = None) -> JsonValue:
        obj = self._require_object(key)
        if sub_key not in obj:
            return default
        return copy.deepcopy(obj[sub_key])

    def fetch_array(self, key: str, index: int, default: Any = None) -> JsonValue:
        items = self._require_array(key)
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidValueError(f"Array index must be an integer, got {index!r}.")
        if index < 0 or index >= len(items):
            return default
        return copy.deepcopy(items[index])

    # -------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------
    def math(self, key: str, operator: str, operand: int | float) -> int | float:
        """
        Apply ``operator`` (one of ``+ - * /``) with ``operand`` to the number at ``key``.

        Returns the stored result.
        """
        current = self._data.get(key)
        if not is_number(current):
            raise NotANumberError()
        if not is_number(operand):
            raise InvalidValueError(f"The operand must be a number, got {operand!r}.")
        if operator not in OPERATORS:
            raise InvalidOperatorError(f"Invalid operator: {operator!r}. Expected one of {', '.join(OPERATORS)}.")

        if operator == "/" and operand == 0:
            raise DivisionByZeroError()

        try:
            if operator == "+":
                result = current + operand
            elif operator == "-":
                result = current - operand
            elif operator == "*":
                result = current * operand
            elif isinstance(current, int) and isinstance(operand, int) and current % operand == 0:
                result = current // operand
            else:
                result = current / operand
        except OverflowError as e:
            raise NotANumberError(f"The result of {current!r} {operator} {operand!r} is out of range.") from e

        if isinstance(result, float) and not _math.isfinite(result):
            raise NotANumberError(f"The result of {current!r} {operator} {operand!r} is not a finite number.")
        try:
            dumps_json(result)
        except ValueError as e:
            # ints past the interpreter's str-conversion digit limit
            raise NotANumberError("The result is too large to store.") from e

        self._commit({**self._data, key: result})
        return result

    # -------------------------------------------------------------------
    # Mapping protocol
    # -------------------------------------------------------------------
    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._data))

    def __getitem__(self, key: str) -> JsonValue:
        if key not in self._data:
            raise KeyNotFoundError(f"The requested key does not exist in the database: {key!r}")
        return copy.deepcopy(self._data[key])
