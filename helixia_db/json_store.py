from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .errors import InvalidFormatError


def read_json(path: Path) -> Any | None:
    """
    Read JSON from disk.

    Returns None for a missing file. Empty files and invalid JSON raise
    InvalidFormatError.
    """
    if not path.exists():
        return None
    try:
        raw = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InvalidFormatError(f"The database file {path} is not valid UTF-8: {e}") from e
    if not raw.strip():
        raise InvalidFormatError(f"The database file {path} is empty.")
    try:
        return json.loads(raw)
    # JSONDecodeError, oversized int literals (ValueError) and deep nesting
    except (ValueError, RecursionError) as e:
        raise InvalidFormatError(f"The database file {path} contains invalid JSON: {e}") from e


def dumps_json(payload: Any, *, indent: int | None = 2, sort_keys: bool = False) -> str:
    return json.dumps(payload, indent=indent, sort_keys=sort_keys, ensure_ascii=False, allow_nan=False) + "\n"


def atomic_write_json(path: Path, payload: Any, *, indent: int | None = 2, sort_keys: bool = False) -> None:
    """
    Atomically write JSON to disk by writing to a temp file then replacing.

    The payload is serialized before the temp file is opened, so an
    unserializable payload never leaves a partial file behind.
    """
    text = dumps_json(payload, indent=indent, sort_keys=sort_keys)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        f.write(text)
    tmp_path.replace(path)
