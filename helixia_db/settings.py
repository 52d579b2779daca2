from __future__ import annotations

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


@dataclass(frozen=True)
class Settings:
    # Storage
    default_file: str

    # Serialization of the backing file
    indent: int
    sort_keys: bool

    # Debug
    debug_log_requests: bool


def get_settings() -> Settings:
    default_file = os.getenv("HELIXIA_DB_FILE", "database.json").strip() or "database.json"

    indent = _env_int("HELIXIA_DB_INDENT", 2)
    sort_keys = _env_bool("HELIXIA_DB_SORT_KEYS", False)

    debug_log_requests = _env_bool("HELIXIA_DB_DEBUG_LOG_REQUESTS", False)

    return Settings(
        default_file=default_file,
        indent=indent,
        sort_keys=sort_keys,
        debug_log_requests=debug_log_requests,
    )
