from __future__ import annotations

from .database import Database
from .disk_store import DiskJsonDocumentStore
from .errors import (
    ArrayNotFoundError,
    DatabaseError,
    DatabaseFileNotFoundError,
    DivisionByZeroError,
    InvalidFormatError,
    InvalidOperatorError,
    InvalidValueError,
    KeyNotFoundError,
    MathError,
    NotANumberError,
    ObjectNotFoundError,
)
from .repositories import AsyncDatabase
from .settings import Settings, get_settings

__all__ = [
    "Database",
    "AsyncDatabase",
    "DiskJsonDocumentStore",
    "Settings",
    "get_settings",
    "DatabaseError",
    "DatabaseFileNotFoundError",
    "InvalidFormatError",
    "InvalidValueError",
    "KeyNotFoundError",
    "ObjectNotFoundError",
    "ArrayNotFoundError",
    "MathError",
    "NotANumberError",
    "InvalidOperatorError",
    "DivisionByZeroError",
]
