from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, TypeVar

from pydantic import JsonValue

from .database import Database
from .settings import Settings
from .values import Document

T = TypeVar("T")


class AsyncDatabase:
    """
    Async wrapper around a disk-backed Database.

    Uses asyncio.to_thread to avoid blocking the event loop on file I/O, and
    runs one call at a time so a read-modify-write cycle is never interleaved.
    """

    def __init__(self, db: Database) -> None:
        self._db = db
        self._lock = asyncio.Lock()

    @classmethod
    async def open(cls, file: str | Path | None = None, *, settings: Settings | None = None) -> "AsyncDatabase":
        db = await asyncio.to_thread(Database, file, settings=settings)
        return cls(db)

    @property
    def db(self) -> Database:
        return self._db

    async def _run(self, fn: Callable[..., T], *args: Any) -> T:
        async with self._lock:
            return await asyncio.to_thread(fn, *args)

    async def set(self, key: str, value: Any) -> None:
        await self._run(self._db.set, key, value)

    async def get(self, key: str, default: Any = None) -> JsonValue:
        return await self._run(self._db.get, key, default)

    async def item(self, key: str) -> JsonValue:
        """Like ``db[key]``: raises KeyNotFoundError for a missing key."""
        return await self._run(self._db.__getitem__, key)

    async def has(self, key: str) -> bool:
        return await self._run(self._db.has, key)

    async def remove(self, key: str) -> None:
        await self._run(self._db.remove, key)

    async def delete(self, key: str, value: Any) -> None:
        await self._run(self._db.delete, key, value)

    async def delete_key(self, key: str, sub_key: str) -> None:
        await self._run(self._db.delete_key, key, sub_key)

    async def delete_each(self, value: Any) -> None:
        await self._run(self._db.delete_each, value)

    async def all(self) -> Document:
        return await self._run(self._db.all)

    async def clear(self) -> None:
        await self._run(self._db.clear)

    async def destroy(self) -> None:
        await self._run(self._db.destroy)

    async def fetch_object(self, key: str, sub_key: str, default: Any = None) -> JsonValue:
        return await self._run(self._db.fetch_object, key, sub_key, default)

    async def fetch_array(self, key: str, index: int, default: Any = None) -> JsonValue:
        return await self._run(self._db.fetch_array, key, index, default)

    async def math(self, key: str, operator: str, operand: int | float) -> int | float:
        return await self._run(self._db.math, key, operator, operand)

    async def create_backup(self, path: str | Path | None = None) -> Path:
        return await self._run(self._db.create_backup, path)

    async def restore_backup(self, path: str | Path | None = None) -> None:
        await self._run(self._db.restore_backup, path)

    async def reload(self) -> None:
        await self._run(self._db.reload)
