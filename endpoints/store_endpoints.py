# store_endpoints.py
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, JsonValue

from helixia_db.errors import (
    ArrayNotFoundError,
    DatabaseError,
    DatabaseFileNotFoundError,
    DivisionByZeroError,
    InvalidFormatError,
    InvalidOperatorError,
    InvalidValueError,
    KeyNotFoundError,
    NotANumberError,
    ObjectNotFoundError,
)
from helixia_db.repositories import AsyncDatabase

router = APIRouter(prefix="/db", tags=["store"])
logger = logging.getLogger(__name__)

# Checked in order; first match wins.
ERROR_STATUS: list[tuple[type[DatabaseError], int]] = [
    (DatabaseFileNotFoundError, 404),
    (KeyNotFoundError, 404),
    (InvalidValueError, 422),
    (InvalidOperatorError, 422),
    (ObjectNotFoundError, 409),
    (ArrayNotFoundError, 409),
    (NotANumberError, 409),
    (DivisionByZeroError, 409),
    (InvalidFormatError, 500),
]


# -------------------------------------------------------------------
# Request bodies
# -------------------------------------------------------------------
class ValueBody(BaseModel):
    # Required: a missing field is rejected, an explicit null is stored.
    value: JsonValue


class MathBody(BaseModel):
    operator: str
    operand: int | float


# -------------------------------------------------------------------
# Helpers
# -------------------------------------------------------------------
def get_store(request: Request) -> AsyncDatabase:
    return request.app.state.store


def status_for(exc: DatabaseError) -> int:
    for cls, status in ERROR_STATUS:
        if isinstance(exc, cls):
            return status
    return 400


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    status = status_for(exc)
    if status >= 500:
        logger.error("%s %s failed: %r", request.method, request.url.path, exc)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse({"error": exc.error_code, "detail": str(exc)}, status_code=status)


# -------------------------------------------------------------------
# Whole-document routes
# -------------------------------------------------------------------
@router.get("")
async def read_all(store: AsyncDatabase = Depends(get_store)) -> dict[str, Any]:
    return {"data": await store.all()}


@router.delete("")
async def clear_all(store: AsyncDatabase = Depends(get_store)) -> dict[str, Any]:
    await store.clear()
    return {"ok": True}


@router.post("/backup")
async def create_backup(store: AsyncDatabase = Depends(get_store)) -> dict[str, Any]:
    path = await store.create_backup()
    return {"ok": True, "path": str(path)}


@router.post("/restore")
async def restore_backup(store: AsyncDatabase = Depends(get_store)) -> dict[str, Any]:
    await store.restore_backup()
    return {"ok": True}


@router.post("/delete-each")
async def delete_each(body: ValueBody, store: AsyncDatabase = Depends(get_store)) -> dict[str, Any]:
    await store.delete_each(body.value)
    return {"ok": True}


# -------------------------------------------------------------------
# Per-key routes
# -------------------------------------------------------------------
@router.get("/{key}")
async def read_key(key: str, store: AsyncDatabase = Depends(get_store)) -> dict[str, Any]:
    return {"key": key, "value": await store.item(key)}


@router.put("/{key}")
async def write_key(key: str, body: ValueBody, store: AsyncDatabase = Depends(get_store)) -> dict[str, Any]:
    await store.set(key, body.value)
    return {"ok": True}


@router.delete("/{key}")
async def remove_key(key: str, store: AsyncDatabase = Depends(get_store)) -> dict[str, Any]:
    await store.remove(key)
    return {"ok": True}


@router.post("/{key}/remove-value")
async def remove_value(key: str, body: ValueBody, store: AsyncDatabase = Depends(get_store)) -> dict[str, Any]:
    await store.delete(key, body.value)
    return {"ok": True}


@router.get("/{key}/fields/{sub_key}")
async def read_field(key: str, sub_key: str, store: AsyncDatabase = Depends(get_store)) -> dict[str, Any]:
    return {"value": await store.fetch_object(key, sub_key)}


@router.delete("/{key}/fields/{sub_key}")
async def remove_field(key: str, sub_key: str, store: AsyncDatabase = Depends(get_store)) -> dict[str, Any]:
    await store.delete_key(key, sub_key)
    return {"ok": True}


@router.get("/{key}/items/{index}")
async def read_item(key: str, index: int, store: AsyncDatabase = Depends(get_store)) -> dict[str, Any]:
    return {"value": await store.fetch_array(key, index)}


@router.post("/{key}/math")
async def apply_math(key: str, body: MathBody, store: AsyncDatabase = Depends(get_store)) -> dict[str, Any]:
    result = await store.math(key, body.operator, body.operand)
    return {"key": key, "value": result}
