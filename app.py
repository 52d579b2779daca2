from __future__ import annotations

import contextlib
import logging

from fastapi import FastAPI, Request

from dotenv import load_dotenv

from helixia_db.errors import DatabaseError
from helixia_db.repositories import AsyncDatabase
from helixia_db.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    load_dotenv("local.env")
    settings = settings or get_settings()

    from endpoints.store_endpoints import database_error_handler, router as store_router

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.store = await AsyncDatabase.open(settings.default_file, settings=settings)
        logger.info("serving %s", app.state.store.db.path)
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings

    if settings.debug_log_requests:

        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            response = await call_next(request)
            logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
            return response

    @app.get("/healthz")
    async def healthz():
        return {"ok": True}

    app.add_exception_handler(DatabaseError, database_error_handler)
    app.include_router(store_router)

    return app


app = create_app()
