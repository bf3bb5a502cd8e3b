"""FastAPI application factory.

One :class:`EntityStore` is opened per application and shared by every
request through ``app.state``; it is disposed when the app shuts down.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dthread import __version__
from dthread.api.routes import router
from dthread.config.settings import DThreadSettings
from dthread.infrastructure.store import EntityStore

logger = logging.getLogger(__name__)


def create_app(settings: DThreadSettings | None = None) -> FastAPI:
    """Build the API app for *settings* (discovered from the CWD if omitted)."""
    settings = settings or DThreadSettings.from_cli()
    store = EntityStore(settings)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        logger.info("API serving project at %s", settings.project_root)
        try:
            yield
        finally:
            store.close()

    app = FastAPI(
        title="dthread",
        version=__version__,
        description="Digital thread navigator: domains, items, relationships, layout",
        lifespan=lifespan,
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            {"loc": [str(part) for part in err["loc"]], "msg": err["msg"]} for err in exc.errors()
        ]
        return JSONResponse(
            {
                "error": "Invalid request body.",
                "code": "VALIDATION_ERROR",
                "detail": {"errors": errors},
            },
            status_code=400,
        )

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            {"error": "Internal server error", "code": "INTERNAL_ERROR", "detail": {}},
            status_code=500,
        )

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "healthy", "service": "dthread"}

    app.include_router(router, prefix="/api")
    return app
