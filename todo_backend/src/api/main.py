from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from . import queries
from .errors import internal_error_response, register_exception_handlers
from .logging_utils import configure_logging, reset_request_id, set_request_id
from .routers import todos as todos_router
from .settings import Settings, get_settings
from .store import RecordStore, create_record_store, get_store
from .utils import success_envelope

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {"name": "todos", "description": "Create, read, update, delete and toggle Todo items."},
]


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, store: Optional[RecordStore] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use; loaded from the environment when omitted.
        store: Record store to use; built from settings.database_url when omitted.
            The store is opened on startup and closed on shutdown either way.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    record_store = store or create_record_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        record_store.open()
        app.state.store = record_store
        try:
            yield
        finally:
            record_store.close()

    app = FastAPI(
        title="Todo Backend",
        description="Backend API service for managing a to-do list stored in a SQL table.",
        version="1.0.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        token = set_request_id(request_id)
        started = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception as exc:
                # Build the 500 here so the request id still applies to the log line and the header
                response = internal_error_response(request, exc)
            response.headers["X-Request-ID"] = request_id
            logger.info(
                "%s %s -> %s (%.1f ms)",
                request.method,
                request.url.path,
                response.status_code,
                (time.perf_counter() - started) * 1000,
            )
            return response
        finally:
            reset_request_id(token)

    register_exception_handlers(app)

    # PUBLIC_INTERFACE
    @app.get("/health", summary="Health Check", tags=["health"])
    def health_check(store: RecordStore = Depends(get_store)):
        """
        Health check endpoint. Runs a trivial query against the record store.

        Returns:
            A success envelope naming the store backend.
        """
        store.execute(queries.PING)
        return success_envelope({"database": "connected", "backend": store.backend})

    app.include_router(todos_router.router)
    return app


app = create_app()
