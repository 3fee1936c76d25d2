"""
FastAPI Application Entry Point.

    uvicorn pocketnotes.backend.main:app
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pocketnotes.backend.api import health
from pocketnotes.backend.api.v1 import router as api_v1_router
from pocketnotes.backend.core.config import get_app_config
from pocketnotes.backend.core.exception_handlers import register_exception_handlers
from pocketnotes.backend.core.logging import get_logger, setup_logging
from pocketnotes.backend.core.middleware import RequestContextMiddleware
from pocketnotes.backend.services.store import NoteStore, open_note_store

logger = get_logger(__name__)

_app: FastAPI | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Opens the note store eagerly so a broken database stops startup
    instead of failing the first request.
    """
    app_config = get_app_config()
    setup_logging(level=app_config.logging.level)

    owns_store = app.state.note_store is None
    if owns_store:
        app.state.note_store = await open_note_store()

    logger.info(
        "Application starting",
        extra={
            "app_name": app_config.application.name,
            "env": app_config.application.environment,
        },
    )
    yield
    logger.info("Application shutting down")

    if owns_store:
        await app.state.note_store.close()
        app.state.note_store = None


def create_app(store: NoteStore | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: An already open note store. When omitted, the lifespan
            opens one from configuration and closes it on shutdown.
    """
    app_settings = get_app_config().application

    app = FastAPI(
        title=app_settings.name,
        description=app_settings.description,
        version=app_settings.version,
        docs_url="/docs" if app_settings.debug else None,
        redoc_url="/redoc" if app_settings.debug else None,
        lifespan=lifespan,
    )
    app.state.note_store = store

    app.add_middleware(RequestContextMiddleware)

    if app_settings.cors.origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=app_settings.cors.origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_v1_router, prefix=app_settings.api_prefix)

    return app


def get_app() -> FastAPI:
    """Get the application instance, creating it on first call."""
    global _app
    if _app is None:
        _app = create_app()
    return _app


def __getattr__(name: str) -> FastAPI:
    """Support lazy access to `app` for uvicorn compatibility."""
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
