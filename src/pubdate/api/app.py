"""FastAPI application factory."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pubdate.api.dependencies import get_settings
from pubdate.api.errors import register_exception_handlers
from pubdate.api.routes import books_router, google_books_router, health_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Creates the source adapters once and closes them on shutdown.
    """
    settings = get_settings()
    logging.getLogger("pubdate").setLevel(settings.log_level.upper())

    from pubdate.resolution.registry import SourceRegistry

    logger.info("Initializing source registry...")
    app.state.source_registry = SourceRegistry.from_settings(settings)

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")

    if hasattr(app.state, "source_registry"):
        await app.state.source_registry.close_all()

    logger.info("Application shutdown complete")


def create_app(
    *,
    title: str = "pubdate API",
    description: str = "Publication dates by ISBN, resolved into a spreadsheet",
    version: str = "0.1.0",
    cors_origins: list[str] | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        title: API title for OpenAPI docs
        description: API description for OpenAPI docs
        version: API version
        cors_origins: List of allowed CORS origins (defaults to settings)

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=title,
        description=description,
        version=version,
        lifespan=lifespan,
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    if cors_origins is None:
        cors_origins = get_settings().cors_origins

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    # One batch run at a time per process
    app.state.batch_lock = asyncio.Lock()

    register_exception_handlers(app)

    app.include_router(health_router, prefix="/api/v1")
    app.include_router(books_router, prefix="/api/v1")
    app.include_router(google_books_router, prefix="/api/v1")

    return app


# For uvicorn direct execution
app = create_app()
