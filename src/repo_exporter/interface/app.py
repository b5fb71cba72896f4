"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from repo_exporter.infrastructure.config import get_settings
from repo_exporter.interface.dependencies import shutdown, startup
from repo_exporter.interface.error_handlers import register_error_handlers
from repo_exporter.interface.routes import router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    await startup()
    logger.info("HTTP client ready")
    yield
    await shutdown()


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title="Repository Exporter",
        version="1.0.0",
        description=(
            "Lists the files at a GitHub or GitLab repository location and "
            "exports a selection of them as one annotated text document or "
            "as a zip archive."
        ),
        lifespan=_lifespan,
    )

    # Browser front-ends call the API directly; the download name must be readable.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", "X-File-Count"],
        max_age=600,
    )
    register_error_handlers(app)
    app.include_router(router)

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
