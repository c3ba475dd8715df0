"""FastAPI application entrypoint for the note archive.

Provides:
- Filterable note list page and note detail page (HTML)
- Read-only JSON API over the catalog and the note markdown
- Health check endpoint
- Optional static serving of the markdown files under /notes
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, FastAPI
from fastapi.staticfiles import StaticFiles

from src.api.catalog import NoteCatalog, load_catalog
from src.api.config import Settings, get_settings
from src.api.fetcher import NoteFetcher
from src.api.logging_setup import setup_logging
from src.api.notes_router import router as notes_router
from src.api.views import router as pages_router

logger = logging.getLogger(__name__)

openapi_tags = [
    {
        "name": "health",
        "description": "Service health and basic diagnostics.",
    },
    {
        "name": "notes",
        "description": "Read-only access to the note catalog and markdown.",
    },
]

health_router = APIRouter(tags=["health"])


@health_router.get(
    "/health",
    summary="Health check",
    description="Simple health check endpoint for container orchestration.",
    operation_id="health_check",
)
# PUBLIC_INTERFACE
def health_check():
    """Return basic service health status."""
    return {"message": "Healthy"}


# PUBLIC_INTERFACE
def create_app(
    settings: Optional[Settings] = None,
    *,
    catalog: Optional[NoteCatalog] = None,
    fetcher: Optional[NoteFetcher] = None,
) -> FastAPI:
    """Build the application.

    The catalog is loaded and the HTTP client opened when the app starts,
    before the first request. Passing `catalog` or `fetcher` skips creating
    them (the caller then owns the fetcher's client).
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level)
        app.state.catalog = catalog if catalog is not None else load_catalog(
            settings.catalog_path
        )
        own_fetcher = fetcher is None
        app.state.fetcher = fetcher or NoteFetcher.for_origin(
            settings.content_origin, timeout=settings.fetch_timeout
        )
        logger.info(
            "Note archive ready: %d notes, content from %s",
            len(app.state.catalog),
            settings.content_origin,
        )
        try:
            yield
        finally:
            if own_fetcher:
                await app.state.fetcher.aclose()

    app = FastAPI(
        title="Personal Note Archive",
        description="Browse, search and read a personal archive of markdown notes.",
        version="1.0.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.state.settings = settings

    prefix = settings.base_path
    app.include_router(health_router, prefix=prefix)
    app.include_router(notes_router, prefix=prefix)
    app.include_router(pages_router, prefix=prefix)

    if settings.content_dir is not None and settings.content_dir.is_dir():
        app.mount(
            f"{prefix}/notes",
            StaticFiles(directory=str(settings.content_dir)),
            name="notes",
        )

    return app


app = create_app()
