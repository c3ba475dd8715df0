"""Request dependencies resolving objects created at application startup."""

from __future__ import annotations

from fastapi import Depends, Request

from src.api.catalog import NoteCatalog
from src.api.fetcher import NoteDetailSession, NoteFetcher


# PUBLIC_INTERFACE
def get_catalog(request: Request) -> NoteCatalog:
    """Return the catalog loaded by the application lifespan."""
    return request.app.state.catalog


# PUBLIC_INTERFACE
def get_fetcher(request: Request) -> NoteFetcher:
    """Return the shared markdown fetcher."""
    return request.app.state.fetcher


# PUBLIC_INTERFACE
def get_detail_session(
    fetcher: NoteFetcher = Depends(get_fetcher),
) -> NoteDetailSession:
    """Return a fresh detail-view session starting from the Loading state."""
    return NoteDetailSession(fetcher)
