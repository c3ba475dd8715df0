"""Read-only JSON routes over the note catalog."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from src.api.catalog import NoteCatalog
from src.api.dependencies import get_catalog, get_detail_session
from src.api.fetcher import NoteDetailSession
from src.api.filters import filter_notes
from src.api.models import ALL_CATEGORIES, Note, NoteContent, NoteList

router = APIRouter(prefix="/api", tags=["notes"])


def _lookup(catalog: NoteCatalog, slug: str) -> Note:
    """Return the catalog note for `slug` or raise a 404."""
    note = catalog.get(slug)
    if note is None:
        raise HTTPException(status_code=404, detail="Note not found")
    return note


@router.get(
    "/notes",
    response_model=NoteList,
    summary="List notes",
    description=(
        "List catalog notes matching the search text (title, description, "
        "tags; case-insensitive) and the category. Catalog order is kept."
    ),
    operation_id="list_notes",
)
# PUBLIC_INTERFACE
def list_notes(
    q: str = Query("", description="Search text; empty matches every note."),
    category: str = Query(
        ALL_CATEGORIES, description='Exact category, or "all" for no filter.'
    ),
    catalog: NoteCatalog = Depends(get_catalog),
) -> NoteList:
    """Return the filtered note list."""
    items = filter_notes(catalog.notes, q, category)
    return NoteList(total=len(items), items=items)


@router.get(
    "/categories",
    response_model=List[str],
    summary="List categories",
    description='Distinct categories in first-seen order, preceded by "all".',
    operation_id="list_categories",
)
# PUBLIC_INTERFACE
def list_categories(catalog: NoteCatalog = Depends(get_catalog)) -> List[str]:
    """Return the category universe."""
    return catalog.categories


@router.get(
    "/notes/{slug}",
    response_model=Note,
    summary="Get note by slug",
    description="Fetch a single catalog record (404 if the slug is unknown).",
    operation_id="get_note",
)
# PUBLIC_INTERFACE
def get_note(
    slug: str = Path(..., description="Note slug."),
    catalog: NoteCatalog = Depends(get_catalog),
) -> Note:
    """Get a single catalog note."""
    return _lookup(catalog, slug)


@router.get(
    "/notes/{slug}/content",
    response_model=NoteContent,
    summary="Get note markdown",
    description=(
        "Fetch the raw markdown of a note. A missing or unreachable file "
        'yields status "not_found" with a fallback document, never an error.'
    ),
    operation_id="get_note_content",
)
# PUBLIC_INTERFACE
async def get_note_content(
    slug: str = Path(..., description="Note slug."),
    session: NoteDetailSession = Depends(get_detail_session),
) -> NoteContent:
    """Return the detail state for a slug."""
    return await session.open(slug)
