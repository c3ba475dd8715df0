"""HTML pages: the filterable note list and the note detail page."""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from src.api.catalog import NoteCatalog
from src.api.dependencies import get_catalog, get_detail_session
from src.api.fetcher import NoteDetailSession
from src.api.filters import apply_filter
from src.api.models import ALL_CATEGORIES, ContentStatus, FilterState
from src.api.rendering import render_markdown

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["pages"], include_in_schema=False)


@router.get("/", response_class=HTMLResponse, name="home_page")
# PUBLIC_INTERFACE
def home_page(
    request: Request,
    q: str = Query("", description="Search text."),
    category: str = Query(ALL_CATEGORIES, description="Selected category."),
    catalog: NoteCatalog = Depends(get_catalog),
):
    """Render the note list filtered by search text and category."""
    state = FilterState(search_term=q, selected_category=category)
    notes = apply_filter(catalog.notes, state)
    return templates.TemplateResponse(
        request,
        "home.html",
        {
            "notes": notes,
            "filter_state": state,
            "categories": catalog.categories,
            "all_categories": ALL_CATEGORIES,
        },
    )


@router.get("/note/{slug}", response_class=HTMLResponse, name="note_page")
# PUBLIC_INTERFACE
async def note_page(
    request: Request,
    slug: str,
    session: NoteDetailSession = Depends(get_detail_session),
):
    """Fetch a note's markdown and render it; missing notes show a fallback."""
    content = await session.open(slug)
    return templates.TemplateResponse(
        request,
        "note.html",
        {
            "content": content,
            "loading": content.status is ContentStatus.LOADING,
            "body": render_markdown(content.markdown),
        },
    )
