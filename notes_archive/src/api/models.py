"""Pydantic models for the note archive."""
from __future__ import annotations

from enum import Enum
from typing import List, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

ALL_CATEGORIES = "all"
SLUG_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9._~-]*$"


class Note(BaseModel):
    """A catalog record describing one note and its markdown resource."""

    model_config = ConfigDict(frozen=True)

    id: Union[int, str] = Field(..., description="Unique note identifier (list key).")
    slug: str = Field(
        ...,
        pattern=SLUG_PATTERN,
        description="URL-safe identifier resolving the markdown file.",
    )
    title: str = Field(..., description="Human-friendly note title.")
    description: str = Field("", description="Short summary shown in the list.")
    category: str = Field(..., description="Category label used for filtering.")
    tags: Tuple[str, ...] = Field(default=(), description="Ordered tag list.")


class FilterState(BaseModel):
    """Search text and selected category of the list view."""

    search_term: str = Field("", description="Case-insensitive substring to match.")
    selected_category: str = Field(
        ALL_CATEGORIES, description='Exact category, or "all" for no filter.'
    )


class ContentStatus(str, Enum):
    """States of the note detail view."""

    LOADING = "loading"
    LOADED = "loaded"
    NOT_FOUND = "not_found"


class NoteContent(BaseModel):
    """Markdown content of a note together with its load state."""

    slug: str = Field(..., description="Slug the content was requested for.")
    status: ContentStatus = Field(..., description="Load state.")
    markdown: str = Field("", description="Raw markdown (fallback when not found).")


class NoteList(BaseModel):
    """Filtered notes returned by the API."""

    total: int = Field(..., description="Number of notes matching the filter.")
    items: List[Note] = Field(..., description="Matching notes in catalog order.")
