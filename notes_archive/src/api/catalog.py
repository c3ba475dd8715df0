"""Static note catalog loaded once at startup."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from src.api.models import ALL_CATEGORIES, Note

logger = logging.getLogger(__name__)

_NOTES_ADAPTER = TypeAdapter(List[Note])


class CatalogError(RuntimeError):
    """The catalog file is missing, malformed, or inconsistent."""


class NoteCatalog:
    """Immutable, ordered collection of notes with slug lookup."""

    def __init__(self, notes: Iterable[Note]) -> None:
        self._notes = tuple(notes)
        self._by_slug = {}
        seen_ids = set()
        for note in self._notes:
            if note.id in seen_ids:
                raise CatalogError(f"Duplicate note id: {note.id!r}")
            if note.slug in self._by_slug:
                raise CatalogError(f"Duplicate note slug: {note.slug!r}")
            seen_ids.add(note.id)
            self._by_slug[note.slug] = note
        self._categories = category_universe(self._notes)

    @property
    def notes(self) -> Sequence[Note]:
        return self._notes

    @property
    def categories(self) -> List[str]:
        """Category universe, "all" first."""
        return list(self._categories)

    def get(self, slug: str) -> Optional[Note]:
        return self._by_slug.get(slug)

    def __len__(self) -> int:
        return len(self._notes)

    def __iter__(self):
        return iter(self._notes)


# PUBLIC_INTERFACE
def category_universe(notes: Iterable[Note]) -> List[str]:
    """Return ["all", *distinct categories] in first-seen order."""
    categories = [ALL_CATEGORIES]
    for note in notes:
        if note.category not in categories:
            categories.append(note.category)
    return categories


# PUBLIC_INTERFACE
def parse_catalog(data: object) -> NoteCatalog:
    """Validate decoded JSON and build a catalog from it.

    Raises:
        CatalogError: If the data is not a list of valid note records.
    """
    if not isinstance(data, list):
        raise CatalogError("Catalog must be a JSON array of notes")
    try:
        notes = _NOTES_ADAPTER.validate_python(data)
    except ValidationError as exc:
        raise CatalogError(f"Invalid note record in catalog: {exc}") from exc
    return NoteCatalog(notes)


# PUBLIC_INTERFACE
def load_catalog(path: Path) -> NoteCatalog:
    """Read the catalog JSON file at `path`.

    Raises:
        CatalogError: If the file cannot be read, decoded, or validated.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogError(f"Cannot read catalog {path}: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Catalog {path} is not valid JSON: {exc}") from exc

    catalog = parse_catalog(data)
    logger.info("Loaded %d notes from %s", len(catalog), path)
    return catalog
