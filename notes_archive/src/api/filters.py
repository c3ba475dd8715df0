"""Search and category filtering of the note list.

All functions are pure: they never mutate the notes and always return the
matches in catalog order.
"""

from __future__ import annotations

from typing import Iterable, List

from src.api.models import ALL_CATEGORIES, FilterState, Note


def matches_category(note: Note, category: str) -> bool:
    """True when `category` is the "all" sentinel or equals the note's category."""
    return category == ALL_CATEGORIES or note.category == category


def matches_search(note: Note, search_term: str) -> bool:
    """Case-insensitive substring match on title, description and tags.

    An empty term matches every note.
    """
    needle = search_term.lower()
    if not needle:
        return True
    return (
        needle in note.title.lower()
        or needle in note.description.lower()
        or any(needle in tag.lower() for tag in note.tags)
    )


# PUBLIC_INTERFACE
def filter_notes(
    notes: Iterable[Note],
    search_term: str = "",
    category: str = ALL_CATEGORIES,
) -> List[Note]:
    """Return the notes passing both the category and the search predicate."""
    return [
        note
        for note in notes
        if matches_category(note, category) and matches_search(note, search_term)
    ]


# PUBLIC_INTERFACE
def apply_filter(notes: Iterable[Note], state: FilterState) -> List[Note]:
    """`filter_notes` driven by a FilterState."""
    return filter_notes(notes, state.search_term, state.selected_category)
