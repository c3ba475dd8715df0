"""Fetch the markdown file of a note over HTTP.

A note's content lives at `{origin}/notes/{slug}.md`. Any failure to get a
successful response (error status or transport error) is treated the same
way: it is logged and the caller receives a fixed fallback document instead
of an exception.
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from src.api.models import ContentStatus, NoteContent

logger = logging.getLogger(__name__)

FALLBACK_MARKDOWN = (
    "# Error\n\nThe requested note was not found or could not be loaded."
)


class ContentUnavailable(Exception):
    """The markdown for a slug could not be retrieved."""

    def __init__(self, slug: str, reason: str) -> None:
        super().__init__(f"Note {slug!r} unavailable: {reason}")
        self.slug = slug
        self.reason = reason


# PUBLIC_INTERFACE
def note_path(slug: str) -> str:
    """Relative path of the markdown resource for `slug`."""
    return f"notes/{quote(slug, safe='')}.md"


class NoteFetcher:
    """Retrieves raw markdown for slugs using a shared async HTTP client.

    The client's `base_url` is the content origin (public URL plus the
    deployment base path).
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    @classmethod
    def for_origin(
        cls,
        origin: str,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "NoteFetcher":
        client = httpx.AsyncClient(
            base_url=origin.rstrip("/") + "/",
            timeout=timeout,
            transport=transport,
        )
        return cls(client)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_markdown(self, slug: str) -> str:
        """Return the markdown body for `slug`.

        Raises:
            ContentUnavailable: On a non-2xx status or a transport error.
        """
        try:
            response = await self._client.get(note_path(slug))
        except httpx.HTTPError as exc:
            raise ContentUnavailable(slug, f"{type(exc).__name__}: {exc}") from exc
        if not response.is_success:
            raise ContentUnavailable(slug, f"HTTP {response.status_code}")
        return response.text

    # PUBLIC_INTERFACE
    async def fetch(self, slug: str) -> NoteContent:
        """Return the loaded content, or the fallback document on failure."""
        try:
            markdown = await self.fetch_markdown(slug)
        except ContentUnavailable as exc:
            logger.warning("Failed to load markdown for %r: %s", exc.slug, exc.reason)
            return NoteContent(
                slug=slug, status=ContentStatus.NOT_FOUND, markdown=FALLBACK_MARKDOWN
            )
        return NoteContent(slug=slug, status=ContentStatus.LOADED, markdown=markdown)


class NoteDetailSession:
    """Detail view state for one viewer navigating between notes.

    Every `open` call bumps a generation counter. When a fetch completes, its
    result is applied only if no newer `open` happened in the meantime, so a
    slow response for an earlier slug never replaces the content of a later
    one. The superseded request is not cancelled.
    """

    def __init__(self, fetcher: NoteFetcher) -> None:
        self._fetcher = fetcher
        self._generation = 0
        self.state: Optional[NoteContent] = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def loading(self) -> bool:
        return self.state is not None and self.state.status is ContentStatus.LOADING

    # PUBLIC_INTERFACE
    async def open(self, slug: str) -> NoteContent:
        """Navigate to `slug` and return the state current after the fetch."""
        self._generation += 1
        generation = self._generation
        self.state = NoteContent(slug=slug, status=ContentStatus.LOADING)

        result = await self._fetcher.fetch(slug)

        if generation != self._generation:
            logger.debug(
                "Dropping stale content for %r (generation %d, current %d)",
                slug,
                generation,
                self._generation,
            )
            return self.state
        self.state = result
        return result
