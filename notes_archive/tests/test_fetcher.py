"""Tests for src.api.fetcher: markdown retrieval and the detail session."""

import asyncio

import httpx
import pytest

from src.api.fetcher import (
    FALLBACK_MARKDOWN,
    ContentUnavailable,
    NoteDetailSession,
    NoteFetcher,
    note_path,
)
from src.api.models import ContentStatus, NoteContent


def _fetch(handler, slug, origin="http://notes.test", raw=False):
    """Fetch `slug` from a stubbed origin, closing the client afterwards."""

    async def scenario():
        fetcher = NoteFetcher.for_origin(origin, transport=httpx.MockTransport(handler))
        try:
            if raw:
                return await fetcher.fetch_markdown(slug)
            return await fetcher.fetch(slug)
        finally:
            await fetcher.aclose()

    return asyncio.run(scenario())


def test_note_path_quotes_slug():
    assert note_path("intro") == "notes/intro.md"
    assert note_path("a b") == "notes/a%20b.md"


def test_no_timeout_by_default():
    async def scenario():
        fetcher = NoteFetcher.for_origin("http://notes.test")
        try:
            return fetcher._client.timeout
        finally:
            await fetcher.aclose()

    assert asyncio.run(scenario()) == httpx.Timeout(None)


def test_slow_response_still_loads():
    async def handler(request):
        await asyncio.sleep(0.2)
        return httpx.Response(200, text="# Slow")

    content = _fetch(handler, "intro")
    assert content.status is ContentStatus.LOADED
    assert content.markdown == "# Slow"


def test_fetch_success(fetcher):
    content = asyncio.run(fetcher.fetch("intro"))
    assert content.status is ContentStatus.LOADED
    assert content.slug == "intro"
    assert content.markdown.startswith("# Intro")


def test_fetch_404_gives_fallback(fetcher):
    content = asyncio.run(fetcher.fetch("missing"))
    assert content.status is ContentStatus.NOT_FOUND
    assert content.markdown == FALLBACK_MARKDOWN


def test_fetch_server_error_gives_fallback():
    content = _fetch(lambda request: httpx.Response(500), "intro")
    assert content.status is ContentStatus.NOT_FOUND
    assert content.markdown == FALLBACK_MARKDOWN


def test_transport_error_gives_fallback():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    content = _fetch(handler, "intro")
    assert content.status is ContentStatus.NOT_FOUND


def test_fetch_markdown_raises_content_unavailable():
    with pytest.raises(ContentUnavailable) as excinfo:
        _fetch(lambda request: httpx.Response(404), "missing", raw=True)
    assert excinfo.value.slug == "missing"
    assert excinfo.value.reason == "HTTP 404"


def test_failure_is_logged(caplog):
    with caplog.at_level("WARNING", logger="src.api.fetcher"):
        _fetch(lambda request: httpx.Response(404), "missing")
    assert "missing" in caplog.text


def test_requests_use_base_path():
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200, text="ok")

    _fetch(handler, "intro", origin="http://host.test/archive")
    assert seen == ["http://host.test/archive/notes/intro.md"]


def test_no_retry_on_failure():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(503)

    _fetch(handler, "intro")
    assert len(calls) == 1


class _GatedFetcher:
    """Fetcher whose responses are released explicitly per slug."""

    def __init__(self, *slugs):
        self.gates = {slug: asyncio.Event() for slug in slugs}

    async def fetch(self, slug):
        await self.gates[slug].wait()
        return NoteContent(slug=slug, status=ContentStatus.LOADED, markdown=slug)


class TestNoteDetailSession:
    def test_open_goes_through_loading(self):
        async def scenario():
            fetcher = _GatedFetcher("intro")
            session = NoteDetailSession(fetcher)
            task = asyncio.create_task(session.open("intro"))
            await asyncio.sleep(0)
            assert session.loading
            assert session.state.slug == "intro"
            fetcher.gates["intro"].set()
            result = await task
            assert not session.loading
            return result

        result = asyncio.run(scenario())
        assert result.status is ContentStatus.LOADED
        assert result.markdown == "intro"

    def test_stale_response_is_dropped(self):
        async def scenario():
            fetcher = _GatedFetcher("slow", "fast")
            session = NoteDetailSession(fetcher)
            first = asyncio.create_task(session.open("slow"))
            await asyncio.sleep(0)
            second = asyncio.create_task(session.open("fast"))
            await asyncio.sleep(0)
            assert session.generation == 2

            fetcher.gates["fast"].set()
            await second
            fetcher.gates["slow"].set()
            stale = await first
            return session, stale

        session, stale = asyncio.run(scenario())
        assert session.state.slug == "fast"
        assert session.state.status is ContentStatus.LOADED
        assert stale.slug == "fast"

    def test_reopen_after_not_found(self, fetcher):
        async def scenario():
            session = NoteDetailSession(fetcher)
            missing = await session.open("missing")
            found = await session.open("intro")
            return missing, found

        missing, found = asyncio.run(scenario())
        assert missing.status is ContentStatus.NOT_FOUND
        assert found.status is ContentStatus.LOADED
