"""Shared fixtures: a small catalog and an app wired to a stub markdown origin."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

from src.api.catalog import NoteCatalog, parse_catalog
from src.api.config import Settings
from src.api.fetcher import NoteFetcher
from src.api.main import create_app

ORIGIN = "http://notes.test"

CATALOG_DATA = [
    {
        "id": 1,
        "slug": "intro",
        "title": "Intro",
        "description": "Getting started with Go.",
        "category": "go",
        "tags": ["go", "basics"],
    },
    {
        "id": 2,
        "slug": "ownership",
        "title": "Ownership",
        "description": "Borrowing and lifetimes.",
        "category": "rust",
        "tags": ["rust"],
    },
    {
        "id": 3,
        "slug": "hooks",
        "title": "Hooks",
        "description": "State in function components.",
        "category": "frontend",
        "tags": ["React", "javascript"],
    },
    {
        "id": 4,
        "slug": "channels",
        "title": "Channels",
        "description": "Communicating between goroutines.",
        "category": "go",
        "tags": ["concurrency"],
    },
]

MARKDOWN_FILES = {
    "/notes/intro.md": "# Intro\n\nHello ~~world~~ Go.\n",
    "/notes/hooks.md": "# Hooks\n\n| Hook | Use |\n| --- | --- |\n| useState | state |\n",
}


def serve_markdown(request: httpx.Request) -> httpx.Response:
    body = MARKDOWN_FILES.get(request.url.path)
    if body is None:
        return httpx.Response(404, text="Not Found")
    return httpx.Response(200, text=body)


@pytest.fixture()
def catalog() -> NoteCatalog:
    return parse_catalog(CATALOG_DATA)


@pytest.fixture()
def catalog_file(tmp_path: Path) -> Path:
    path = tmp_path / "notes.json"
    path.write_text(json.dumps(CATALOG_DATA), encoding="utf-8")
    return path


@pytest.fixture()
def fetcher():
    note_fetcher = NoteFetcher.for_origin(
        ORIGIN, transport=httpx.MockTransport(serve_markdown)
    )
    yield note_fetcher
    asyncio.run(note_fetcher.aclose())


@pytest.fixture()
def settings(catalog_file: Path) -> Settings:
    return Settings(catalog_path=catalog_file, public_url=ORIGIN, content_dir=None)


@pytest.fixture()
def client(settings: Settings, fetcher: NoteFetcher):
    app = create_app(settings, fetcher=fetcher)
    with TestClient(app) as test_client:
        yield test_client
