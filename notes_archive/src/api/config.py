"""Runtime configuration for the note archive.

Values come from environment variables, with defaults that make a local
checkout usable without any setup: the catalog is read from
`notes_archive/data/notes.json` and the markdown files are served by the app
itself from `notes_archive/public/notes`.

The app fetches note markdown over HTTP from NOTES_PUBLIC_URL, which
defaults to http://127.0.0.1:8000. When serving on another host or port, set
it to match, for example:

    NOTES_PUBLIC_URL=http://127.0.0.1:9000 uvicorn src.api.main:app --app-dir notes_archive --port 9000

Fetches have no timeout unless NOTES_FETCH_TIMEOUT (seconds) is set.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional


def _project_root_from_this_file() -> Path:
    """Compute project root path from this file location.

    notes_archive/src/api/config.py -> notes_archive
    """
    return Path(__file__).resolve().parents[2]


PROJECT_ROOT = _project_root_from_this_file()
DEFAULT_CATALOG_PATH = PROJECT_ROOT / "data" / "notes.json"
DEFAULT_CONTENT_DIR = PROJECT_ROOT / "public" / "notes"
DEFAULT_PUBLIC_URL = "http://127.0.0.1:8000"
DEFAULT_FETCH_TIMEOUT: Optional[float] = None


# PUBLIC_INTERFACE
def normalize_base_path(value: Optional[str]) -> str:
    """Return a deployment base path as "" or "/prefix" (no trailing slash)."""
    if not value:
        return ""
    stripped = value.strip().strip("/")
    if not stripped:
        return ""
    return "/" + stripped


def _parse_timeout(value: Optional[str]) -> Optional[float]:
    """Parse NOTES_FETCH_TIMEOUT; unset, "none" or "0" means no timeout."""
    if value is None or value.strip() == "":
        return DEFAULT_FETCH_TIMEOUT
    if value.strip().lower() in {"none", "off", "0"}:
        return None
    try:
        timeout = float(value)
    except ValueError as exc:
        raise ValueError(f"Invalid NOTES_FETCH_TIMEOUT: {value!r}") from exc
    if timeout < 0:
        raise ValueError(f"NOTES_FETCH_TIMEOUT must not be negative: {value!r}")
    return timeout


def _parse_log_level(value: Optional[str]) -> int:
    if not value:
        return logging.INFO
    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Invalid NOTES_LOG_LEVEL: {value!r}")
    return level


@dataclass(frozen=True)
class Settings:
    """Resolved application settings."""

    catalog_path: Path = DEFAULT_CATALOG_PATH
    public_url: str = DEFAULT_PUBLIC_URL
    base_path: str = ""
    content_dir: Optional[Path] = DEFAULT_CONTENT_DIR
    fetch_timeout: Optional[float] = DEFAULT_FETCH_TIMEOUT
    log_level: int = logging.INFO

    @property
    def content_origin(self) -> str:
        """Origin plus base path that `/notes/{slug}.md` is resolved against."""
        return self.public_url.rstrip("/") + self.base_path

    # PUBLIC_INTERFACE
    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from NOTES_* environment variables.

        Raises:
            ValueError: If a numeric or level variable cannot be parsed.
        """
        catalog = os.getenv("NOTES_CATALOG_PATH")
        content_dir = os.getenv("NOTES_CONTENT_DIR")
        if content_dir is None:
            resolved_content_dir: Optional[Path] = DEFAULT_CONTENT_DIR
        elif content_dir.strip() == "":
            resolved_content_dir = None
        else:
            resolved_content_dir = Path(content_dir)

        return cls(
            catalog_path=Path(catalog) if catalog else DEFAULT_CATALOG_PATH,
            public_url=os.getenv("NOTES_PUBLIC_URL") or DEFAULT_PUBLIC_URL,
            base_path=normalize_base_path(os.getenv("NOTES_BASE_PATH")),
            content_dir=resolved_content_dir,
            fetch_timeout=_parse_timeout(os.getenv("NOTES_FETCH_TIMEOUT")),
            log_level=_parse_log_level(os.getenv("NOTES_LOG_LEVEL")),
        )


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, resolved once from the environment."""
    return Settings.from_env()
