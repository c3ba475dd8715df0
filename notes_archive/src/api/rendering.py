"""Markdown to HTML conversion for note pages."""

from __future__ import annotations

from functools import lru_cache

import marko
from markupsafe import Markup


@lru_cache(maxsize=1)
def get_md_parser() -> marko.Markdown:
    """Get the GFM Markdown parser (tables, strikethrough, autolinks)."""
    return marko.Markdown(extensions=["gfm"])


# PUBLIC_INTERFACE
def render_markdown(text: str) -> Markup:
    """Convert markdown text to HTML that templates may insert unescaped."""
    return Markup(get_md_parser().convert(text or ""))
