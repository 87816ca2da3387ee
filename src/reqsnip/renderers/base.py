"""Helpers shared by the snippet renderers."""

from __future__ import annotations

import httpx

DEFAULT_BASE_HREF = "http://localhost/"


def absolute_url(url: str, base_href: str) -> str:
    """Return *url* unchanged if it has an ``http`` scheme, else join it to *base_href*."""
    if url.startswith("http"):
        return url
    return str(httpx.URL(base_href).join(url))


def escape_single_quotes(text: str) -> str:
    """Make *text* safe inside a single-quoted shell or Python string."""
    return text.replace("'", "'\"'\"'")
