"""Shared request assembly: operation description in, resolved request out.

Every renderer goes through :func:`resolve_request`; the three building
blocks are exported for hosts that need only part of the result.
"""

from reqsnip.request.assembly import (
    build_fetch_body_options,
    build_fetch_headers,
    build_fetch_url,
    is_file_like,
    resolve_request,
)

__all__ = [
    "build_fetch_body_options",
    "build_fetch_headers",
    "build_fetch_url",
    "is_file_like",
    "resolve_request",
]
