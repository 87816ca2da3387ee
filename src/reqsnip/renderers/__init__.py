"""Snippet renderers: turn a resolved request into literal source text.

Each renderer is a pair of plain functions -- ``render_*`` takes an
:class:`~reqsnip.models.Operation`, ``format_*`` an already resolved
:class:`~reqsnip.models.ResolvedRequest`. :func:`render_snippet` dispatches on
:class:`RendererKind`.
"""

from __future__ import annotations

import enum

from reqsnip.models import Operation
from reqsnip.renderers.base import DEFAULT_BASE_HREF
from reqsnip.renderers.curl import format_curl, render_curl
from reqsnip.renderers.python import format_python, render_python


class RendererKind(str, enum.Enum):
    """Snippet targets, with the syntax name used for highlighting."""

    CURL = "curl"
    PYTHON = "python"

    @property
    def language(self) -> str:
        return "bash" if self is RendererKind.CURL else "python"


_RENDERERS = {
    RendererKind.CURL: render_curl,
    RendererKind.PYTHON: render_python,
}


def render_snippet(
    operation: Operation,
    kind: RendererKind = RendererKind.CURL,
    base_href: str = DEFAULT_BASE_HREF,
) -> str:
    """Render *operation* with the renderer selected by *kind*."""
    return _RENDERERS[RendererKind(kind)](operation, base_href)


__all__ = [
    "DEFAULT_BASE_HREF",
    "RendererKind",
    "format_curl",
    "format_python",
    "render_curl",
    "render_python",
    "render_snippet",
]
