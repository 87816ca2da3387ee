"""Well-known media type names and the binary media type heuristic."""

from __future__ import annotations

import re

APPLICATION_FORM_URLENCODED = "application/x-www-form-urlencoded"
APPLICATION_JSON = "application/json"
APPLICATION_OCTET_STREAM = "application/octet-stream"
APPLICATION_XML = "application/xml"
MULTIPART_FORM_DATA = "multipart/form-data"

# Tag for urlencoded form examples that stand for a file upload.
FILE_FIELD = "application/file"

_BINARY_RE = re.compile(
    r"^audio/|^image/|^video/|^font/|tar$|zip$|7z$|rtf$|msword$|excel$|/pdf$|/octet-stream$"
)


def is_form_urlencoded(name: str) -> bool:
    return "form-urlencoded" in name


def is_multipart(name: str) -> bool:
    return "form-data" in name


def is_binary(name: str) -> bool:
    """Return True for media types whose example is a raw file payload."""
    return _BINARY_RE.search(name) is not None


def is_textual(name: str) -> bool:
    """Return True for JSON, XML, and ``text/*`` media types."""
    return "json" in name or "xml" in name or "text" in name
