"""Resolve an :class:`~reqsnip.models.Operation` into URL, headers, and body.

This is the single request-building pipeline every renderer shares. Each of
the three derivations is a pure function of the operation description:

* :func:`build_fetch_url` -- path substitution, query string, query-located
  credentials, and the separate cookie set.
* :func:`build_fetch_headers` -- credentials, header parameters,
  ``Content-Type``, and the default ``Accept``.
* :func:`build_fetch_body_options` -- the method and a body shaped after the
  first declared media type.

:func:`resolve_request` bundles all three into a
:class:`~reqsnip.models.ResolvedRequest`. Example data is trusted: a
malformed example raises whatever Python error accessing it causes.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from reqsnip import mime_types
from reqsnip.models import (
    FetchBody,
    FetchUrl,
    FormUrlEncoded,
    MultipartForm,
    Operation,
    Parameter,
    ParameterLocation,
    ResolvedRequest,
)
from reqsnip.serialization import (
    encode_uri_component,
    serialize,
    serialize_parameter_value,
    stringify,
)

logger = logging.getLogger(__name__)

DEFAULT_ACCEPT = mime_types.APPLICATION_JSON

# Header names and values may carry any text an example holds.
HEADER_ENCODING = "utf-8"


def resolve_request(operation: Operation) -> ResolvedRequest:
    """Run the whole pipeline for *operation*.

    Args:
        operation: The operation to resolve.

    Returns:
        A fresh, frozen :class:`~reqsnip.models.ResolvedRequest`.
    """
    return ResolvedRequest(
        url=build_fetch_url(operation),
        headers=build_fetch_headers(operation),
        body=build_fetch_body_options(operation),
    )


def _params_in(operation: Operation, location: ParameterLocation) -> list[Parameter]:
    return [param for param in operation.parameters if param.location == location]


def _value_after_key(fragment: str) -> str:
    return fragment.partition("=")[2]


def build_fetch_url(operation: Operation) -> FetchUrl:
    """Build the base and full URL plus the query and cookie pairs.

    Parameters are processed in declaration order, which fixes the order of
    the query string and of the cookies.
    """
    path = operation.path
    for param in _params_in(operation, ParameterLocation.PATH):
        if param.example is None:
            continue
        placeholder = "{" + param.name + "}"
        if placeholder not in path:
            logger.debug("No placeholder for path parameter %r in %s", param.name, path)
            continue
        path = path.replace(placeholder, serialize_parameter_value(param, param.example), 1)

    query_params: list[tuple[str, str]] = []
    for param in _params_in(operation, ParameterLocation.QUERY):
        value = _query_value(param)
        if value is None:
            continue
        fragment = serialize(param, value)
        if "&" in fragment:
            for piece in fragment.split("&"):
                query_params.append((param.name, piece.split("=")[-1]))
        else:
            query_params.append((param.name, _value_after_key(fragment)))

    base_fetch_url = f"{operation.server_url.rstrip('/')}{path}"

    full_url = base_fetch_url
    if query_params:
        full_url = f"{full_url}?" + "&".join(f"{key}={value}" for key, value in query_params)

    for scheme in operation.security:
        if scheme.location != ParameterLocation.QUERY:
            continue
        separator = "&" if "?" in full_url else "?"
        full_url = f"{full_url}{separator}{scheme.name}={encode_uri_component(scheme.display_name)}"

    cookie_params: list[tuple[str, str]] = []
    for param in _params_in(operation, ParameterLocation.COOKIE):
        value = param.example if param.example is not None else param.schema_.default
        if value is None:
            continue
        cookie_params.append((param.name, _value_after_key(serialize(param, value))))

    return FetchUrl(
        full_url=full_url,
        base_fetch_url=base_fetch_url,
        query_params=query_params,
        cookie_params=cookie_params,
    )


def _query_value(param: Parameter) -> Any:
    """``example``, else the schema default, else the first enum value."""
    if param.example is not None:
        return param.example
    if param.schema_.default is not None:
        return param.schema_.default
    if param.schema_.enum:
        return param.schema_.enum[0]
    return None


def build_fetch_headers(operation: Operation) -> httpx.Headers:
    """Build the multi-valued header collection for *operation*.

    Names keep the casing they were declared with; the ``Accept`` check is
    case-insensitive. Multipart bodies get no ``Content-Type`` so the client
    can generate its own boundary.
    """
    entries: list[tuple[str, str]] = []

    for scheme in operation.security:
        if scheme.location == ParameterLocation.HEADER:
            entries.append((scheme.name, scheme.display_name))

    for param in _params_in(operation, ParameterLocation.HEADER):
        if param.example:
            entries.append((param.name, stringify(param.example)))
        elif isinstance(param.examples, list):
            entries.extend((param.name, stringify(example)) for example in param.examples)

    if operation.request_body and operation.request_body.media_types:
        media_type = operation.request_body.media_types[0]
        if not mime_types.is_multipart(media_type.name):
            entries.append(("Content-Type", media_type.name))

    headers = httpx.Headers(entries, encoding=HEADER_ENCODING)
    if "accept" not in headers:
        headers = httpx.Headers(
            [*entries, ("Accept", DEFAULT_ACCEPT)], encoding=HEADER_ENCODING
        )

    return headers


def build_fetch_body_options(operation: Operation) -> FetchBody:
    """Build the method and body for *operation*.

    Only the first declared media type is consulted:

    * urlencoded -> :class:`~reqsnip.models.FormUrlEncoded` with one field per
      example whose mime does not mention ``file``;
    * multipart -> :class:`~reqsnip.models.MultipartForm` from the properties
      of the first example's object value;
    * binary (audio, image, archives, pdf, ...) -> the raw example value,
      normally a file-like object;
    * JSON, XML, ``text/*`` -> the example value unchanged;
    * anything else -> no body.
    """
    method = operation.method.value.upper()
    media_types = operation.request_body.media_types if operation.request_body else []
    if not media_types:
        return FetchBody(method=method)

    media_type = media_types[0]
    examples = media_type.examples
    if not examples:
        return FetchBody(method=method)

    name = media_type.name
    if mime_types.is_form_urlencoded(name):
        fields: list[tuple[str, str]] = []
        for key, example in examples.items():
            if "file" in example.mime:
                continue
            if isinstance(example.value, list):
                fields.append((key, ",".join(stringify(item) for item in example.value)))
            elif example.value:
                fields.append((key, stringify(example.value)))
        return FetchBody(method=method, body=FormUrlEncoded(fields=fields))

    first = next(iter(examples.values()))

    if mime_types.is_multipart(name):
        parts: list[tuple[str, Any]] = []
        for key, value in first.value.items():
            if isinstance(value, list):
                parts.append((key, ",".join(stringify(item) for item in value)))
            elif is_file_like(value):
                parts.append((key, value))
            else:
                parts.append((key, stringify(value)))
        return FetchBody(method=method, body=MultipartForm(fields=parts))

    if mime_types.is_binary(name) or mime_types.is_textual(name):
        return FetchBody(method=method, body=first.value)

    logger.debug("No body rendered for media type %s", name)
    return FetchBody(method=method)


def is_file_like(value: Any) -> bool:
    """Return True for objects shaped like an uploaded file (``read`` and ``name``)."""
    return callable(getattr(value, "read", None)) and isinstance(
        getattr(value, "name", None), str
    )
