"""Render a resolved request as a Python ``requests`` script.

The script is assembled from sections, each emitted only when non-empty and
followed by a blank line::

    import requests

    url = "https://example.com/pet/123"

    headers = {...}

    params = {...}

    cookies = {...}

    payload = ...

    response = requests.request("POST", url, data=payload, headers=headers, params=params, cookies=cookies)

    print(response.status_code)
    print(response.json())

Mappings are pretty-printed with two-space indentation; repeated header,
query, and cookie names collapse into lists.
"""

from __future__ import annotations

import json
from typing import Any

from reqsnip import mime_types
from reqsnip.models import FormUrlEncoded, MultipartForm, Operation, ResolvedRequest
from reqsnip.objects import group_params_by_key, is_object_empty
from reqsnip.renderers.base import DEFAULT_BASE_HREF, absolute_url, escape_single_quotes
from reqsnip.request import is_file_like, resolve_request
from reqsnip.serialization import to_json_compatible

NEW_LINE = "\n"
CLIENT = "requests"


def render_python(operation: Operation, base_href: str = DEFAULT_BASE_HREF) -> str:
    """Resolve *operation* and render it as a Python ``requests`` script."""
    return format_python(resolve_request(operation), base_href)


def format_python(resolved: ResolvedRequest, base_href: str = DEFAULT_BASE_HREF) -> str:
    """Render an already resolved request as a Python ``requests`` script.

    The ``url`` line carries the base fetch URL; the query string goes into
    ``params`` instead.

    Args:
        resolved: The request triple from
            :func:`~reqsnip.request.resolve_request`.
        base_href: Base URL that a relative URL is resolved against.

    Returns:
        The script text.
    """
    imports = f"import {CLIENT}{NEW_LINE}{NEW_LINE}"
    url_line = f'url = "{absolute_url(resolved.url.base_fetch_url, base_href)}"{NEW_LINE}{NEW_LINE}'

    headers = ""
    grouped_headers = group_params_by_key(resolved.header_items)
    if not is_object_empty(grouped_headers):
        headers = _section("headers", _pretty(grouped_headers))

    params = ""
    if resolved.url.query_params:
        params = _section("params", _pretty(group_params_by_key(resolved.url.query_params)))

    cookies = ""
    if resolved.url.cookie_params:
        cookies = _section("cookies", _pretty(group_params_by_key(resolved.url.cookie_params)))

    payload = ""
    literal = _payload_literal(resolved.body.body)
    if literal:
        payload = _section("payload", literal)

    arguments = [
        f'"{resolved.body.method}"',
        "url",
        "data=payload" if payload else "",
        "headers=headers" if headers else "",
        "params=params" if params else "",
        "cookies=cookies" if cookies else "",
    ]
    call = f"response = {CLIENT}.request({', '.join(filter(None, arguments))}){NEW_LINE}{NEW_LINE}"

    accept = resolved.headers.get("accept", "")
    logging_lines = f"print(response.status_code){NEW_LINE}{_response_print(accept)}"

    return "".join([imports, url_line, headers, params, cookies, payload, call, logging_lines])


def _section(name: str, literal: str) -> str:
    return f"{name} = {literal}{NEW_LINE}{NEW_LINE}"


def _pretty(value: Any) -> str:
    return json.dumps(to_json_compatible(value), indent=2, ensure_ascii=False)


def _payload_literal(body: Any) -> str:
    """Return the right-hand side of the ``payload =`` line, or ``""`` for no body."""
    if isinstance(body, FormUrlEncoded):
        return f'"{body.encode()}"'
    if isinstance(body, MultipartForm):
        fields = [
            (key, value.name if is_file_like(value) else value) for key, value in body.fields
        ]
        return _pretty(group_params_by_key(fields))
    if is_file_like(body):
        return f'open("{body.name}", "rb")'
    if not body:
        return ""

    if isinstance(body, (dict, list)):
        try:
            return _pretty(body)
        except (TypeError, ValueError):
            body = str(body)
    return f"'{escape_single_quotes(body)}'"


def _response_print(accept: str) -> str:
    """Pick how the script prints the response body from the ``Accept`` header."""
    if accept == mime_types.APPLICATION_JSON:
        return "print(response.json())"
    if accept == mime_types.APPLICATION_OCTET_STREAM:
        return "print(response.content)"
    return "print(response.text)"
