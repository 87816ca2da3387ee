"""Render a resolved request as a ``curl`` command line.

The command is emitted as one shell invocation split over several lines with
backslash-newline continuations::

    curl -i -X POST "https://example.com/pet/123?name=Bob" \\
     -H "Content-Type: application/json" \\
     -H "Accept: application/json" \\
     -d '{"id":"5678","foo":"bar"}' \\

Fragments are only emitted when non-empty, so a bare GET is a single line.
"""

from __future__ import annotations

import json
import re
from typing import Any

from reqsnip.models import FormUrlEncoded, MultipartForm, Operation, ResolvedRequest
from reqsnip.renderers.base import DEFAULT_BASE_HREF, absolute_url, escape_single_quotes
from reqsnip.request import is_file_like, resolve_request
from reqsnip.serialization import to_json_compatible

NEW_LINE = "\\\n"

# A non-comma character followed by a comma marks a list-like form value.
_MULTIPLE_RE = re.compile(r"([^,],)", re.MULTILINE)


def render_curl(operation: Operation, base_href: str = DEFAULT_BASE_HREF) -> str:
    """Resolve *operation* and render it as a ``curl`` command."""
    return format_curl(resolve_request(operation), base_href)


def format_curl(resolved: ResolvedRequest, base_href: str = DEFAULT_BASE_HREF) -> str:
    """Render an already resolved request as a ``curl`` command.

    Args:
        resolved: The request triple from
            :func:`~reqsnip.request.resolve_request`.
        base_href: Base URL that a relative ``full_url`` is resolved against.

    Returns:
        The command text.
    """
    url = absolute_url(resolved.url.full_url, base_href)
    command = f'curl -i -X {resolved.body.method} "{url}" {NEW_LINE}'

    headers = f" {NEW_LINE}".join(
        f' -H "{key}: {value}"' for key, value in resolved.header_items
    )
    if headers:
        headers = f"{headers} {NEW_LINE}"

    cookies = ""
    if resolved.url.cookie_params:
        cookies = f' -c "{resolved.url.cookie_string}" {NEW_LINE}'

    data, form = _body_clauses(resolved.body.body)

    return "".join([command, headers, cookies, data, form])


def _body_clauses(body: Any) -> tuple[str, str]:
    """Return the ``(data, form)`` fragments for *body*; at most one is set."""
    if isinstance(body, FormUrlEncoded):
        return f" -d {body.encode()} {NEW_LINE}", ""
    if is_file_like(body):
        return f" --data-binary @{body.name} {NEW_LINE}", ""
    if isinstance(body, MultipartForm):
        return "", f" {NEW_LINE}".join(_form_fields(body))
    if not body:
        return "", ""

    data = ""
    if isinstance(body, (dict, list)):
        try:
            payload = json.dumps(
                to_json_compatible(body), separators=(',', ':'), ensure_ascii=False
            )
            data = f" -d '{payload}' {NEW_LINE}"
        except (TypeError, ValueError):
            body = str(body)
    if not data:
        data = f" -d '{escape_single_quotes(body)}' {NEW_LINE}"
    return data, ""


def _form_fields(form: MultipartForm) -> list[str]:
    fields: list[str] = []
    for key, value in form.fields:
        if is_file_like(value):
            fields.append(f' -F "{key}=@{value.name}"')
            continue

        multiple = _MULTIPLE_RE.findall(value)
        if multiple:
            fields.extend(f'-F "{key}[]={one}"' for one in multiple)
        else:
            fields.append(f' -F "{key}={value}"')
    return fields
