"""Extract renderable operations from an OpenAPI 3.x document.

This module walks a ``$ref``-resolved document and builds one
:class:`~reqsnip.models.Operation` per path + HTTP method, carrying exactly
what the snippet renderers need: the server URL, parameters with their
example values, the credentials to inject, and example request bodies.

The public entry points are :func:`extract_operations` and
:func:`find_operation`. Internally:

* ``_server_url`` -- first server (operation, path, then document level) with
  ``{variable}`` defaults substituted.
* ``_merge_parameters`` / ``_extract_parameters`` -- path-level parameters
  overridden by operation-level ones sharing ``name`` and ``in``.
* ``_extract_security`` -- the first security requirement mapped onto
  header/query credentials.
* ``_extract_request_body`` -- media types in declaration order with their
  examples, generating one from the schema when none is given.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from reqsnip import mime_types
from reqsnip.exceptions import OperationNotFoundError
from reqsnip.models import (
    ExampleFile,
    HTTPMethod,
    MediaContent,
    MediaType,
    MediaTypeExample,
    Operation,
    Parameter,
    ParameterLocation,
    ParameterSchema,
    ParameterStyle,
    SecurityScheme,
)
from reqsnip.parser.resolver import resolve_refs
from reqsnip.parser.sampler import sample_from_schema, schema_type

logger = logging.getLogger(__name__)

_HTTP_METHODS = tuple(m.value for m in HTTPMethod)

AUTHORIZATION_HEADER = "Authorization"


def extract_operations(
    raw_spec: dict[str, Any],
    credentials: Optional[dict[str, str]] = None,
    server_url: Optional[str] = None,
) -> list[Operation]:
    """Build an :class:`~reqsnip.models.Operation` for every path + method.

    Args:
        raw_spec: The document as returned by
            :func:`~reqsnip.parser.loader.load_spec`; ``$ref`` pointers are
            resolved here.
        credentials: Values to show for security schemes, keyed by scheme
            name. Schemes without an entry get a ``<scheme-name>``
            placeholder.
        server_url: Overrides every server URL declared in the document.

    Returns:
        Operations in document order (paths, then methods in
        :class:`~reqsnip.models.HTTPMethod` order).

    Example::

        operations = extract_operations(load_spec("petstore.yaml"))
        for op in operations:
            print(op.method.value.upper(), op.path)
    """
    spec = resolve_refs(raw_spec)
    credentials = credentials or {}
    schemes = (spec.get("components") or {}).get("securitySchemes") or {}
    global_security = spec.get("security") or []
    operations: list[Operation] = []

    for path, path_item in (spec.get("paths") or {}).items():
        if not isinstance(path_item, dict):
            continue
        path_params = path_item.get("parameters") or []

        for method in _HTTP_METHODS:
            operation = path_item.get(method)
            if not isinstance(operation, dict):
                continue

            security = operation.get("security")
            if security is None:
                security = global_security

            operations.append(
                Operation(
                    method=method,
                    path=path,
                    server_url=server_url
                    if server_url is not None
                    else _server_url(spec, path_item, operation),
                    parameters=_extract_parameters(
                        _merge_parameters(path_params, operation.get("parameters") or [])
                    ),
                    security=_extract_security(security, schemes, credentials),
                    request_body=_extract_request_body(operation.get("requestBody")),
                    operation_id=operation.get("operationId"),
                    summary=operation.get("summary"),
                )
            )

    return operations


def find_operation(operations: list[Operation], method: str, path: str) -> Operation:
    """Return the operation declared for *method* and *path*.

    Raises:
        OperationNotFoundError: If no operation matches.
    """
    wanted = method.lower()
    for operation in operations:
        if operation.method.value == wanted and operation.path == path:
            return operation
    raise OperationNotFoundError(f"No operation {method.upper()} {path} in spec")


def _server_url(spec: dict[str, Any], path_item: dict[str, Any], operation: dict[str, Any]) -> str:
    """The most specific first server, with variables set to their defaults."""
    servers = operation.get("servers") or path_item.get("servers") or spec.get("servers") or []
    if not servers or not isinstance(servers[0], dict):
        return ""

    server = servers[0]
    url = str(server.get("url", ""))
    for name, variable in (server.get("variables") or {}).items():
        if isinstance(variable, dict) and "default" in variable:
            url = url.replace("{" + name + "}", str(variable["default"]))
    return url


def _merge_parameters(
    path_params: list[dict[str, Any]],
    op_params: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Path-level parameters not overridden by ``(name, in)``, then operation-level ones."""
    overridden = {(param.get("name"), param.get("in")) for param in op_params}
    merged = [
        param for param in path_params if (param.get("name"), param.get("in")) not in overridden
    ]
    merged.extend(op_params)
    return merged


def _extract_parameters(params_list: list[dict[str, Any]]) -> list[Parameter]:
    """Convert raw parameter objects, skipping unknown ``in`` locations.

    A parameter declared with ``content`` takes its schema and example from
    the first media type and records it as the serialization mime.
    """
    parameters: list[Parameter] = []

    for param in params_list:
        try:
            location = ParameterLocation(param.get("in", "query"))
        except ValueError:
            logger.debug("Skipping parameter %r with location %r", param.get("name"), param.get("in"))
            continue

        schema = param.get("schema") or {}
        example = param.get("example")
        serialization_mime = None
        content = param.get("content")
        if isinstance(content, dict) and content:
            serialization_mime, media = next(iter(content.items()))
            media = media or {}
            schema = media.get("schema") or {}
            if example is None:
                example = media.get("example")
        if example is None:
            example = schema.get("example")

        examples = None
        if isinstance(param.get("examples"), dict):
            examples = [
                item["value"]
                for item in param["examples"].values()
                if isinstance(item, dict) and "value" in item
            ]

        parameters.append(
            Parameter(
                name=param.get("name", ""),
                location=location,
                required=True if location == ParameterLocation.PATH else param.get("required", False),
                description=param.get("description"),
                example=example,
                examples=examples,
                schema=ParameterSchema(
                    type=schema_type(schema) or "string",
                    format=schema.get("format"),
                    default=schema.get("default"),
                    enum=schema.get("enum"),
                ),
                style=_style(param.get("style")),
                explode=param.get("explode"),
                serialization_mime=serialization_mime,
            )
        )

    return parameters


def _style(value: Any) -> Optional[ParameterStyle]:
    try:
        return ParameterStyle(value) if value is not None else None
    except ValueError:
        return None


def _extract_security(
    requirements: list[dict[str, Any]],
    schemes: dict[str, Any],
    credentials: dict[str, str],
) -> list[SecurityScheme]:
    """Map the first security requirement onto credentials to inject.

    ``apiKey`` schemes in a header or query string are injected as declared;
    ``http`` bearer and basic schemes become an ``Authorization`` header.
    Cookie API keys, OAuth2, and OpenID Connect are skipped.
    """
    if not requirements or not isinstance(requirements[0], dict):
        return []

    result: list[SecurityScheme] = []
    for scheme_name in requirements[0]:
        scheme = schemes.get(scheme_name)
        if not isinstance(scheme, dict):
            logger.debug("Security scheme %r is not declared", scheme_name)
            continue

        value = credentials.get(scheme_name) or f"<{scheme_name}>"
        kind = scheme.get("type")

        if kind == "apiKey" and scheme.get("in") in ("header", "query"):
            result.append(
                SecurityScheme(
                    name=scheme.get("name") or scheme_name,
                    location=scheme["in"],
                    display_name=value,
                )
            )
        elif kind == "http" and str(scheme.get("scheme", "")).lower() in ("bearer", "basic"):
            prefix = str(scheme["scheme"]).capitalize()
            result.append(
                SecurityScheme(
                    name=AUTHORIZATION_HEADER,
                    location=ParameterLocation.HEADER,
                    display_name=f"{prefix} {value}",
                )
            )
        else:
            logger.debug("Skipping unsupported security scheme %r (%s)", scheme_name, kind)

    return result


def _extract_request_body(body: Any) -> Optional[MediaContent]:
    if not isinstance(body, dict):
        return None

    media_types = []
    for name, media in (body.get("content") or {}).items():
        examples = _media_examples(name, media if isinstance(media, dict) else {})
        media_types.append(MediaType(name=name, examples=examples or None))
    return MediaContent(media_types=media_types)


def _media_examples(name: str, media: dict[str, Any]) -> dict[str, MediaTypeExample]:
    """Collect the example values of one media type.

    Urlencoded bodies are split into one example per form field so each
    field can carry its own mime; binary examples become
    :class:`~reqsnip.models.ExampleFile` objects.
    """
    schema = media.get("schema") or {}
    values: dict[str, Any]
    if isinstance(media.get("examples"), dict):
        values = {
            key: example["value"]
            for key, example in media["examples"].items()
            if isinstance(example, dict) and "value" in example
        }
    elif "example" in media:
        values = {"default": media["example"]}
    elif schema:
        values = {"default": sample_from_schema(schema)}
    else:
        return {}

    if not values:
        return {}

    properties = schema.get("properties") or {}

    if mime_types.is_form_urlencoded(name):
        form = next(iter(values.values()))
        if not isinstance(form, dict):
            return {}
        encoding = media.get("encoding") or {}
        return {
            field: MediaTypeExample(
                mime=_field_mime(properties.get(field), encoding.get(field)), value=value
            )
            for field, value in form.items()
        }

    if mime_types.is_binary(name):
        return {
            key: MediaTypeExample(mime=name, value=_example_file(value, "file"))
            for key, value in values.items()
        }

    if mime_types.is_multipart(name):
        values = {
            key: _with_files(value, properties) if isinstance(value, dict) else value
            for key, value in values.items()
        }

    return {key: MediaTypeExample(mime=name, value=value) for key, value in values.items()}


def _is_binary_schema(schema: Any) -> bool:
    return isinstance(schema, dict) and schema.get("format") in ("binary", "base64")


def _field_mime(schema: Any, encoding: Any) -> str:
    if isinstance(encoding, dict) and encoding.get("contentType"):
        return str(encoding["contentType"])
    if _is_binary_schema(schema):
        return mime_types.FILE_FIELD
    return "text/plain"


def _example_file(value: Any, fallback: str) -> Any:
    if isinstance(value, ExampleFile):
        return value
    return ExampleFile(name=value if isinstance(value, str) and value else fallback)


def _with_files(form: dict[str, Any], properties: dict[str, Any]) -> dict[str, Any]:
    """Replace the values of binary multipart properties with file objects."""
    return {
        field: _example_file(value, field) if _is_binary_schema(properties.get(field)) else value
        for field, value in form.items()
    }
