"""Generate an example value from a JSON Schema.

Used when a request body declares a schema but no ``example``/``examples``.
Explicit ``example``, ``default``, ``enum`` and ``const`` values win over
generated ones; otherwise a placeholder of the right type is produced.
``readOnly`` properties are left out since they never appear in requests.
"""

from __future__ import annotations

from typing import Any

MAX_DEPTH = 8

_STRING_FORMATS: dict[str, str] = {
    "date": "2024-01-01",
    "date-time": "2024-01-01T00:00:00Z",
    "email": "user@example.com",
    "uuid": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
    "uri": "https://example.com",
    "hostname": "example.com",
    "ipv4": "192.0.2.1",
    "ipv6": "2001:db8::1",
    "password": "********",
    "binary": "",
    "byte": "",
}

_SCALAR_SAMPLES: dict[str, Any] = {
    "integer": 0,
    "number": 0,
    "boolean": True,
    "null": None,
}


def schema_type(schema: dict[str, Any]) -> str | None:
    """Return the schema's type, taking the first non-null entry of a 3.1 type list."""
    value = schema.get("type")
    if isinstance(value, list):
        non_null = [item for item in value if item != "null"]
        return non_null[0] if non_null else "null"
    if value is None and "properties" in schema:
        return "object"
    return value


def sample_from_schema(schema: Any, depth: int = 0) -> Any:
    """Return an example value conforming to *schema*.

    Args:
        schema: A ``$ref``-resolved JSON Schema dict.
        depth: Current nesting depth; objects and arrays deeper than
            :data:`MAX_DEPTH` are sampled as empty.
    """
    if not isinstance(schema, dict):
        return None
    if "$ref" in schema:
        return {}

    for key in ("example", "default", "const"):
        if key in schema:
            return schema[key]
    if isinstance(schema.get("examples"), list) and schema["examples"]:
        return schema["examples"][0]
    if schema.get("enum"):
        return schema["enum"][0]

    if "allOf" in schema:
        merged: dict[str, Any] = {}
        for part in schema["allOf"]:
            sample = sample_from_schema(part, depth)
            if isinstance(sample, dict):
                merged.update(sample)
        return merged
    for key in ("oneOf", "anyOf"):
        if schema.get(key):
            return sample_from_schema(schema[key][0], depth)

    kind = schema_type(schema)
    if kind == "object":
        if depth >= MAX_DEPTH:
            return {}
        return {
            name: sample_from_schema(prop, depth + 1)
            for name, prop in schema.get("properties", {}).items()
            if not (isinstance(prop, dict) and prop.get("readOnly"))
        }
    if kind == "array":
        items = schema.get("items")
        if depth >= MAX_DEPTH or not isinstance(items, dict):
            return []
        return [sample_from_schema(items, depth + 1)]
    if kind == "string":
        return _STRING_FORMATS.get(schema.get("format", ""), "string")
    return _SCALAR_SAMPLES.get(kind or "", None)
