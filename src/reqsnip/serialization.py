"""Serialize parameter example values according to their OpenAPI style.

Two public functions cover the two uses the request pipeline has:

* :func:`serialize` -- the readable (not percent-encoded) wire fragment for a
  value, ``key=value`` for query and cookie parameters (``key=a&key=b`` when
  an array or object is exploded), the bare value for path and header
  parameters.
* :func:`serialize_parameter_value` -- the same fragment percent-encoded,
  used when substituting a path parameter into the URL template.

Style table (``name=tags``, value ``["a", "b"]``)::

    form            explode   tags=a&tags=b
    form            -         tags=a,b
    spaceDelimited  -         tags=a b
    pipeDelimited   -         tags=a|b
    simple          either    a,b
    label           explode   .a.b
    label           -         .a,b
    matrix          explode   ;tags=a;tags=b
    matrix          -         ;tags=a,b

Objects follow the same table with ``key=value`` pairs (explode) or flattened
``key,value`` lists; ``deepObject`` renders ``name[key]=value`` pairs.
Scalars are stringified the way a browser would show them (``true``,
``false``, ``null``, ``1`` for ``1.0``).
"""

from __future__ import annotations

import json
import math
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import quote

from reqsnip.models import Parameter, ParameterLocation, ParameterStyle

Encoder = Callable[[str], str]


def stringify(value: Any) -> str:
    """Render a scalar the way JavaScript's ``String()`` does."""
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    return str(value)


def to_json_compatible(value: Any, _ancestors: frozenset[int] = frozenset()) -> Any:
    """Replace non-finite floats with ``None``, as ``JSON.stringify`` does.

    Self-referencing containers are returned unchanged so that the JSON
    encoder still reports the cycle.
    """
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (dict, list)):
        if id(value) in _ancestors:
            return value
        ancestors = _ancestors | {id(value)}
        if isinstance(value, dict):
            return {key: to_json_compatible(item, ancestors) for key, item in value.items()}
        return [to_json_compatible(item, ancestors) for item in value]
    return value


def encode_uri_component(text: str) -> str:
    """Percent-encode *text* with ``encodeURIComponent`` rules."""
    return quote(text, safe="!~*'()")


def _identity(text: str) -> str:
    return text


def serialize(parameter: Parameter, value: Any) -> str:
    """Return the decoded wire fragment for *value*.

    Args:
        parameter: The parameter whose style, explode flag, and location
            decide the encoding.
        value: The example value (scalar, list, or dict).

    Returns:
        ``key=value`` style text for query/cookie parameters, the bare
        serialized value for path/header parameters.
    """
    return _serialize(parameter, value, _identity)


def serialize_parameter_value(parameter: Parameter, value: Any) -> str:
    """Return the percent-encoded fragment for *value*.

    Used for path parameters, whose result is substituted directly into the
    URL template.
    """
    return _serialize(parameter, value, encode_uri_component)


def _serialize(parameter: Parameter, value: Any, encode: Encoder) -> str:
    if parameter.serialization_mime and "json" in parameter.serialization_mime:
        text = encode(json.dumps(value, separators=(",", ":"), ensure_ascii=False))
        if parameter.location in (ParameterLocation.QUERY, ParameterLocation.COOKIE):
            return f"{parameter.name}={text}"
        return text

    if parameter.location in (ParameterLocation.QUERY, ParameterLocation.COOKIE):
        return _serialize_keyed(parameter, value, encode)
    return _serialize_unkeyed(parameter, value, encode)


def _pairs(value: Mapping[str, Any], encode: Encoder) -> list[tuple[str, str]]:
    return [(encode(str(key)), encode(stringify(item))) for key, item in value.items()]


def _serialize_keyed(parameter: Parameter, value: Any, encode: Encoder) -> str:
    """Query and cookie styles: ``form``, the delimited styles, ``deepObject``."""
    name = parameter.name
    style = parameter.effective_style
    explode = parameter.effective_explode

    if isinstance(value, Mapping):
        pairs = _pairs(value, encode)
        if style == ParameterStyle.DEEP_OBJECT:
            return "&".join(f"{name}[{key}]={item}" for key, item in pairs)
        if explode:
            return "&".join(f"{key}={item}" for key, item in pairs)
        return f"{name}=" + ",".join(f"{key},{item}" for key, item in pairs)

    if isinstance(value, (list, tuple)):
        items = [encode(stringify(item)) for item in value]
        if explode and items:
            return "&".join(f"{name}={item}" for item in items)
        delimiter = {
            ParameterStyle.SPACE_DELIMITED: encode(" "),
            ParameterStyle.PIPE_DELIMITED: encode("|"),
        }.get(style, ",")
        return f"{name}=" + delimiter.join(items)

    return f"{name}={encode(stringify(value))}"


def _serialize_unkeyed(parameter: Parameter, value: Any, encode: Encoder) -> str:
    """Path and header styles: ``simple``, ``label``, ``matrix``."""
    name = parameter.name
    style = parameter.effective_style
    explode = parameter.effective_explode

    if isinstance(value, Mapping):
        pairs = _pairs(value, encode)
        if explode:
            parts = [f"{key}={item}" for key, item in pairs]
        else:
            parts = [f"{key},{item}" for key, item in pairs]
        if style == ParameterStyle.LABEL:
            return "." + ("." if explode else ",").join(parts)
        if style == ParameterStyle.MATRIX:
            if explode:
                return "".join(f";{part}" for part in parts)
            return f";{name}=" + ",".join(parts)
        return ",".join(parts)

    if isinstance(value, (list, tuple)):
        items = [encode(stringify(item)) for item in value]
        if style == ParameterStyle.LABEL:
            return "." + ("." if explode else ",").join(items)
        if style == ParameterStyle.MATRIX:
            if explode:
                return "".join(f";{name}={item}" for item in items)
            return f";{name}=" + ",".join(items)
        return ",".join(items)

    text = encode(stringify(value))
    if style == ParameterStyle.LABEL:
        return f".{text}"
    if style == ParameterStyle.MATRIX:
        return f";{name}={text}"
    return text
