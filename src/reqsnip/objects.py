"""Small generic helpers over nested dicts.

:func:`object_set` is the only function here that mutates its argument; the
snippet pipeline itself never calls it.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Any, Union

Path = Union[str, list[str]]

_EMPTY_STRINGS = frozenset({"undefined", "null", "NaN", ""})


def _segments(path: Path) -> list[str]:
    return path.split(".") if isinstance(path, str) else list(path)


def object_has(root: Any, path: Path) -> bool:
    """Return True if every segment of *path* resolves through nested mappings.

    Args:
        root: The object to look into.
        path: A dot-delimited string (``"a.b.c"``) or a list of segments.

    Example::

        >>> object_has({"a": {"b": 1}}, "a.b")
        True
        >>> object_has({"a": {"b": 1}}, ["a", "b", "c"])
        False
    """
    current = root
    for key in _segments(path):
        if not isinstance(current, Mapping) or key not in current:
            return False
        current = current[key]
    return True


def object_set(root: dict[str, Any], path: Path, value: Any) -> None:
    """Assign *value* at *path* inside *root*, creating missing dicts on the way."""
    keys = _segments(path)
    current = root
    for key in keys[:-1]:
        if current.get(key) is None:
            current[key] = {}
        current = current[key]
    current[keys[-1]] = value


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value in _EMPTY_STRINGS
    return isinstance(value, float) and math.isnan(value)


def compact(obj: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of *obj* without empty values.

    ``None``, NaN, and the strings ``"undefined"``, ``"null"``, ``"NaN"`` and
    ``""`` are dropped. Nested mappings are compacted recursively; lists are
    kept as they are.
    """
    return {
        key: compact(value) if isinstance(value, Mapping) else value
        for key, value in obj.items()
        if not _is_empty(value)
    }


def is_object_empty(obj: Any) -> bool:
    """Return True only for an empty plain ``dict``."""
    return type(obj) is dict and not obj


def group_params_by_key(entries: Iterable[tuple[str, Any]]) -> dict[str, Any]:
    """Group ``(key, value)`` pairs, collecting repeated keys into lists.

    Example::

        >>> group_params_by_key([("a", "b"), ("a", "d"), ("c", "e")])
        {'a': ['b', 'd'], 'c': 'e'}
    """
    grouped: dict[str, Any] = {}
    for key, value in entries:
        if key not in grouped:
            grouped[key] = value
        elif isinstance(grouped[key], list):
            grouped[key] = [*grouped[key], value]
        else:
            grouped[key] = [grouped[key], value]
    return grouped
