"""Inline internal ``$ref`` pointers of an OpenAPI document.

Only references into the same document (``#/...``) are followed. A reference
that is already being expanded higher up the current branch is left in place,
so self-referencing schemas terminate; the example sampler treats such a
leftover ``$ref`` as an empty object.
"""

from __future__ import annotations

from typing import Any

from reqsnip.exceptions import SpecParseError


def resolve_refs(spec: dict[str, Any]) -> dict[str, Any]:
    """Return a new document with every resolvable ``$ref`` replaced by its target.

    Args:
        spec: The raw document from :func:`~reqsnip.parser.loader.load_spec`.

    Raises:
        SpecParseError: For external references or pointers that do not exist.
    """
    return _expand(spec, spec, frozenset())


def lookup_pointer(ref: str, root: dict[str, Any]) -> Any:
    """Follow the JSON Pointer in *ref* (``#/components/schemas/Pet``) through *root*."""
    if not ref.startswith("#/"):
        raise SpecParseError(f"External $ref not supported: {ref}")

    node: Any = root
    for raw_segment in ref[2:].split("/"):
        segment = raw_segment.replace("~1", "/").replace("~0", "~")
        if isinstance(node, dict) and segment in node:
            node = node[segment]
        elif isinstance(node, list) and segment.isdigit() and int(segment) < len(node):
            node = node[int(segment)]
        else:
            raise SpecParseError(f"Cannot resolve $ref '{ref}': no '{segment}' at that path")
    return node


def _expand(node: Any, root: dict[str, Any], active: frozenset[str]) -> Any:
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str):
            if ref in active:
                return dict(node)
            return _expand(lookup_pointer(ref, root), root, active | {ref})
        return {key: _expand(value, root, active) for key, value in node.items()}
    if isinstance(node, list):
        return [_expand(item, root, active) for item in node]
    return node
