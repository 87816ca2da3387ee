"""OpenAPI parser -- load, resolve ``$ref`` pointers, and extract operations.

Typical usage::

    from reqsnip.parser import extract_operations, load_spec, validate_openapi_version

    raw = load_spec("petstore.yaml")
    validate_openapi_version(raw)
    operations = extract_operations(raw)

Sub-modules:

* :mod:`~reqsnip.parser.loader` -- file/stdin input and format detection.
* :mod:`~reqsnip.parser.resolver` -- internal ``$ref`` inlining.
* :mod:`~reqsnip.parser.sampler` -- example generation from schemas.
* :mod:`~reqsnip.parser.extractor` -- :class:`~reqsnip.models.Operation`
  construction.
"""

from reqsnip.parser.extractor import extract_operations, find_operation
from reqsnip.parser.loader import load_spec, validate_openapi_version

__all__ = ["extract_operations", "find_operation", "load_spec", "validate_openapi_version"]
