"""reqsnip -- Render copy-pasteable request snippets from OpenAPI operations.

This package turns a declarative description of a single HTTP operation
(method, path, parameters, security schemes and an example request body) into
literal source text for two targets: a ``curl`` command line and a Python
``requests`` script. Nothing is ever sent over the network.

Typical usage::

    from reqsnip import extract_operations, find_operation, load_spec, render_curl

    operations = extract_operations(load_spec("petstore.yaml"))
    print(render_curl(find_operation(operations, "get", "/pets/{petId}")))

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the package.
    serialization: Parameter value serialization per OpenAPI style.
    objects: Small generic dict helpers.
    request: The shared request-assembly pipeline.
    renderers: The curl and Python snippet renderers.
    parser: OpenAPI loading, ``$ref`` resolution, and operation extraction.
    config: XDG-aware configuration resolution.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "0.1.0"

from reqsnip.models import Operation  # noqa: E402
from reqsnip.parser import extract_operations, find_operation, load_spec  # noqa: E402
from reqsnip.renderers import (  # noqa: E402
    RendererKind,
    render_curl,
    render_python,
    render_snippet,
)

__all__ = [
    "Operation",
    "RendererKind",
    "extract_operations",
    "find_operation",
    "load_spec",
    "render_curl",
    "render_python",
    "render_snippet",
]
