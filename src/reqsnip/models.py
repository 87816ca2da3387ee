"""Canonical Pydantic models shared across all reqsnip modules.

This is the single source of truth for data shapes in the project. The models
fall into three groups:

**Operation description** -- the declarative input every renderer consumes,
produced by :mod:`reqsnip.parser` or built directly by a host:
    :class:`HTTPMethod`, :class:`ParameterLocation`, :class:`ParameterStyle`,
    :class:`ParameterSchema`, :class:`Parameter`, :class:`SecurityScheme`,
    :class:`MediaTypeExample`, :class:`MediaType`, :class:`MediaContent`,
    :class:`ExampleFile`, and :class:`Operation`.

**Resolved request** -- the ephemeral output of request assembly, computed
fresh for every render and never mutated afterwards:
    :class:`FetchUrl`, :class:`FormUrlEncoded`, :class:`MultipartForm`,
    :class:`FetchBody`, and :class:`ResolvedRequest`.

**Configuration** -- serialised as JSON in the user's config directory:
    :class:`SnippetConfig`.

All models use Pydantic v2. Fields whose natural name collides with a
``BaseModel`` attribute (``schema``) are declared with a trailing underscore
and an alias, so they can be populated by either name.
"""

from __future__ import annotations

import enum
from typing import Any, Optional
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator


# --- Operation description ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised by OpenAPI 3.x path-item objects."""

    GET = "get"
    POST = "post"
    PUT = "put"
    PATCH = "patch"
    DELETE = "delete"
    HEAD = "head"
    OPTIONS = "options"
    TRACE = "trace"


class ParameterLocation(str, enum.Enum):
    """Locations where an API parameter can appear, per OpenAPI ``in`` field."""

    QUERY = "query"
    HEADER = "header"
    PATH = "path"
    COOKIE = "cookie"


class ParameterStyle(str, enum.Enum):
    """Serialization styles from the OpenAPI *Parameter Object*."""

    MATRIX = "matrix"
    LABEL = "label"
    FORM = "form"
    SIMPLE = "simple"
    SPACE_DELIMITED = "spaceDelimited"
    PIPE_DELIMITED = "pipeDelimited"
    DEEP_OBJECT = "deepObject"


class ParameterSchema(BaseModel):
    """The subset of a parameter's JSON Schema that affects example values."""

    type: str = "string"
    format: Optional[str] = None
    default: Any = None
    enum: Optional[list[Any]] = None


class Parameter(BaseModel):
    """A single documented operation parameter.

    ``example`` is the singular example value; ``examples`` holds the values of
    an OpenAPI ``examples`` map in declaration order. Header parameters use
    ``examples`` to produce a multi-valued header when no singular example is
    present.

    ``serialization_mime`` is set when the parameter was declared with
    ``content`` instead of ``schema``; the value is then serialized as that
    media type (JSON) rather than by style.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    location: ParameterLocation
    required: bool = False
    description: Optional[str] = None
    example: Any = None
    examples: Optional[list[Any]] = None
    schema_: ParameterSchema = Field(default_factory=ParameterSchema, alias="schema")
    style: Optional[ParameterStyle] = None
    explode: Optional[bool] = None
    serialization_mime: Optional[str] = None

    @property
    def effective_style(self) -> ParameterStyle:
        """The declared style, or the OpenAPI default for the location."""
        if self.style is not None:
            return self.style
        if self.location in (ParameterLocation.QUERY, ParameterLocation.COOKIE):
            return ParameterStyle.FORM
        return ParameterStyle.SIMPLE

    @property
    def effective_explode(self) -> bool:
        """The declared explode flag; defaults to ``True`` only for ``form``."""
        if self.explode is not None:
            return self.explode
        return self.effective_style == ParameterStyle.FORM


class SecurityScheme(BaseModel):
    """A configured credential to inject into the rendered request.

    ``name`` is the header or query parameter name the credential travels in;
    ``display_name`` is the literal value shown in the snippet (usually a
    placeholder rather than a real secret).
    """

    name: str
    location: ParameterLocation
    display_name: str

    @field_validator("location")
    @classmethod
    def _header_or_query(cls, value: ParameterLocation) -> ParameterLocation:
        if value not in (ParameterLocation.HEADER, ParameterLocation.QUERY):
            raise ValueError("security schemes are injected in a header or query only")
        return value


class ExampleFile(BaseModel):
    """A file-like example value for binary and multipart payloads.

    Renderers only rely on ``name`` (``--data-binary @name``); ``read()`` is
    provided so the object satisfies the usual file protocol.
    """

    name: str
    content: bytes = b""

    def read(self) -> bytes:
        return self.content


class MediaTypeExample(BaseModel):
    """One example payload for a request-body media type."""

    mime: str
    value: Any = None


class MediaType(BaseModel):
    """A request-body media type with its examples, keyed by example name."""

    name: str
    examples: Optional[dict[str, MediaTypeExample]] = None


class MediaContent(BaseModel):
    """The request-body media types of an operation, in declaration order."""

    media_types: list[MediaType] = Field(default_factory=list)


class Operation(BaseModel):
    """Everything needed to render one request snippet.

    The path always starts with ``/``; a path declared without one is
    normalised on construction.
    """

    method: HTTPMethod
    path: str
    server_url: str = ""
    parameters: list[Parameter] = Field(default_factory=list)
    security: list[SecurityScheme] = Field(default_factory=list)
    request_body: Optional[MediaContent] = None
    operation_id: Optional[str] = None
    summary: Optional[str] = None

    @field_validator("method", mode="before")
    @classmethod
    def _lower_method(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value

    @field_validator("path")
    @classmethod
    def _leading_slash(cls, value: str) -> str:
        return value if value.startswith("/") else f"/{value}"


# --- Resolved request ---


class FetchUrl(BaseModel):
    """The URL half of a resolved request.

    ``base_fetch_url`` is server plus substituted path; ``full_url`` adds the
    query string and any query-located credentials. Query and cookie pairs
    are kept as ordered, possibly repeated, ``(key, value)`` tuples.
    """

    model_config = ConfigDict(frozen=True)

    full_url: str
    base_fetch_url: str
    query_params: list[tuple[str, str]] = Field(default_factory=list)
    cookie_params: list[tuple[str, str]] = Field(default_factory=list)

    @property
    def cookie_string(self) -> str:
        """Cookie pairs in ``application/x-www-form-urlencoded`` form."""
        return urlencode(self.cookie_params)


class FormUrlEncoded(BaseModel):
    """An ``application/x-www-form-urlencoded`` body as ordered fields."""

    model_config = ConfigDict(frozen=True)

    fields: list[tuple[str, str]] = Field(default_factory=list)

    def encode(self) -> str:
        return urlencode(self.fields)


class MultipartForm(BaseModel):
    """A ``multipart/form-data`` body; values are strings or file-like objects."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    fields: list[tuple[str, Any]] = Field(default_factory=list)


class FetchBody(BaseModel):
    """The method and (optional) body of a resolved request."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    method: str
    body: Any = None


class ResolvedRequest(BaseModel):
    """The resolved request triple consumed uniformly by every renderer."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    url: FetchUrl
    headers: httpx.Headers
    body: FetchBody

    @property
    def header_items(self) -> list[tuple[str, str]]:
        """Header entries in insertion order with their original name casing."""
        encoding = self.headers.encoding
        return [
            (key.decode(encoding), value.decode(encoding))
            for key, value in self.headers.raw
        ]


# --- Configuration ---


class SnippetConfig(BaseModel):
    """User and project configuration for the ``reqsnip`` CLI.

    Loaded by :func:`~reqsnip.config.resolve_config`. ``credentials`` maps a
    security scheme name (as declared under ``components/securitySchemes``) to
    the value shown in snippets; values may be literals or ``env:VAR`` /
    ``file:PATH`` sources.
    """

    model_config = ConfigDict(extra="ignore")

    base_href: str = Field(
        default="http://localhost/",
        description="Base URL that relative server URLs are resolved against",
    )
    target: str = Field(default="curl", description="Default snippet target")
    server_url: Optional[str] = Field(
        default=None, description="Override the spec's first server URL"
    )
    credentials: dict[str, str] = Field(default_factory=dict)
