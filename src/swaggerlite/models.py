"""Pydantic models shared across swaggerlite modules.

The models fall into two groups:

**Document models** -- typed views over pieces of the Swagger document:
    :class:`HTTPMethod`, :class:`ParameterLocation`, :class:`ParameterDef`,
    :class:`OperationTarget` and :class:`BaseURI`.

**Configuration models** -- validated client construction options:
    :class:`ClientConfig`.

The document itself stays a plain ``dict`` tree (it is arbitrary JSON);
models are only built at the seams where a fixed shape is expected.
"""

from __future__ import annotations

import enum
from typing import Any, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field


RAW_OPTIONS_KEY = "@http"
"""Reserved input key whose value is merged verbatim into the request options."""


class HTTPMethod(str, enum.Enum):
    """The HTTP verbs a Swagger 2.0 path item may declare."""

    GET = "get"
    PUT = "put"
    POST = "post"
    HEAD = "head"
    PATCH = "patch"
    DELETE = "delete"
    OPTIONS = "options"


class ParameterLocation(str, enum.Enum):
    """Values of a parameter's ``in`` field and where each one is routed."""

    QUERY = "query"
    HEADER = "header"
    PATH = "path"
    FORM_DATA = "formData"
    BODY = "body"


class ParameterDef(BaseModel):
    """A parameter definition after ``$ref`` resolution.

    ``location`` is kept as a plain string so that an unknown ``in`` value
    only fails when a value is actually routed through it.  Any other keys
    from the document (``type``, ``description``, ``schema``...) are kept in
    ``model_extra``.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str
    location: str = Field(alias="in")
    required: bool = False
    type: Optional[str] = None


class OperationTarget(NamedTuple):
    """The ``(path, method)`` pair an ``operationId`` resolves to."""

    path: str
    method: str


class BaseURI(BaseModel):
    """The scheme, host and path prefix prepended to every request path."""

    model_config = ConfigDict(frozen=True)

    scheme: str
    host: str
    path_prefix: str = ""

    def __str__(self) -> str:
        return f"{self.scheme}://{self.host}{self.path_prefix}"


class ClientConfig(BaseModel):
    """Construction options for :class:`~swaggerlite.client.SwaggerClient`.

    Any key not declared here is treated as an httpx client option (``auth``,
    ``timeout``, ``headers``, ``verify``, ``transport``...) and forwarded to
    both the sync and async httpx clients untouched.

    Example::

        ClientConfig(
            swagger="https://petstore.swagger.io/v2/swagger.json",
            scheme="https",
            timeout=10.0,
        )
    """

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    swagger: Any = Field(
        default=None,
        description="Path/URL to the document, a zero-argument loader, or the decoded document",
    )
    scheme: Optional[str] = Field(
        default=None,
        description="Scheme for requests; optional when the document allows exactly one",
    )
    host: Optional[str] = Field(default=None, description="Overrides the document's host")
    base_path: Optional[str] = Field(
        default=None,
        alias="basePath",
        description="Overrides the document's basePath",
    )
    base_url: Optional[str] = Field(
        default=None,
        description="Full base URL; when set, scheme/host/basePath are not consulted",
    )
    http_errors: bool = Field(
        default=False,
        description="Raise ResponseError subclasses for 4xx/5xx responses",
    )

    def transport_options(self) -> dict[str, Any]:
        """Return the passthrough options destined for the httpx clients."""
        return dict(self.model_extra or {})
