"""Document-driven HTTP client for Swagger 2.0 JSON services.

:class:`SwaggerClient` reads the operations and parameters from a Swagger
document and applies simple transformations to caller input to form each
request.  No code is generated: every call looks up its operation in the
document, maps the input through
:class:`~swaggerlite.request.param_mapper.ParameterMapper`, expands the path
template, and hands the result to :mod:`httpx`.

Two call shapes are supported:

* **Direct** -- ``client.request("get", "/pets/{petId}", {"petId": 7})``,
  or the per-verb shortcuts ``client.get(...)``, ``client.post(...)``...
* **Symbolic** -- ``client.execute("getPetById", {"petId": 7})``, or
  attribute-style ``client.getPetById({"petId": 7})``.

Every call has an ``_async`` twin returning an awaitable.  All document,
operation and parameter errors are raised by the call itself, before any
awaitable is created; only transport failures surface when awaiting.

Example::

    with SwaggerClient(swagger="petstore.json", scheme="https") as client:
        response = client.execute("findPetsByStatus", {"status": "available"})

    async with SwaggerClient(swagger="petstore.json") as client:
        response = await client.get_async("/pet/{petId}", {"petId": 7})
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Awaitable, Callable, Iterator, Optional

import httpx

from swaggerlite.base_uri import resolve_base_uri
from swaggerlite.client.response import raise_for_status
from swaggerlite.document.store import DocumentStore
from swaggerlite.exceptions import OperationNotFoundError
from swaggerlite.models import ClientConfig, HTTPMethod, OperationTarget
from swaggerlite.operations import OperationIndex
from swaggerlite.request.param_mapper import PATH_PARAMS_KEY, ParameterMapper
from swaggerlite.request.uri_template import expand

logger = logging.getLogger(__name__)

ASYNC_SUFFIXES = ("_async", "Async")
"""Attribute-name suffixes that select the asynchronous flavor of an operation."""

_Input = Optional[Mapping[str, Any]]

_VERBS = frozenset(m.value for m in HTTPMethod)


def split_async_suffix(name: str) -> tuple[str, bool]:
    """Strip an async suffix from *name*, reporting whether one was present.

    Example::

        >>> split_async_suffix("listPetsAsync")
        ('listPets', True)
        >>> split_async_suffix("list_pets_async")
        ('list_pets', True)
        >>> split_async_suffix("listPets")
        ('listPets', False)
    """
    for suffix in ASYNC_SUFFIXES:
        if name.endswith(suffix) and len(name) > len(suffix):
            return name[: -len(suffix)], True
    return name, False


class SwaggerClient:
    """An httpx-backed client driven by a Swagger 2.0 document.

    Construction loads and normalizes the document, computes the base URL
    once, and builds one :class:`httpx.Client` and one
    :class:`httpx.AsyncClient` sharing the passthrough options.

    Args:
        config: A prepared :class:`~swaggerlite.models.ClientConfig`.
        **options: Configuration keys (``swagger``, ``scheme``, ``host``,
            ``base_path``/``basePath``, ``base_url``, ``http_errors``) and
            any httpx client option (``auth``, ``timeout``, ``headers``,
            ``verify``, ``transport``...).  Keyword options override the
            same keys in *config*.  ``async_transport`` sets a separate
            transport for the async client.

    Raises:
        DocumentLoadError: If the document cannot be loaded or decoded.
        DocumentShapeError: If the document lacks required sections.
        InvalidConfigError: If no valid base URL can be derived.
    """

    def __init__(self, config: Optional[ClientConfig] = None, **options: Any) -> None:
        if config is None:
            config = ClientConfig.model_validate(options)
        elif options:
            config = ClientConfig.model_validate({**dict(config), **options})
        self._config = config

        self._store = DocumentStore.load(
            config.swagger, host=config.host, base_path=config.base_path
        )
        self._index = OperationIndex(self._store)
        self._mapper = ParameterMapper(self._store)
        self._base_url = resolve_base_uri(self._store, config.scheme, config.base_url)

        sync_options, async_options = _split_transport_options(config.transport_options())
        self._http = httpx.Client(base_url=self._base_url, **sync_options)
        self._async_http = httpx.AsyncClient(base_url=self._base_url, **async_options)

    # ------------------------------------------------------------------ #
    # Properties
    # ------------------------------------------------------------------ #

    @property
    def base_url(self) -> str:
        """The base URL computed at construction."""
        return self._base_url

    @property
    def store(self) -> DocumentStore:
        """The normalized document."""
        return self._store

    @property
    def config(self) -> ClientConfig:
        return self._config

    def operations(self) -> Iterator[tuple[OperationTarget, Optional[str]]]:
        """Yield ``(target, operationId)`` for every operation in the document."""
        return self._index.operations()

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def close(self) -> None:
        """Close the synchronous transport.

        The async connection pool stays open; use :meth:`aclose` or
        ``async with`` when the async flavor was used.
        """
        self._http.close()

    async def aclose(self) -> None:
        """Close both transports."""
        self._http.close()
        await self._async_http.aclose()

    def __enter__(self) -> SwaggerClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    async def __aenter__(self) -> SwaggerClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------ #
    # Symbolic execution
    # ------------------------------------------------------------------ #

    def execute(self, operation_id: str, input: _Input = None) -> httpx.Response:
        """Execute the operation identified by *operation_id*.

        Raises:
            OperationNotFoundError: If no operation has that id.
        """
        path, method = self._index.resolve(operation_id)
        return self.request(method, path, input)

    def execute_async(
        self, operation_id: str, input: _Input = None
    ) -> Awaitable[httpx.Response]:
        """Asynchronously execute the operation identified by *operation_id*."""
        path, method = self._index.resolve(operation_id)
        return self.request_async(method, path, input)

    # ------------------------------------------------------------------ #
    # Direct requests
    # ------------------------------------------------------------------ #

    def request(self, method: str, path: str = "/", input: _Input = None) -> httpx.Response:
        """Issue *method* against the documented *path* and wait for the response.

        Args:
            method: HTTP method, any case.
            path: The path template as written in the document; a leading
                ``/`` is optional.
            input: Parameter values keyed by name, plus optional raw httpx
                options under ``@http``.

        Returns:
            The :class:`httpx.Response`, unmodified unless ``http_errors``
            is enabled.

        Raises:
            OperationNotFoundError: If the document has no such operation.
            MissingRequiredParameterError: If a required value is absent.
            UnrecognizedParameterLocationError: If a definition's ``in`` is
                unknown.
            httpx.TransportError: On network failures.
        """
        method, url, options = self._prepare(method, path, input)
        response = self._http.request(method.upper(), url, **options)
        return self._check(response)

    def request_async(
        self, method: str, path: str = "/", input: _Input = None
    ) -> Awaitable[httpx.Response]:
        """Prepare the request now and return an awaitable that sends it.

        Preparation errors are raised immediately, exactly as in
        :meth:`request`.
        """
        method, url, options = self._prepare(method, path, input)
        return self._send_async(method, url, options)

    # ------------------------------------------------------------------ #
    # Verb shortcuts
    # ------------------------------------------------------------------ #

    def get(self, path: str = "/", input: _Input = None) -> httpx.Response:
        return self.request(HTTPMethod.GET.value, path, input)

    def put(self, path: str = "/", input: _Input = None) -> httpx.Response:
        return self.request(HTTPMethod.PUT.value, path, input)

    def post(self, path: str = "/", input: _Input = None) -> httpx.Response:
        return self.request(HTTPMethod.POST.value, path, input)

    def head(self, path: str = "/", input: _Input = None) -> httpx.Response:
        return self.request(HTTPMethod.HEAD.value, path, input)

    def patch(self, path: str = "/", input: _Input = None) -> httpx.Response:
        return self.request(HTTPMethod.PATCH.value, path, input)

    def delete(self, path: str = "/", input: _Input = None) -> httpx.Response:
        return self.request(HTTPMethod.DELETE.value, path, input)

    def options(self, path: str = "/", input: _Input = None) -> httpx.Response:
        return self.request(HTTPMethod.OPTIONS.value, path, input)

    def get_async(self, path: str = "/", input: _Input = None) -> Awaitable[httpx.Response]:
        return self.request_async(HTTPMethod.GET.value, path, input)

    def put_async(self, path: str = "/", input: _Input = None) -> Awaitable[httpx.Response]:
        return self.request_async(HTTPMethod.PUT.value, path, input)

    def post_async(self, path: str = "/", input: _Input = None) -> Awaitable[httpx.Response]:
        return self.request_async(HTTPMethod.POST.value, path, input)

    def head_async(self, path: str = "/", input: _Input = None) -> Awaitable[httpx.Response]:
        return self.request_async(HTTPMethod.HEAD.value, path, input)

    def patch_async(self, path: str = "/", input: _Input = None) -> Awaitable[httpx.Response]:
        return self.request_async(HTTPMethod.PATCH.value, path, input)

    def delete_async(self, path: str = "/", input: _Input = None) -> Awaitable[httpx.Response]:
        return self.request_async(HTTPMethod.DELETE.value, path, input)

    def options_async(self, path: str = "/", input: _Input = None) -> Awaitable[httpx.Response]:
        return self.request_async(HTTPMethod.OPTIONS.value, path, input)

    # ------------------------------------------------------------------ #
    # Attribute-style operations
    # ------------------------------------------------------------------ #

    def __getattr__(self, name: str) -> Callable[..., Any]:
        """Expose ``client.<operationId>(input)`` and ``client.<operationId>Async(input)``.

        A verb name with an async suffix (``getAsync``, ``postAsync``...) is a
        direct request: ``client.getAsync("/pets", {"limit": 5})``.
        """
        if name.startswith("_"):
            raise AttributeError(name)

        operation_id, is_async = split_async_suffix(name)
        if operation_id in _VERBS:
            send = self.request_async if is_async else self.request

            def _verb(path: str = "/", input: _Input = None) -> Any:
                return send(operation_id, path, input)

            _verb.__name__ = name
            return _verb

        execute = self.execute_async if is_async else self.execute

        def _operation(input: _Input = None) -> Any:
            return execute(operation_id, input)

        _operation.__name__ = name
        return _operation

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _prepare(
        self, method: str, path: str, input: _Input
    ) -> tuple[str, httpx.URL, dict[str, Any]]:
        """Resolve the operation and build ``(method, relative url, options)``.

        The url is built from its path alone so that a first segment holding
        a colon (``/items:batch``) is never parsed as a scheme.
        """
        method = method.lower()
        path = "/" + path.lstrip("/")

        operation = self._store.get("paths", path, method)
        if not isinstance(operation, Mapping) or not operation:
            raise OperationNotFoundError(
                f"No {method} operation for path {path}", path=path, method=method
            )

        options = self._mapper.map(path, method, operation, input)
        path_values = options.pop(PATH_PARAMS_KEY, None)
        if path_values is not None:
            path = expand(path, path_values)

        logger.debug("%s %s%s", method.upper(), self._base_url, path.lstrip("/"))
        return method, httpx.URL(path=path), options

    async def _send_async(
        self, method: str, url: httpx.URL, options: dict[str, Any]
    ) -> httpx.Response:
        response = await self._async_http.request(method.upper(), url, **options)
        return self._check(response)

    def _check(self, response: httpx.Response) -> httpx.Response:
        if self._config.http_errors:
            return raise_for_status(response)
        return response


def _split_transport_options(
    options: dict[str, Any],
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split passthrough options into sync- and async-client keyword arguments.

    ``async_transport`` only goes to the async client.  A plain ``transport``
    goes to the async client too when it implements the async interface
    (``httpx.MockTransport`` does).
    """
    sync_options = dict(options)
    async_transport = sync_options.pop("async_transport", None)
    async_options = dict(sync_options)

    transport = sync_options.get("transport")
    if async_transport is not None:
        async_options["transport"] = async_transport
    elif transport is not None and not isinstance(transport, httpx.AsyncBaseTransport):
        del async_options["transport"]
    return sync_options, async_options
