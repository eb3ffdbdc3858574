"""Map caller input onto the HTTP request an operation describes.

This module turns a flat input mapping (parameter name to value) into the
keyword arguments of :meth:`httpx.Client.request`, using the operation's
parameter definitions to decide where every value goes.

**Mapping rules:**

* The reserved ``@http`` key is removed from the input and its contents seed
  the options verbatim (``auth``, ``timeout``, extra ``headers``...).  They
  are never validated.
* Path-level parameters are merged first, then operation-level parameters;
  a later definition with the same ``name`` replaces an earlier one.
  ``$ref`` definitions are resolved before merging and their local fields
  win over the referenced ones.
* Each supplied value is routed by the definition's ``in``:

  ============  ==============================================
  ``in``        option
  ============  ==============================================
  ``body``      ``json`` (the last body parameter wins)
  ``query``     ``params[name]``
  ``header``    ``headers[name]``, scalars rendered as text
  ``path``      ``path_params[name]`` (expanded, then removed)
  ``formData``  ``data[name]``, or ``files[name]`` for ``type: file``
  ============  ==============================================

* A required parameter with no value raises
  :class:`~swaggerlite.exceptions.MissingRequiredParameterError`.
* Input keys that match no definition are ignored.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import ValidationError

from swaggerlite.document.store import DocumentStore
from swaggerlite.exceptions import (
    DocumentShapeError,
    MissingRequiredParameterError,
    UnrecognizedParameterLocationError,
)
from swaggerlite.models import RAW_OPTIONS_KEY, ParameterDef, ParameterLocation

PATH_PARAMS_KEY = "path_params"
"""Options key holding path template values until the path is expanded."""

_SUBMAP_KEYS: dict[ParameterLocation, str] = {
    ParameterLocation.QUERY: "params",
    ParameterLocation.HEADER: "headers",
    ParameterLocation.PATH: PATH_PARAMS_KEY,
    ParameterLocation.FORM_DATA: "data",
}


def _header_value(value: Any) -> Any:
    """Render a scalar header value as text; httpx only sends str or bytes."""
    if isinstance(value, (str, bytes)):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(str(_header_value(item)) for item in value)
    return str(value)


class ParameterMapper:
    """Build request options from an operation's parameters and caller input.

    Args:
        store: The document used to find path-level parameters and to
            resolve ``$ref`` definitions.
    """

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def collect(
        self,
        path: str,
        operation: Mapping[str, Any],
    ) -> dict[str, ParameterDef]:
        """Return the merged parameter definitions for *operation* at *path*, keyed by name.

        Raises:
            DocumentShapeError: If a definition lacks ``name`` or ``in``.
            RefError: If a ``$ref`` cannot be resolved.
        """
        merged: dict[str, ParameterDef] = {}
        sources = (
            ("path", self._store.get("paths", path, "parameters", default=None)),
            ("operation", operation.get("parameters")),
        )
        for level, params in sources:
            for index, raw in enumerate(params or ()):
                param = self._build(raw, path, level, index)
                merged[param.name] = param
        return merged

    def map(
        self,
        path: str,
        method: str,
        operation: Mapping[str, Any],
        input: Optional[Mapping[str, Any]] = None,
    ) -> dict[str, Any]:
        """Route every supplied value in *input* to its request location.

        Args:
            path: The path template the operation is declared under.
            method: The lowercase HTTP method (used in error messages).
            operation: The operation object from the document.
            input: Parameter values keyed by name, plus the optional
                ``@http`` raw options.

        Returns:
            A dict of :meth:`httpx.Client.request` keyword arguments, plus
            ``path_params`` when path values were supplied.

        Raises:
            MissingRequiredParameterError: A required parameter has no value.
            UnrecognizedParameterLocationError: A supplied value's definition
                has an unknown ``in``.
        """
        values = dict(input or {})
        options: dict[str, Any] = dict(values.pop(RAW_OPTIONS_KEY, None) or {})
        copied: set[str] = set()

        for name, param in self.collect(path, operation).items():
            value = values.get(name)
            if value is None:
                if param.required:
                    raise MissingRequiredParameterError(name, path=path, method=method)
                continue

            try:
                location = ParameterLocation(param.location)
            except ValueError:
                raise UnrecognizedParameterLocationError(param.location, name) from None

            if location is ParameterLocation.BODY:
                options["json"] = value
                continue

            key = _SUBMAP_KEYS[location]
            if location is ParameterLocation.FORM_DATA and param.type == "file":
                key = "files"
            elif location is ParameterLocation.HEADER:
                value = _header_value(value)
            if key not in copied:
                # Never write into a mapping the caller handed us under @http.
                options[key] = dict(options.get(key) or {})
                copied.add(key)
            options[key][name] = value

        return options

    def _build(self, raw: Any, path: str, level: str, index: int) -> ParameterDef:
        if not isinstance(raw, Mapping):
            raise DocumentShapeError(
                f"Parameter #{index} of {level} parameters for {path} is not an object",
                missing=["parameters"],
            )
        resolved = self._store.resolve_parameter(raw)
        try:
            return ParameterDef.model_validate(resolved)
        except ValidationError as exc:
            fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
            raise DocumentShapeError(
                f"Parameter #{index} of {level} parameters for {path} is invalid "
                f"({', '.join(fields) or 'unknown field'})",
                missing=fields,
            ) from exc
