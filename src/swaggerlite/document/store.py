"""Hold the normalized Swagger document and answer lookups against it.

:class:`DocumentStore` is built once per client.  It deep-copies the decoded
document, checks that the required top-level sections exist, fills in the
defaults the rest of the package relies on, and then never changes again,
so it can be shared by any number of in-flight requests without locking.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any, Optional

from swaggerlite.document.loader import load_document
from swaggerlite.document.resolver import lookup, merge_ref, resolve_ref
from swaggerlite.exceptions import DocumentShapeError

logger = logging.getLogger(__name__)

REQUIRED_SECTIONS = ("swagger", "info", "paths")
DEFAULT_SCHEMES = ["https"]


class DocumentStore:
    """A loaded, normalized, read-only Swagger 2.0 document.

    Normalization rules:

    * ``schemes`` defaults to ``["https"]`` when absent.
    * ``host`` is replaced by the *host* override when the document has no
      host **or** the override is truthy.  An empty override therefore only
      takes effect when the document itself has no host.
    * ``basePath`` follows the same rule with *base_path*.

    Args:
        document: The decoded document.  It is deep-copied; the caller's
            object is never mutated.
        host: Optional override for the document's ``host``.
        base_path: Optional override for the document's ``basePath``.

    Raises:
        DocumentShapeError: If ``swagger``, ``info`` or ``paths`` is missing.
    """

    def __init__(
        self,
        document: Mapping[str, Any],
        host: Optional[str] = None,
        base_path: Optional[str] = None,
    ) -> None:
        doc = copy.deepcopy(dict(document))

        missing = [key for key in REQUIRED_SECTIONS if doc.get(key) is None]
        if missing:
            raise DocumentShapeError(
                "Swagger document is missing required sections: " + ", ".join(missing),
                missing=missing,
            )
        if not isinstance(doc["paths"], Mapping):
            raise DocumentShapeError(
                "Swagger document 'paths' must be an object", missing=["paths"]
            )

        if doc.get("schemes") is None:
            doc["schemes"] = list(DEFAULT_SCHEMES)
        if doc.get("host") is None or host:
            if doc.get("host") is not None:
                logger.debug("Overriding document host %r with %r", doc["host"], host)
            doc["host"] = host
        if doc.get("basePath") is None or base_path:
            if doc.get("basePath") is not None:
                logger.debug(
                    "Overriding document basePath %r with %r", doc["basePath"], base_path
                )
            doc["basePath"] = base_path

        self._doc = doc

    @classmethod
    def load(
        cls,
        source: Any,
        host: Optional[str] = None,
        base_path: Optional[str] = None,
    ) -> DocumentStore:
        """Load *source* with :func:`~swaggerlite.document.loader.load_document` and wrap it.

        Raises:
            DocumentLoadError: If the source cannot be loaded or decoded.
            DocumentShapeError: If required sections are missing.
        """
        return cls(load_document(source), host=host, base_path=base_path)

    # ------------------------------------------------------------------ #
    # Properties
    # ------------------------------------------------------------------ #

    @property
    def document(self) -> dict[str, Any]:
        """The normalized document.  Treat as read-only."""
        return self._doc

    @property
    def version(self) -> str:
        return str(self._doc["swagger"])

    @property
    def info(self) -> Any:
        return self._doc["info"]

    @property
    def schemes(self) -> list[str]:
        schemes = self._doc["schemes"]
        if isinstance(schemes, str):
            return [schemes]
        return list(schemes)

    @property
    def host(self) -> Optional[str]:
        return self._doc["host"]

    @property
    def base_path(self) -> Optional[str]:
        return self._doc["basePath"]

    @property
    def paths(self) -> Mapping[str, Any]:
        return self._doc["paths"]

    # ------------------------------------------------------------------ #
    # Lookups
    # ------------------------------------------------------------------ #

    def get(self, *keys: Any, default: Any = None) -> Any:
        """Look up a nested value by a sequence of keys, or return *default*.

        Example::

            store.get("paths", "/pets/{petId}", "get")
            store.get("paths", "/pets", "parameters", default=[])
        """
        return lookup(self._doc, keys, default=default)

    def resolve_ref(self, ref: str) -> Any:
        """Return a snapshot of the value an internal ``$ref`` points at.

        Raises:
            UnsupportedRefError: If *ref* points into another document.
            RefNotFoundError: If any segment of *ref* is absent.
        """
        return resolve_ref(self._doc, ref)

    def resolve_parameter(self, param: Mapping[str, Any]) -> dict[str, Any]:
        """Return *param* with any ``$ref`` resolved; local fields win on conflict."""
        return merge_ref(self._doc, param)
