"""Swagger document handling -- load, normalize, and dereference.

Typical usage::

    from swaggerlite.document import DocumentStore

    store = DocumentStore.load("petstore.json", host="staging.example.com")
    store.get("paths", "/pets", "get")
    store.resolve_ref("#/parameters/limitParam")

Sub-modules:

* :mod:`~swaggerlite.document.loader` -- I/O layer (URL, file, callback,
  mapping) and JSON/YAML decoding.
* :mod:`~swaggerlite.document.resolver` -- safe tree lookups and internal
  ``$ref`` resolution.
* :mod:`~swaggerlite.document.store` -- the normalized, read-only document.
"""

from swaggerlite.document.loader import load_document
from swaggerlite.document.store import DocumentStore

__all__ = ["DocumentStore", "load_document"]
