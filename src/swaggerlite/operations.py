"""Resolve symbolic ``operationId`` values to ``(path, method)`` pairs.

The index is populated lazily: the first lookup of an id scans the
document's ``paths`` in document order and memoizes the match.  The
document never changes after load, so cached entries never go stale.
Concurrent misses for the same id may both scan and both write the same
answer; that race is harmless and deliberately left unlocked.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Iterator

from swaggerlite.document.store import DocumentStore
from swaggerlite.exceptions import OperationNotFoundError
from swaggerlite.models import HTTPMethod, OperationTarget

logger = logging.getLogger(__name__)

_HTTP_METHODS = frozenset(m.value for m in HTTPMethod)


class OperationIndex:
    """Lazily built ``operationId`` lookup over a :class:`DocumentStore`.

    When several operations share one ``operationId`` (an invalid document),
    the first one in document order wins.

    Args:
        store: The document to index.

    Example::

        index = OperationIndex(store)
        path, method = index.resolve("listPets")
    """

    def __init__(self, store: DocumentStore) -> None:
        self._store = store
        self._cache: dict[str, OperationTarget] = {}

    def resolve(self, operation_id: str) -> OperationTarget:
        """Return the ``(path, method)`` pair declaring *operation_id*.

        Raises:
            OperationNotFoundError: If no operation in the document has
                that id.
        """
        cached = self._cache.get(operation_id)
        if cached is not None:
            return cached

        logger.debug("operationId %r not cached, scanning paths", operation_id)
        target = self._scan(operation_id)
        if target is None:
            raise OperationNotFoundError(
                f"Cannot find the {operation_id} operation",
                operation_id=operation_id,
            )
        self._cache[operation_id] = target
        return target

    def __contains__(self, operation_id: object) -> bool:
        if not isinstance(operation_id, str):
            return False
        try:
            self.resolve(operation_id)
        except OperationNotFoundError:
            return False
        return True

    def operations(self) -> Iterator[tuple[OperationTarget, str | None]]:
        """Yield every operation as ``(target, operationId)`` in document order."""
        for path, methods in self._store.paths.items():
            if not isinstance(methods, Mapping):
                continue
            for method, operation in methods.items():
                if method not in _HTTP_METHODS or not isinstance(operation, Mapping):
                    continue
                yield OperationTarget(path, method), operation.get("operationId")

    def _scan(self, operation_id: str) -> OperationTarget | None:
        for target, candidate in self.operations():
            if candidate == operation_id:
                return target
        return None
