"""Derive the base URL every request path is resolved against.

Runs once, at client construction, after the document has been normalized
and before the httpx clients are built.  The result is a plain string handed
to httpx as ``base_url``.
"""

from __future__ import annotations

import logging
from typing import Optional

from swaggerlite.document.store import DocumentStore
from swaggerlite.exceptions import AmbiguousSchemeError, InvalidSchemeError, MissingHostError
from swaggerlite.models import BaseURI

logger = logging.getLogger(__name__)


def normalize_base_path(base_path: Optional[str]) -> str:
    """Return *base_path* with one leading and exactly one trailing slash.

    Empty or ``None`` stays empty, so that ``scheme://host`` has no path.

    Example::

        >>> normalize_base_path("/v2//")
        '/v2/'
        >>> normalize_base_path("api")
        '/api/'
        >>> normalize_base_path("")
        ''
    """
    if not base_path:
        return ""
    trimmed = base_path.strip("/")
    return f"/{trimmed}/" if trimmed else "/"


def compute_base_uri(store: DocumentStore, scheme: Optional[str] = None) -> BaseURI:
    """Validate *scheme* and the document's host, and build a :class:`BaseURI`.

    Args:
        store: The normalized document.
        scheme: The caller's scheme.  Must be one of the document's
            ``schemes``; may be omitted when the document allows exactly one.

    Raises:
        InvalidSchemeError: If *scheme* is not allowed by the document.
        AmbiguousSchemeError: If *scheme* is omitted and the document allows
            zero or several schemes.
        MissingHostError: If neither the document nor the caller set a host.
    """
    allowed = store.schemes
    if not scheme:
        if len(allowed) != 1:
            raise AmbiguousSchemeError(allowed)
        scheme = allowed[0]
    elif scheme not in allowed:
        raise InvalidSchemeError(scheme, allowed)

    host = store.host
    if not host:
        raise MissingHostError(
            "The host was not set in the Swagger document. Please specify a host"
        )

    return BaseURI(scheme=scheme, host=host, path_prefix=normalize_base_path(store.base_path))


def resolve_base_uri(
    store: DocumentStore,
    scheme: Optional[str] = None,
    base_url: Optional[str] = None,
) -> str:
    """Return the base URL for the transport.

    An explicit *base_url* is used verbatim and skips every check; otherwise
    the URL is computed by :func:`compute_base_uri`.
    """
    if base_url is not None:
        logger.debug("Using explicit base URL %s", base_url)
        return base_url

    uri = str(compute_base_uri(store, scheme))
    logger.debug("Computed base URL %s", uri)
    return uri
