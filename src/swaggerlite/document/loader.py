"""Load Swagger documents from a URL, a local file, a callback, or memory.

This module handles all I/O for fetching a raw Swagger document and turning
it into a Python dictionary.  The single public function is
:func:`load_document`; normalization and shape checks happen afterwards in
:class:`~swaggerlite.document.store.DocumentStore`.

Documents are JSON.  A ``.yaml``/``.yml`` file, or a URL served with a YAML
content type, is read with :func:`yaml.safe_load` instead.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import httpx
import yaml

from swaggerlite.exceptions import DocumentLoadError

logger = logging.getLogger(__name__)


def load_document(source: Any) -> dict[str, Any]:
    """Load a Swagger document from any supported source.

    Args:
        source: One of

            * an ``http(s)://`` URL string, fetched with :func:`httpx.get`;
            * a file path (``str`` or :class:`os.PathLike`);
            * a zero-argument callable returning the decoded document;
            * an already-decoded mapping.

    Returns:
        The decoded document as a ``dict``.  Mappings are returned as a
        shallow ``dict`` copy; the store deep-copies before normalizing.

    Raises:
        DocumentLoadError: If the source type is not recognised, cannot be
            read, or does not decode to a JSON object.
    """
    if isinstance(source, Mapping):
        logger.debug("Using in-memory Swagger document")
        return dict(source)
    if isinstance(source, (str, os.PathLike)):
        location = os.fspath(source)
        if isinstance(location, str) and location.startswith(("http://", "https://")):
            return _load_from_url(location)
        return _load_from_file(location)
    if callable(source):
        return _load_from_callback(source)
    raise DocumentLoadError(
        f"Cannot load Swagger document from {type(source).__name__}; "
        "expected a path, URL, callable, or mapping"
    )


def _load_from_callback(loader: Any) -> dict[str, Any]:
    """Invoke *loader* once and check that it produced a mapping."""
    logger.debug("Loading Swagger document from callback %r", loader)
    result = loader()
    if not isinstance(result, Mapping):
        raise DocumentLoadError(
            "Swagger document callback must return a mapping "
            f"(got {type(result).__name__})"
        )
    return dict(result)


def _load_from_url(url: str) -> dict[str, Any]:
    """Fetch the document from *url*.

    Raises:
        DocumentLoadError: On a non-2xx status, a network error, or
            undecodable content.
    """
    logger.debug("Fetching Swagger document from %s", url)
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise DocumentLoadError(
            f"HTTP {exc.response.status_code} fetching Swagger document from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise DocumentLoadError(
            f"Failed to fetch Swagger document from {url}: {exc}"
        ) from exc

    content_type = response.headers.get("content-type", "")
    hint = "yaml" if "yaml" in content_type or "yml" in content_type else "json"
    return _parse_content(response.text, hint=hint, origin=url)


def _load_from_file(path: str | bytes) -> dict[str, Any]:
    """Read the document from a local file.

    Raises:
        DocumentLoadError: If the file is missing, unreadable, empty, or
            undecodable.
    """
    file_path = Path(os.fsdecode(path))
    logger.debug("Reading Swagger document from %s", file_path)
    if not file_path.is_file():
        raise DocumentLoadError(f"Swagger document not found: {file_path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentLoadError(
            f"Failed to read Swagger document {file_path}: {exc}"
        ) from exc

    if not content.strip():
        raise DocumentLoadError(f"Swagger document is empty: {file_path}")

    hint = "yaml" if file_path.suffix.lower() in (".yaml", ".yml") else "json"
    return _parse_content(content, hint=hint, origin=str(file_path))


def _parse_content(content: str, hint: str = "json", origin: str = "") -> dict[str, Any]:
    """Decode *content* as JSON, or as YAML when *hint* is ``"yaml"``.

    Raises:
        DocumentLoadError: If decoding fails or the top level is not an object.
    """
    where = f" in {origin}" if origin else ""
    if hint == "yaml":
        try:
            result = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise DocumentLoadError(f"Invalid YAML{where}: {exc}") from exc
    else:
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            raise DocumentLoadError(f"Invalid JSON{where}: {exc}") from exc

    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise DocumentLoadError(f"Swagger document must be an object (got {kind}){where}")
    return result
