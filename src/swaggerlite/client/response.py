"""Helpers for inspecting :class:`httpx.Response` objects.

The client passes responses through untouched by default.  This module
holds the two optional layers on top of that:

* :func:`raise_for_status` -- maps 4xx/5xx responses onto the
  :class:`~swaggerlite.exceptions.ResponseError` family, used when the
  client is built with ``http_errors=True``.
* :func:`format_api_response` -- renders a response through the output
  system, used by the command line.
"""

from __future__ import annotations

from typing import Any

import httpx

from swaggerlite.exceptions import AuthError, ClientError, NotFoundError, ServerError
from swaggerlite.output import get_output


def extract_response_data(response: httpx.Response) -> Any:
    """Extract the body from an HTTP response.

    Attempts to parse the body as JSON first.  If that fails (e.g. the
    response is HTML or plain text), returns the raw text.  Returns
    ``None`` for responses with no content.
    """
    if not response.content:
        return None

    try:
        return response.json()
    except ValueError:
        return response.text


def _error_detail(response: httpx.Response) -> str:
    """Pull a short message out of an error body, if it has one."""
    data = extract_response_data(response)
    if isinstance(data, dict):
        return str(data.get("message") or data.get("error") or data.get("detail") or "")
    if data is None:
        return ""
    return str(data)[:200]


def raise_for_status(response: httpx.Response) -> httpx.Response:
    """Return *response* unchanged, or raise a typed error for status >= 400.

    Raises:
        AuthError: On 401 / 403.
        NotFoundError: On 404.
        ServerError: On 5xx.
        ClientError: On any other 4xx.
    """
    status = response.status_code
    if status < 400:
        return response

    request = response.request
    detail = _error_detail(response)
    message = f"HTTP {status} for {request.method} {request.url}"
    if detail:
        message = f"{message}: {detail}"

    if status in (401, 403):
        raise AuthError(message, response)
    if status == 404:
        raise NotFoundError(message, response)
    if status >= 500:
        raise ServerError(message, response)
    raise ClientError(message, response)


def format_api_response(response: httpx.Response) -> None:
    """Print an API response using the global output system.

    Writes the status line (e.g. ``HTTP 200 OK``) to stderr and the decoded
    body to stdout.
    """
    output = get_output()
    output.info(f"HTTP {response.status_code} {response.reason_phrase or ''}".rstrip())

    content_type = response.headers.get("content-type", "application/json")
    data = extract_response_data(response)
    if data is not None:
        output.format_response(data, content_type)
