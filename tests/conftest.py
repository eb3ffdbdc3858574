"""Shared test fixtures for swaggerlite.

Provides the petstore document fixture, a recording mock transport, a
client factory wired to it, and output-state isolation.  These fixtures are
automatically discovered by pytest and available to all test modules.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Callable, Optional

import httpx
import pytest

from swaggerlite.client import SwaggerClient
from swaggerlite.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time; the CLI runner swaps those streams per invocation.
    """
    yield
    reset_output()


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet, plain-format OutputManager for the test."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_path() -> Path:
    return FIXTURES_DIR / "petstore.json"


@pytest.fixture
def petstore_raw(petstore_path: Path) -> dict[str, Any]:
    """The decoded petstore Swagger 2.0 document."""
    with open(petstore_path) as f:
        return json.load(f)


@pytest.fixture
def minimal_doc() -> dict[str, Any]:
    """The smallest document that passes the shape check."""
    return {
        "swagger": "2.0",
        "info": {"title": "Minimal", "version": "1"},
        "host": "api.example.com",
        "paths": {},
    }


# ---------------------------------------------------------------------------
# Transport fixtures
# ---------------------------------------------------------------------------


class RecordingTransport(httpx.MockTransport):
    """A mock transport that remembers every request it handled."""

    def __init__(
        self,
        handler: Optional[Callable[[httpx.Request], httpx.Response]] = None,
    ) -> None:
        self.requests: list[httpx.Request] = []

        def _handle(request: httpx.Request) -> httpx.Response:
            request.read()
            self.requests.append(request)
            if handler is not None:
                return handler(request)
            return httpx.Response(200, json={"ok": True})

        super().__init__(_handle)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def make_client(
    petstore_raw: dict[str, Any],
    transport: RecordingTransport,
) -> Callable[..., SwaggerClient]:
    """Factory building a SwaggerClient on the petstore document and the recording transport.

    Keyword arguments override construction options; pass ``swagger=...``
    to use another document.
    """
    clients: list[SwaggerClient] = []

    def _make(**options: Any) -> SwaggerClient:
        options.setdefault("swagger", copy.deepcopy(petstore_raw))
        options.setdefault("transport", transport)
        client = SwaggerClient(**options)
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
def make_transport() -> type[RecordingTransport]:
    """The :class:`RecordingTransport` class, for tests needing a custom handler."""
    return RecordingTransport
