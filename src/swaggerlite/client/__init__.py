"""HTTP client module for swaggerlite.

Provides :class:`SwaggerClient`, which turns document operations plus caller
input into requests sent through :mod:`httpx`, with blocking and awaitable
flavors of every call.

Example::

    from swaggerlite.client import SwaggerClient

    with SwaggerClient(swagger="petstore.json") as client:
        resp = client.execute("listPets", {"limit": 10})
"""

from swaggerlite.client.swagger_client import SwaggerClient

__all__ = ["SwaggerClient"]
