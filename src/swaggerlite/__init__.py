"""swaggerlite -- a lite, httpx-based client for Swagger 2.0 JSON services.

The client reads operations and parameters from a Swagger document at run
time and maps caller input onto HTTP requests; no code is generated.

Typical usage::

    from swaggerlite import SwaggerClient

    client = SwaggerClient(swagger="https://petstore.swagger.io/v2/swagger.json")
    response = client.execute("getPetById", {"petId": 1})

Modules:
    client: :class:`SwaggerClient` and response helpers.
    document: Loading, normalizing, and dereferencing the document.
    operations: ``operationId`` lookup.
    base_uri: Base URL derivation from the document and overrides.
    request: Parameter mapping and path template expansion.
    models: Pydantic models shared across the package.
    exceptions: Exception hierarchy with exit-code mapping.
    app: The ``swaggerlite`` command line.
"""

from swaggerlite.client import SwaggerClient
from swaggerlite.models import RAW_OPTIONS_KEY, ClientConfig

__version__ = "0.1.0"

__all__ = ["SwaggerClient", "ClientConfig", "RAW_OPTIONS_KEY", "__version__"]
