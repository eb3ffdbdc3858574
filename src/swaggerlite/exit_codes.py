"""Numeric process exit codes used by the ``swaggerlite`` command line.

Each constant maps to an error category and is referenced by the
corresponding :class:`~swaggerlite.exceptions.SwaggerLiteError` subclass.
Shell wrappers can inspect the exit code to tell a bad document from a
rejected request without parsing stderr.

Example::

    $ swaggerlite execute getPet -P petId=7
    $ echo $?
    4   # EXIT_NOT_FOUND -- unknown operation or HTTP 404
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""Invalid configuration or input (bad scheme, missing required parameter)."""

EXIT_AUTH_FAILURE = 3
"""The remote API rejected the credentials (HTTP 401/403)."""

EXIT_NOT_FOUND = 4
"""The operation is not in the document, or the API returned HTTP 404."""

EXIT_SERVER_ERROR = 5
"""The remote API returned an HTTP 5xx server error."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_DOCUMENT_ERROR = 7
"""The Swagger document could not be loaded, parsed, or dereferenced."""
