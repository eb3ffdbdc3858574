"""Exception hierarchy for swaggerlite.

All exceptions inherit from :class:`SwaggerLiteError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`swaggerlite.exit_codes`.  Library callers catch the specific
subclasses; the command line in :func:`swaggerlite.app.main` catches
``SwaggerLiteError`` and exits with the matching code.

Every error is raised at the point of detection and carries enough context
(operation, parameter, path, reference) to diagnose the failure without
re-reading the document.

Subclass hierarchy::

    SwaggerLiteError (exit 1)
    +-- DocumentError                       (exit 7)
    |   +-- DocumentLoadError
    |   +-- DocumentShapeError
    |   +-- RefError
    |       +-- UnsupportedRefError
    |       +-- RefNotFoundError
    |       +-- CircularRefError
    +-- InvalidConfigError                  (exit 2)
    |   +-- InvalidSchemeError
    |   +-- AmbiguousSchemeError
    |   +-- MissingHostError
    +-- OperationNotFoundError              (exit 4)
    +-- ParameterError                      (exit 2)
    |   +-- MissingRequiredParameterError
    |   +-- UnrecognizedParameterLocationError
    +-- ResponseError                       (exit 1)
        +-- AuthError                       (exit 3)
        +-- NotFoundError                   (exit 4)
        +-- ClientError                     (exit 2)
        +-- ServerError                     (exit 5)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from swaggerlite.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_DOCUMENT_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_SERVER_ERROR,
)

if TYPE_CHECKING:
    import httpx


class SwaggerLiteError(Exception):
    """Base exception for all swaggerlite errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


# --- Document errors ---


class DocumentError(SwaggerLiteError):
    """Base for problems with the Swagger document itself."""

    exit_code = EXIT_DOCUMENT_ERROR


class DocumentLoadError(DocumentError):
    """Raised when the document source is unrecognised, unreadable, or not valid JSON."""


class DocumentShapeError(DocumentError):
    """Raised when required sections (``swagger``, ``info``, ``paths``) are missing.

    Also raised for parameter definitions that lack a ``name`` or ``in``
    field after reference resolution.

    Attributes:
        missing: The names of the missing sections or fields.
    """

    def __init__(self, message: str, missing: Sequence[str] = ()):
        super().__init__(message)
        self.missing = tuple(missing)


class RefError(DocumentError):
    """Base for ``$ref`` resolution failures.

    Attributes:
        ref: The reference string that could not be resolved.
    """

    def __init__(self, message: str, ref: str):
        super().__init__(message)
        self.ref = ref


class UnsupportedRefError(RefError):
    """Raised for references into other documents (non-empty URI before ``#``)."""


class RefNotFoundError(RefError):
    """Raised when a reference points at a location absent from the document."""


class CircularRefError(RefError):
    """Raised when a chain of references loops back on itself."""


# --- Configuration errors ---


class InvalidConfigError(SwaggerLiteError):
    """Base for construction options that cannot produce a base URI."""

    exit_code = EXIT_INVALID_USAGE


class InvalidSchemeError(InvalidConfigError):
    """Raised when the requested scheme is not in the document's ``schemes``.

    Attributes:
        scheme: The rejected scheme.
        candidates: The schemes the document allows.
    """

    def __init__(self, scheme: str, candidates: Sequence[str]):
        super().__init__(
            f"Provided scheme {scheme!r} is not allowed. "
            f"Choose one of: {', '.join(candidates)}"
        )
        self.scheme = scheme
        self.candidates = tuple(candidates)


class AmbiguousSchemeError(InvalidConfigError):
    """Raised when no scheme was given and the document allows several.

    Attributes:
        candidates: The schemes the document allows.
    """

    def __init__(self, candidates: Sequence[str]):
        super().__init__(
            f"Must specify a scheme. Choose one of: {', '.join(candidates)}"
        )
        self.candidates = tuple(candidates)


class MissingHostError(InvalidConfigError):
    """Raised when neither the document nor the caller supplies a host."""


# --- Operation lookup ---


class OperationNotFoundError(SwaggerLiteError):
    """Raised for an unknown ``(path, method)`` pair or an unknown ``operationId``.

    Attributes:
        operation_id: The symbolic id that was looked up, if any.
        path: The normalised path that was looked up, if any.
        method: The normalised method that was looked up, if any.
    """

    exit_code = EXIT_NOT_FOUND

    def __init__(
        self,
        message: str,
        operation_id: Optional[str] = None,
        path: Optional[str] = None,
        method: Optional[str] = None,
    ):
        super().__init__(message)
        self.operation_id = operation_id
        self.path = path
        self.method = method


# --- Parameter mapping ---


class ParameterError(SwaggerLiteError):
    """Base for input that cannot be mapped onto the operation's parameters.

    Attributes:
        parameter: The parameter name involved.
    """

    exit_code = EXIT_INVALID_USAGE

    def __init__(self, message: str, parameter: str):
        super().__init__(message)
        self.parameter = parameter


class MissingRequiredParameterError(ParameterError):
    """Raised when a parameter marked ``required`` has no value in the input."""

    def __init__(
        self,
        parameter: str,
        path: Optional[str] = None,
        method: Optional[str] = None,
    ):
        where = f" of {method.upper()} {path}" if path and method else ""
        super().__init__(
            f"Input not provided for required parameter {parameter!r}{where}",
            parameter,
        )
        self.path = path
        self.method = method


class UnrecognizedParameterLocationError(ParameterError):
    """Raised when a definition's ``in`` value is outside the supported set.

    Attributes:
        location: The offending ``in`` value.
    """

    def __init__(self, location: object, parameter: str):
        super().__init__(
            f'Unrecognized "in" value "{location}" for the "{parameter}" parameter',
            parameter,
        )
        self.location = location


# --- Response errors (only raised when ``http_errors`` is enabled) ---


class ResponseError(SwaggerLiteError):
    """Base for HTTP error responses surfaced as exceptions.

    Attributes:
        response: The :class:`httpx.Response` that triggered the error.
    """

    def __init__(self, message: str, response: "httpx.Response"):
        super().__init__(message)
        self.response = response

    @property
    def status_code(self) -> int:
        return self.response.status_code


class AuthError(ResponseError):
    """Raised on HTTP 401 / 403."""

    exit_code = EXIT_AUTH_FAILURE


class NotFoundError(ResponseError):
    """Raised on HTTP 404."""

    exit_code = EXIT_NOT_FOUND


class ClientError(ResponseError):
    """Raised on any other HTTP 4xx."""

    exit_code = EXIT_INVALID_USAGE


class ServerError(ResponseError):
    """Raised on HTTP 5xx."""

    exit_code = EXIT_SERVER_ERROR
