"""Resolve command-line client configuration from flags and the environment.

Precedence (high to low):

1. Command-line flags (``--spec``, ``--scheme``, ``--host``...).
2. Environment variables (``SWAGGERLITE_SPEC``, ``SWAGGERLITE_SCHEME``,
   ``SWAGGERLITE_HOST``, ``SWAGGERLITE_BASE_PATH``,
   ``SWAGGERLITE_BASE_URL``, ``SWAGGERLITE_TIMEOUT``).
3. Defaults (``None`` everywhere; the document decides).

Library users build :class:`~swaggerlite.models.ClientConfig` directly and
never go through this module.
"""

from __future__ import annotations

import os
from typing import Any, Optional

from pydantic import ValidationError

from swaggerlite.exceptions import InvalidConfigError
from swaggerlite.models import ClientConfig

ENV_PREFIX = "SWAGGERLITE_"

_ENV_KEYS = {
    "swagger": "SPEC",
    "scheme": "SCHEME",
    "host": "HOST",
    "base_path": "BASE_PATH",
    "base_url": "BASE_URL",
    "timeout": "TIMEOUT",
}


def _env(name: str) -> Optional[str]:
    """Return ``$SWAGGERLITE_<name>``, treating an empty value as unset."""
    value = os.environ.get(f"{ENV_PREFIX}{name}", "")
    return value or None


def resolve_config(
    cli_spec: Optional[str] = None,
    cli_scheme: Optional[str] = None,
    cli_host: Optional[str] = None,
    cli_base_path: Optional[str] = None,
    cli_base_url: Optional[str] = None,
    cli_timeout: Optional[float] = None,
    http_errors: bool = True,
) -> ClientConfig:
    """Merge command-line flags over environment variables into a :class:`ClientConfig`.

    Returns:
        The effective configuration.  ``timeout`` is only included when set,
        so httpx keeps its own default otherwise.

    Raises:
        InvalidConfigError: If no document source is configured, or a value
            fails validation (e.g. a non-numeric ``SWAGGERLITE_TIMEOUT``).
    """
    cli_values: dict[str, Any] = {
        "swagger": cli_spec,
        "scheme": cli_scheme,
        "host": cli_host,
        "base_path": cli_base_path,
        "base_url": cli_base_url,
        "timeout": cli_timeout,
    }

    values: dict[str, Any] = {"http_errors": http_errors}
    for key, cli_value in cli_values.items():
        value = cli_value if cli_value is not None else _env(_ENV_KEYS[key])
        if value is not None:
            values[key] = value

    if values.get("swagger") is None:
        raise InvalidConfigError(
            f"No Swagger document configured. Pass --spec or set {ENV_PREFIX}SPEC"
        )

    if "timeout" in values:
        try:
            values["timeout"] = float(values["timeout"])
        except (TypeError, ValueError) as exc:
            raise InvalidConfigError(f"Invalid timeout: {values['timeout']!r}") from exc

    try:
        return ClientConfig.model_validate(values)
    except ValidationError as exc:
        raise InvalidConfigError(f"Invalid configuration: {exc}") from exc
