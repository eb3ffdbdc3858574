"""Expand path templates such as ``/pets/{petId}`` with caller values.

Implements RFC 6570 level 1 (simple string expansion), which is all a
Swagger 2.0 path template uses: each ``{name}`` is replaced by the value
percent-encoded with no reserved characters left unescaped.  Variables with
no value expand to the empty string, so an unresolved variable shows up as a
malformed URL at the transport rather than being validated here.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

_VARIABLE_RE = re.compile(r"\{([^{}]+)\}")


def _encode(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ",".join(_encode(item) for item in value)
    if isinstance(value, bool):
        value = "true" if value else "false"
    return quote(str(value), safe="")


def expand(template: str, values: Mapping[str, Any]) -> str:
    """Substitute every ``{name}`` in *template* from *values*.

    Example::

        >>> expand("/pets/{petId}/tags/{tag}", {"petId": 42, "tag": "a b"})
        '/pets/42/tags/a%20b'
        >>> expand("/pets/{petId}", {})
        '/pets/'
    """

    def _replace(match: re.Match[str]) -> str:
        value = values.get(match.group(1).strip())
        if value is None:
            return ""
        return _encode(value)

    return _VARIABLE_RE.sub(_replace, template)
