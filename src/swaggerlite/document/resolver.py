"""Walk JSON Pointer style paths and resolve ``$ref`` strings within one document.

Swagger documents reuse definitions through ``$ref`` pointers such as
``{"$ref": "#/parameters/limitParam"}``.  Only **internal** references (an
empty URI part before ``#``) are supported; anything pointing into another
document raises :class:`~swaggerlite.exceptions.UnsupportedRefError`.

Unlike a whole-document dereferencer, resolution here is on demand: the
request builder asks for one reference at a time, when a parameter
definition is about to be used.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, Iterable

from swaggerlite.exceptions import CircularRefError, RefNotFoundError, UnsupportedRefError

_MISSING = object()


def lookup(root: Any, segments: Iterable[Any], default: Any = None) -> Any:
    """Follow *segments* through *root*, returning *default* when any step is absent.

    Mappings are indexed by key; lists by integer index (numeric strings are
    accepted, as they appear in pointers).  Never raises.

    Example::

        >>> lookup({"paths": {"/pets": {"get": {}}}}, ["paths", "/pets", "get"])
        {}
        >>> lookup({"paths": {}}, ["paths", "/pets", "get"], default="absent")
        'absent'
    """
    current = root
    for segment in segments:
        if isinstance(current, Mapping):
            if segment not in current:
                return default
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (TypeError, ValueError, IndexError):
                return default
        else:
            return default
    return current


def split_ref(ref: str) -> list[str]:
    """Split an internal ``$ref`` into unescaped pointer segments.

    Handles RFC 6901 escaping (``~1`` for ``/``, ``~0`` for ``~``).

    Raises:
        UnsupportedRefError: If the reference names another document or has
            no ``#`` fragment at all.
    """
    uri, sep, pointer = ref.partition("#")
    if uri or not sep:
        raise UnsupportedRefError(
            f"Cannot resolve {ref!r}: references into other Swagger documents "
            "are not supported",
            ref,
        )
    pointer = pointer.lstrip("/")
    if not pointer:
        return []
    return [s.replace("~1", "/").replace("~0", "~") for s in pointer.split("/")]


def resolve_ref(root: Mapping[str, Any], ref: str) -> Any:
    """Return a deep copy of the value *ref* points at inside *root*.

    Raises:
        UnsupportedRefError: For cross-document references.
        RefNotFoundError: If any segment is absent, or the target is ``null``.
    """
    found = lookup(root, split_ref(ref), default=_MISSING)
    if found is _MISSING or found is None:
        raise RefNotFoundError(
            f"Could not resolve ref {ref!r} in this Swagger document", ref
        )
    return copy.deepcopy(found)


def merge_ref(root: Mapping[str, Any], node: Mapping[str, Any]) -> dict[str, Any]:
    """Resolve the ``$ref`` in *node* and overlay *node*'s own fields on the target.

    Fields declared next to the ``$ref`` win over the referenced definition's
    fields.  A target that is itself a ``$ref`` is followed in turn.  Nodes
    without ``$ref`` are returned as a plain ``dict`` copy.

    Raises:
        CircularRefError: If the chain of references revisits a pointer.
        RefNotFoundError: If a target is missing or is not an object.
        UnsupportedRefError: For cross-document references.
    """
    local = {key: value for key, value in node.items() if key != "$ref"}
    ref = node.get("$ref")
    seen: list[str] = []
    while ref is not None:
        if ref in seen:
            chain = " -> ".join([*seen, ref])
            raise CircularRefError(f"Circular $ref chain: {chain}", ref)
        seen.append(ref)
        target = resolve_ref(root, ref)
        if not isinstance(target, Mapping):
            raise RefNotFoundError(
                f"Ref {ref!r} does not point at an object "
                f"(got {type(target).__name__})",
                ref,
            )
        ref = target.get("$ref")
        local = {**{k: v for k, v in target.items() if k != "$ref"}, **local}
    return local
