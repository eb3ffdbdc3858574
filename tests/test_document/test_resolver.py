"""Tests for swaggerlite.document.resolver -- lookups and $ref handling."""

from __future__ import annotations

import pytest

from swaggerlite.document.resolver import lookup, merge_ref, resolve_ref, split_ref
from swaggerlite.exceptions import (
    CircularRefError,
    RefError,
    RefNotFoundError,
    UnsupportedRefError,
)


@pytest.fixture
def root() -> dict:
    return {
        "parameters": {
            "limit": {"name": "limit", "in": "query", "type": "integer"},
            "alias": {"$ref": "#/parameters/limit", "description": "aliased"},
            "loopA": {"$ref": "#/parameters/loopB"},
            "loopB": {"$ref": "#/parameters/loopA"},
            "scalar": "not an object",
            "nothing": None,
        },
        "definitions": {"a/b": {"type": "string"}, "t~x": {"type": "integer"}},
        "tags": [{"name": "pets"}, {"name": "store"}],
    }


class TestLookup:
    def test_nested_mapping(self, root: dict) -> None:
        assert lookup(root, ["parameters", "limit", "in"]) == "query"

    def test_missing_returns_default(self, root: dict) -> None:
        assert lookup(root, ["parameters", "nope"]) is None
        assert lookup(root, ["parameters", "nope"], default="x") == "x"

    def test_list_index(self, root: dict) -> None:
        assert lookup(root, ["tags", "1", "name"]) == "store"
        assert lookup(root, ["tags", 0, "name"]) == "pets"

    def test_bad_list_index_returns_default(self, root: dict) -> None:
        assert lookup(root, ["tags", "9"], default="x") == "x"
        assert lookup(root, ["tags", "first"], default="x") == "x"

    def test_walking_through_scalar_returns_default(self, root: dict) -> None:
        assert lookup(root, ["parameters", "scalar", "in"], default="x") == "x"

    def test_empty_segments_return_root(self, root: dict) -> None:
        assert lookup(root, []) is root


class TestSplitRef:
    def test_internal_pointer(self) -> None:
        assert split_ref("#/parameters/limit") == ["parameters", "limit"]

    def test_escapes(self) -> None:
        assert split_ref("#/definitions/a~1b") == ["definitions", "a/b"]
        assert split_ref("#/definitions/t~0x") == ["definitions", "t~x"]

    def test_root_pointer(self) -> None:
        assert split_ref("#") == []
        assert split_ref("#/") == []

    @pytest.mark.parametrize(
        "ref",
        ["other.json#/parameters/limit", "https://example.com/s.json#/x", "parameters/limit"],
    )
    def test_cross_document_refs_unsupported(self, ref: str) -> None:
        with pytest.raises(UnsupportedRefError) as exc_info:
            split_ref(ref)
        assert exc_info.value.ref == ref


class TestResolveRef:
    def test_returns_target(self, root: dict) -> None:
        assert resolve_ref(root, "#/parameters/limit")["name"] == "limit"

    def test_returns_snapshot(self, root: dict) -> None:
        target = resolve_ref(root, "#/parameters/limit")
        target["name"] = "changed"
        assert root["parameters"]["limit"]["name"] == "limit"

    def test_escaped_segment(self, root: dict) -> None:
        assert resolve_ref(root, "#/definitions/a~1b") == {"type": "string"}

    def test_missing_target(self, root: dict) -> None:
        with pytest.raises(RefNotFoundError, match="#/parameters/missing"):
            resolve_ref(root, "#/parameters/missing")

    def test_null_target_is_missing(self, root: dict) -> None:
        with pytest.raises(RefNotFoundError):
            resolve_ref(root, "#/parameters/nothing")

    def test_ref_errors_share_a_base(self, root: dict) -> None:
        with pytest.raises(RefError):
            resolve_ref(root, "#/nowhere")


class TestMergeRef:
    def test_node_without_ref_is_copied(self) -> None:
        node = {"name": "q", "in": "query"}
        merged = merge_ref({}, node)
        assert merged == node
        assert merged is not node

    def test_local_fields_win(self, root: dict) -> None:
        merged = merge_ref(root, {"$ref": "#/parameters/limit", "required": True})
        assert merged == {"name": "limit", "in": "query", "type": "integer", "required": True}
        assert "$ref" not in merged

    def test_local_override_of_existing_field(self, root: dict) -> None:
        merged = merge_ref(root, {"$ref": "#/parameters/limit", "in": "header"})
        assert merged["in"] == "header"

    def test_chained_refs_are_followed(self, root: dict) -> None:
        merged = merge_ref(root, {"$ref": "#/parameters/alias"})
        assert merged["name"] == "limit"
        assert merged["description"] == "aliased"

    def test_circular_chain(self, root: dict) -> None:
        with pytest.raises(CircularRefError, match="Circular"):
            merge_ref(root, {"$ref": "#/parameters/loopA"})

    def test_non_object_target(self, root: dict) -> None:
        with pytest.raises(RefNotFoundError, match="does not point at an object"):
            merge_ref(root, {"$ref": "#/parameters/scalar"})
