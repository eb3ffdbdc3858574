"""Tests for swaggerlite.document.loader."""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from swaggerlite.document.loader import _parse_content, load_document
from swaggerlite.exceptions import DocumentLoadError


# ---------------------------------------------------------------------------
# load_document dispatch
# ---------------------------------------------------------------------------


class TestLoadDocument:
    """load_document routes each source kind to the right loader."""

    def test_loads_from_file_path_string(self, petstore_path: Path) -> None:
        result = load_document(str(petstore_path))
        assert result["swagger"] == "2.0"
        assert result["info"]["title"] == "Petstore"

    def test_loads_from_pathlike(self, petstore_path: Path) -> None:
        result = load_document(petstore_path)
        assert "/pets" in result["paths"]

    def test_loads_from_mapping(self, minimal_doc: dict) -> None:
        result = load_document(minimal_doc)
        assert result == minimal_doc
        assert result is not minimal_doc

    def test_loads_from_callback_once(self, minimal_doc: dict) -> None:
        calls: list[int] = []

        def loader() -> dict:
            calls.append(1)
            return minimal_doc

        result = load_document(loader)
        assert result["info"]["title"] == "Minimal"
        assert len(calls) == 1

    def test_callback_returning_non_mapping_raises(self) -> None:
        with pytest.raises(DocumentLoadError, match="must return a mapping"):
            load_document(lambda: ["not", "a", "document"])

    def test_loads_from_url(self) -> None:
        doc = {"swagger": "2.0", "info": {"title": "URL test"}, "paths": {}}
        mock_response = httpx.Response(
            status_code=200,
            json=doc,
            request=httpx.Request("GET", "https://example.com/swagger.json"),
        )
        with patch("swaggerlite.document.loader.httpx.get", return_value=mock_response) as get:
            result = load_document("https://example.com/swagger.json")
        assert result["info"]["title"] == "URL test"
        get.assert_called_once()

    @pytest.mark.parametrize("source", [42, 3.5, None, object()])
    def test_unrecognised_source_raises(self, source: object) -> None:
        with pytest.raises(DocumentLoadError, match="Cannot load Swagger document"):
            load_document(source)


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


class TestLoadFromFile:
    def test_file_not_found_raises(self) -> None:
        with pytest.raises(DocumentLoadError, match="not found"):
            load_document("/nonexistent/path/to/swagger.json")

    def test_empty_file_raises(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty.json"
        empty.write_text("   \n", encoding="utf-8")
        with pytest.raises(DocumentLoadError, match="empty"):
            load_document(str(empty))

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text("{not json", encoding="utf-8")
        with pytest.raises(DocumentLoadError, match="Invalid JSON"):
            load_document(str(bad))

    def test_yaml_looking_file_without_yaml_suffix_is_not_json(self, tmp_path: Path) -> None:
        doc = tmp_path / "swagger.txt"
        doc.write_text("swagger: '2.0'\n", encoding="utf-8")
        with pytest.raises(DocumentLoadError, match="Invalid JSON"):
            load_document(str(doc))

    def test_yaml_file(self, tmp_path: Path) -> None:
        content = textwrap.dedent("""\
            swagger: "2.0"
            info:
              title: YAML Test
              version: "1.0"
            paths:
              /hello:
                get:
                  operationId: hello
        """)
        yaml_file = tmp_path / "swagger.yaml"
        yaml_file.write_text(content, encoding="utf-8")
        result = load_document(str(yaml_file))
        assert result["paths"]["/hello"]["get"]["operationId"] == "hello"

    def test_json_array_raises(self, tmp_path: Path) -> None:
        doc = tmp_path / "array.json"
        doc.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
        with pytest.raises(DocumentLoadError, match="must be an object"):
            load_document(str(doc))


# ---------------------------------------------------------------------------
# URLs
# ---------------------------------------------------------------------------


class TestLoadFromUrl:
    def test_http_error_raises(self) -> None:
        request = httpx.Request("GET", "https://example.com/swagger.json")
        mock_response = httpx.Response(status_code=404, request=request)
        with patch("swaggerlite.document.loader.httpx.get", return_value=mock_response):
            with pytest.raises(DocumentLoadError, match="HTTP 404"):
                load_document("https://example.com/swagger.json")

    def test_network_error_raises(self) -> None:
        with patch(
            "swaggerlite.document.loader.httpx.get",
            side_effect=httpx.ConnectError("connection refused"),
        ):
            with pytest.raises(DocumentLoadError, match="Failed to fetch"):
                load_document("https://example.com/swagger.json")

    def test_yaml_content_type(self) -> None:
        mock_response = httpx.Response(
            status_code=200,
            headers={"content-type": "application/x-yaml"},
            text="swagger: '2.0'\ninfo: {title: Y}\npaths: {}\n",
            request=httpx.Request("GET", "https://example.com/swagger"),
        )
        with patch("swaggerlite.document.loader.httpx.get", return_value=mock_response):
            result = load_document("https://example.com/swagger")
        assert result["info"]["title"] == "Y"


# ---------------------------------------------------------------------------
# _parse_content
# ---------------------------------------------------------------------------


class TestParseContent:
    def test_json(self) -> None:
        assert _parse_content('{"a": 1}') == {"a": 1}

    def test_invalid_yaml_raises(self) -> None:
        with pytest.raises(DocumentLoadError, match="Invalid YAML"):
            _parse_content("a: [unclosed", hint="yaml")

    def test_empty_yaml_document_raises(self) -> None:
        with pytest.raises(DocumentLoadError, match="empty document"):
            _parse_content("", hint="yaml")
