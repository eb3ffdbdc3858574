"""Tests for the asynchronous flavor of swaggerlite.client.SwaggerClient."""

from __future__ import annotations

import asyncio
import inspect
import json
from typing import Callable

import httpx
import pytest

from swaggerlite.client import SwaggerClient
from swaggerlite.exceptions import (
    MissingRequiredParameterError,
    NotFoundError,
    OperationNotFoundError,
)

MakeClient = Callable[..., SwaggerClient]


class TestAsyncRequests:
    async def test_get_async(self, make_client: MakeClient, transport: httpx.MockTransport) -> None:
        response = await make_client().get_async("/pets", {"limit": 5})
        assert response.json() == {"ok": True}
        assert str(transport.last.url) == "https://petstore.example.com/v2/pets?limit=5"

    async def test_execute_async(self, make_client: MakeClient, transport: httpx.MockTransport) -> None:
        await make_client().execute_async("createPet", {"pet": {"name": "Rex"}})
        assert transport.last.method == "POST"
        assert json.loads(transport.last.content) == {"name": "Rex"}

    async def test_attribute_style_suffixes(
        self, make_client: MakeClient, transport: httpx.MockTransport
    ) -> None:
        client = make_client()
        await client.getPetAsync({"petId": 1})
        await client.getPet_async({"petId": 2})
        assert [r.url.path for r in transport.requests] == ["/v2/pets/1", "/v2/pets/2"]

    async def test_every_verb_has_an_async_twin(
        self, make_client: MakeClient, petstore_raw: dict, transport: httpx.MockTransport
    ) -> None:
        verbs = ["get", "put", "post", "head", "patch", "delete", "options"]
        petstore_raw["paths"]["/any"] = {verb: {"summary": verb} for verb in verbs}
        client = make_client(swagger=petstore_raw)
        for verb in verbs:
            await getattr(client, f"{verb}_async")("/any")
        assert [r.method for r in transport.requests] == [v.upper() for v in verbs]

    @pytest.mark.parametrize(
        "verb", ["get", "put", "post", "head", "patch", "delete", "options"]
    )
    async def test_camel_case_verb_suffix(
        self, verb: str, make_client: MakeClient, petstore_raw: dict, transport: httpx.MockTransport
    ) -> None:
        petstore_raw["paths"]["/any"] = {verb: {"summary": verb}}
        client = make_client(swagger=petstore_raw)
        response = await getattr(client, f"{verb}Async")("/any")
        assert response.status_code == 200
        assert transport.last.method == verb.upper()
        assert transport.last.url.path == "/v2/any"

    async def test_camel_case_verb_suffix_with_input(
        self, make_client: MakeClient, transport: httpx.MockTransport
    ) -> None:
        await make_client().getAsync("/pets", {"limit": 5})
        assert str(transport.last.url) == "https://petstore.example.com/v2/pets?limit=5"

    async def test_concurrent_requests(
        self, make_client: MakeClient, transport: httpx.MockTransport
    ) -> None:
        client = make_client()
        responses = await asyncio.gather(
            *(client.execute_async("getPet", {"petId": i}) for i in range(5))
        )
        assert all(r.status_code == 200 for r in responses)
        assert sorted(r.url.path for r in transport.requests) == [
            f"/v2/pets/{i}" for i in range(5)
        ]

    async def test_async_context_manager(
        self, petstore_raw: dict, transport: httpx.MockTransport
    ) -> None:
        async with SwaggerClient(swagger=petstore_raw, transport=transport) as client:
            await client.getInventoryAsync()
        assert transport.last.url.path == "/v2/store/inventory"

    async def test_async_context_manager_closes_both_pools(
        self, petstore_raw: dict, transport: httpx.MockTransport
    ) -> None:
        async with SwaggerClient(swagger=petstore_raw, transport=transport) as client:
            await client.getInventoryAsync()
        assert client._http.is_closed
        assert client._async_http.is_closed

    async def test_close_leaves_async_pool_open(
        self, petstore_raw: dict, transport: httpx.MockTransport
    ) -> None:
        client = SwaggerClient(swagger=petstore_raw, transport=transport)
        await client.getInventoryAsync()
        client.close()
        assert client._http.is_closed
        assert not client._async_http.is_closed
        await client.aclose()
        assert client._async_http.is_closed

    async def test_http_errors(self, make_client: MakeClient, make_transport) -> None:
        transport = make_transport(lambda request: httpx.Response(404))
        client = make_client(transport=transport, http_errors=True)
        with pytest.raises(NotFoundError):
            await client.execute_async("getInventory")

    async def test_separate_async_transport(
        self, make_client: MakeClient, make_transport, transport: httpx.MockTransport
    ) -> None:
        async_transport = make_transport()
        client = make_client(async_transport=async_transport)
        await client.get_async("/store/inventory")
        client.get("/store/inventory")
        assert len(async_transport.requests) == 1
        assert len(transport.requests) == 1


class TestSetupErrorsRaiseImmediately:
    """Document and parameter errors surface from the call, not the awaitable."""

    def test_unknown_operation(self, make_client: MakeClient) -> None:
        with pytest.raises(OperationNotFoundError):
            make_client().execute_async("adoptPet")

    def test_unknown_path(self, make_client: MakeClient) -> None:
        with pytest.raises(OperationNotFoundError):
            make_client().get_async("/owners")

    def test_missing_required(self, make_client: MakeClient, transport: httpx.MockTransport) -> None:
        with pytest.raises(MissingRequiredParameterError):
            make_client().post_async("/pets", {})
        assert transport.requests == []

    def test_attribute_style_unknown(self, make_client: MakeClient) -> None:
        with pytest.raises(OperationNotFoundError):
            make_client().adoptPetAsync()

    async def test_successful_call_returns_awaitable(self, make_client: MakeClient) -> None:
        pending = make_client().request_async("get", "/store/inventory")
        assert inspect.isawaitable(pending)
        response = await pending
        assert response.status_code == 200
