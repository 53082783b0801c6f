"""Tests for tier1_runtime.api_client (HttpClient)."""
from __future__ import annotations

import json

import httpx
import pytest
from pydantic import BaseModel

from limitly_sdk.tier0_core.errors import ErrorKind, LimitlyError
from limitly_sdk.tier1_runtime.api_client import RequestOptions

from conftest import API_KEY, BASE_URL


def _json(status: int, body):
    return lambda request: httpx.Response(status, json=body)


# ── success path ───────────────────────────────────────────────────────────

class TestSuccess:
    @pytest.mark.asyncio
    async def test_returns_body_unchanged(self, make_client):
        body = {"success": True, "data": [{"id": "p1"}], "count": 1}
        client, recorder = make_client(_json(200, body))
        assert await client.get("/plans") == body
        assert len(recorder.requests) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("verb, method", [
        ("get", "GET"), ("post", "POST"), ("put", "PUT"), ("delete", "DELETE"),
    ])
    async def test_one_request_per_call(self, make_client, verb, method):
        client, recorder = make_client(_json(200, {"success": True}))
        await getattr(client, verb)("/keys/k1")
        assert len(recorder.requests) == 1
        assert recorder.last.method == method

    @pytest.mark.asyncio
    async def test_path_appended_verbatim(self, make_client):
        client, recorder = make_client(_json(200, {}))
        await client.get("plans")
        assert str(recorder.last.url) == f"{BASE_URL}plans"

    @pytest.mark.asyncio
    async def test_non_json_body_returned_as_text(self, make_client):
        client, _ = make_client(lambda request: httpx.Response(200, text="pong"))
        assert await client.get("/ping") == "pong"

    @pytest.mark.asyncio
    async def test_model_parsing(self, make_client):
        class Pong(BaseModel):
            ok: bool

        client, _ = make_client(_json(200, {"ok": True}))
        result = await client.get("/ping", model=Pong)
        assert isinstance(result, Pong)
        assert result.ok is True

    @pytest.mark.asyncio
    async def test_no_content_returns_none(self, make_client):
        class Pong(BaseModel):
            ok: bool

        client, recorder = make_client(lambda request: httpx.Response(204))
        assert await client.delete("/keys/k1", model=Pong) is None
        assert recorder.last.method == "DELETE"

    @pytest.mark.asyncio
    async def test_empty_success_body_returns_none(self, make_client):
        client, _ = make_client(lambda request: httpx.Response(200, content=b""))
        assert await client.get("/ping") is None


# ── request construction ───────────────────────────────────────────────────

class TestRequestConstruction:
    @pytest.mark.asyncio
    async def test_default_headers(self, make_client):
        client, recorder = make_client(_json(200, {}))
        await client.get("/plans")
        assert recorder.last.headers["Authorization"] == f"Bearer {API_KEY}"
        assert recorder.last.headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_per_call_header_overrides_default(self, make_client):
        client, recorder = make_client(_json(200, {}))
        await client.get("/plans", RequestOptions(headers={"Content-Type": "text/plain", "X-Trace": "t1"}))
        assert recorder.last.headers["Content-Type"] == "text/plain"
        assert recorder.last.headers["X-Trace"] == "t1"

    @pytest.mark.asyncio
    async def test_header_merge_order(self, make_client):
        client, recorder = make_client(
            _json(200, {}), headers={"X-Source": "config", "X-Tenant": "acme"}
        )
        await client.get("/plans", RequestOptions(headers={"X-Source": "call"}))
        assert recorder.last.headers["X-Source"] == "call"
        assert recorder.last.headers["X-Tenant"] == "acme"
        assert recorder.last.headers["Authorization"] == f"Bearer {API_KEY}"

    @pytest.mark.asyncio
    async def test_config_timeout_used_by_default(self, make_client):
        client, recorder = make_client(_json(200, {}), timeout=2500)
        await client.get("/plans")
        assert recorder.last.extensions["timeout"]["read"] == 2.5

    @pytest.mark.asyncio
    async def test_per_call_timeout_wins(self, make_client):
        client, recorder = make_client(_json(200, {}), timeout=2500)
        await client.get("/plans", RequestOptions(timeout=500))
        assert recorder.last.extensions["timeout"]["read"] == 0.5

    @pytest.mark.asyncio
    async def test_post_sends_json_body(self, make_client):
        client, recorder = make_client(_json(201, {"success": True}))
        await client.post("/plans", {"name": "Pro", "max_requests": 1000})
        assert json.loads(recorder.last.content) == {"name": "Pro", "max_requests": 1000}

    @pytest.mark.asyncio
    async def test_pydantic_body_drops_unset_optionals(self, make_client):
        class Body(BaseModel):
            name: str
            description: str | None = None

        client, recorder = make_client(_json(200, {"success": True}))
        await client.put("/plans/p1", Body(name="Pro"))
        assert json.loads(recorder.last.content) == {"name": "Pro"}

    @pytest.mark.asyncio
    async def test_post_without_body_sends_nothing(self, make_client):
        client, recorder = make_client(_json(200, {"success": True}))
        await client.post("/keys/k1/regenerate")
        assert recorder.last.content == b""

    @pytest.mark.asyncio
    async def test_get_ignores_body(self, make_client):
        client, recorder = make_client(_json(200, {}))
        await client.request("GET", "/plans", {"ignored": True})
        assert recorder.last.content == b""

    @pytest.mark.asyncio
    async def test_cache_hints_do_not_change_request(self, make_client):
        client, recorder = make_client(_json(200, {}))
        await client.get("/plans", RequestOptions(cache=True, revalidate=3600, tags=["plans"]))
        assert len(recorder.requests) == 1
        assert "cache" not in {k.lower() for k in recorder.last.headers.keys()}


# ── error normalization ────────────────────────────────────────────────────

class TestErrors:
    @pytest.mark.asyncio
    async def test_error_field_becomes_message(self, make_client):
        client, _ = make_client(_json(401, {"error": "Invalid API key"}))
        with pytest.raises(LimitlyError) as exc_info:
            await client.get("/keys")
        err = exc_info.value
        assert err.message == "Invalid API key"
        assert err.status_code == 401
        assert err.kind is ErrorKind.RESPONSE
        assert err.response == {"error": "Invalid API key"}

    @pytest.mark.asyncio
    async def test_status_line_message_without_error_field(self, make_client):
        client, _ = make_client(_json(500, {"success": False}))
        with pytest.raises(LimitlyError) as exc_info:
            await client.get("/keys")
        assert exc_info.value.message == "HTTP 500: Internal Server Error"
        assert exc_info.value.response == {"success": False}

    @pytest.mark.asyncio
    async def test_non_json_error_body(self, make_client):
        client, _ = make_client(lambda request: httpx.Response(502, text="bad gateway"))
        with pytest.raises(LimitlyError) as exc_info:
            await client.get("/keys")
        assert exc_info.value.message == "HTTP 502: Bad Gateway"
        assert exc_info.value.response == "bad gateway"

    @pytest.mark.asyncio
    async def test_connect_error_is_network_error(self, make_client):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client, recorder = make_client(refuse)
        with pytest.raises(LimitlyError) as exc_info:
            await client.get("/keys")
        err = exc_info.value
        assert err.status_code == 0
        assert err.kind is ErrorKind.TRANSPORT
        assert err.message.startswith("Network error: ")
        assert err.response == {"originalError": "connection refused"}
        assert len(recorder.requests) == 1

    @pytest.mark.asyncio
    async def test_timeout_is_network_error(self, make_client):
        def slow(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client, _ = make_client(slow)
        with pytest.raises(LimitlyError) as exc_info:
            await client.get("/keys")
        assert exc_info.value.kind is ErrorKind.TRANSPORT
        assert exc_info.value.message == "Network error: timed out"

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_unknown(self, make_client):
        def broken(request):
            raise RuntimeError("boom")

        client, _ = make_client(broken)
        with pytest.raises(LimitlyError) as exc_info:
            await client.get("/keys")
        err = exc_info.value
        assert err.kind is ErrorKind.UNKNOWN
        assert err.message == "Unknown error occurred"
        assert err.status_code == 0
        assert isinstance(err.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_unsupported_method_is_unknown_and_not_sent(self, make_client):
        client, recorder = make_client(_json(200, {}))
        with pytest.raises(LimitlyError) as exc_info:
            await client.request("PATCH", "/keys/k1")
        assert exc_info.value.kind is ErrorKind.UNKNOWN
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_existing_limitly_error_not_rewrapped(self, make_client):
        original = LimitlyError("already normalized", 418, {"teapot": True}, kind=ErrorKind.RESPONSE)

        def raise_normalized(request):
            raise original

        client, _ = make_client(raise_normalized)
        with pytest.raises(LimitlyError) as exc_info:
            await client.get("/keys")
        assert exc_info.value is original

    @pytest.mark.asyncio
    async def test_model_mismatch_is_unknown(self, make_client):
        class Strict(BaseModel):
            count: int

        client, _ = make_client(_json(200, {"count": "many"}))
        with pytest.raises(LimitlyError) as exc_info:
            await client.get("/plans", model=Strict)
        assert exc_info.value.kind is ErrorKind.UNKNOWN


# ── debug helpers ──────────────────────────────────────────────────────────

class TestDebugHelpers:
    def test_base_url(self, make_client):
        client, _ = make_client(_json(200, {}))
        assert client.base_url == BASE_URL

    def test_masked_api_key(self, make_client):
        client, _ = make_client(_json(200, {}))
        assert client.masked_api_key == API_KEY[:8] + "..."
        assert API_KEY not in client.masked_api_key
