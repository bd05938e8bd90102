"""
Tests for the Veo HTTP client.

Uses httpx.MockTransport so no network access is needed.
"""

from __future__ import annotations

import httpx
import pytest
from conftest import TEST_API_KEY, RecordingTransport

from veo_mcp.core.config import Settings
from veo_mcp.models.errors import ConfigurationError, TransportError
from veo_mcp.services.veo_client import VeoClient


class TestRequests:
    """Successful request handling."""

    @pytest.mark.asyncio
    async def test_get_sends_api_key_and_path(self, settings: Settings) -> None:
        transport = RecordingTransport(
            lambda request: httpx.Response(200, json={"name": "operations/abc123"})
        )

        async with VeoClient(settings, transport=transport) as client:
            payload = await client.get("operations/abc123")

        assert payload == {"name": "operations/abc123"}
        request = transport.requests[0]
        assert request.method == "GET"
        assert request.url.path == "/v1beta/operations/abc123"
        assert request.headers["x-goog-api-key"] == TEST_API_KEY

    @pytest.mark.asyncio
    async def test_post_sends_json_body(self, settings: Settings) -> None:
        transport = RecordingTransport(
            lambda request: httpx.Response(200, json={"name": "operations/new"})
        )
        body = {"instances": [{"prompt": "a kite"}], "parameters": {"durationSeconds": 4}}

        async with VeoClient(settings, transport=transport) as client:
            payload = await client.post(
                "models/veo-3.0-generate-001:predictLongRunning", body
            )

        assert payload["name"] == "operations/new"
        request = transport.requests[0]
        assert request.method == "POST"
        assert request.url.path == (
            "/v1beta/models/veo-3.0-generate-001:predictLongRunning"
        )
        assert transport.json_bodies() == [body]


class TestErrors:
    """Every failure surfaces as a TransportError."""

    @pytest.mark.parametrize("status", [400, 401, 403, 404, 429, 500, 503])
    @pytest.mark.asyncio
    async def test_http_status_errors(self, settings: Settings, status: int) -> None:
        transport = RecordingTransport(
            lambda request: httpx.Response(
                status, json={"error": {"code": status, "message": "upstream says no"}}
            )
        )

        async with VeoClient(settings, transport=transport) as client:
            with pytest.raises(TransportError) as exc_info:
                await client.get("operations/abc123")

        assert exc_info.value.status_code == status
        assert exc_info.value.kind == "http"
        assert exc_info.value.message == "upstream says no"

    @pytest.mark.asyncio
    async def test_non_json_error_body_uses_reason(self, settings: Settings) -> None:
        transport = RecordingTransport(
            lambda request: httpx.Response(502, text="<html>bad gateway</html>")
        )

        async with VeoClient(settings, transport=transport) as client:
            with pytest.raises(TransportError) as exc_info:
                await client.get("operations/abc123")

        assert exc_info.value.status_code == 502
        assert exc_info.value.message == "Bad Gateway"

    @pytest.mark.asyncio
    async def test_timeout(self, settings: Settings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with VeoClient(settings, transport=RecordingTransport(handler)) as client:
            with pytest.raises(TransportError) as exc_info:
                await client.get("operations/abc123")

        assert exc_info.value.kind == "timeout"
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_network_error(self, settings: Settings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("name resolution failed", request=request)

        async with VeoClient(settings, transport=RecordingTransport(handler)) as client:
            with pytest.raises(TransportError) as exc_info:
                await client.get("operations/abc123")

        assert exc_info.value.kind == "network"
        assert "name resolution failed" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_invalid_json_body(self, settings: Settings) -> None:
        transport = RecordingTransport(lambda request: httpx.Response(200, text="not json"))

        async with VeoClient(settings, transport=transport) as client:
            with pytest.raises(TransportError, match="not valid JSON"):
                await client.get("operations/abc123")


class TestConfiguration:
    """The client refuses to start without a credential."""

    def test_missing_api_key(self) -> None:
        settings = Settings(_env_file=None)

        with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
            VeoClient(settings)
