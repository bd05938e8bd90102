"""
Async HTTP client for the Gemini Veo REST API.

Thin wrapper around httpx.AsyncClient that authenticates with the
x-goog-api-key header and converts every httpx failure into a
TransportError. Requests are never retried here.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

import httpx

from veo_mcp.core.config import Settings, get_settings
from veo_mcp.models.errors import TransportError

logger = logging.getLogger(__name__)


def _extract_error_message(response: httpx.Response) -> str:
    """Pull error.message from a Google API error body, falling back to the reason."""
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase or f"HTTP {response.status_code}"

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return response.reason_phrase or f"HTTP {response.status_code}"


class VeoClient:
    """
    Authenticated GET/POST access to the Veo API.

    Usage:
        async with VeoClient() as client:
            payload = await client.get("operations/abc123")
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            settings: Server settings; defaults to the cached singleton
            transport: Optional httpx transport (used by tests)

        Raises:
            ConfigurationError: If no API key is configured
        """
        self._settings = settings or get_settings()
        api_key = self._settings.require_api_key()
        self._client = httpx.AsyncClient(
            base_url=self._settings.api_base_url.rstrip("/") + "/",
            timeout=self._settings.request_timeout,
            headers={
                "Content-Type": "application/json",
                "x-goog-api-key": api_key,
            },
            transport=transport,
        )

    async def __aenter__(self) -> VeoClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, endpoint: str) -> dict[str, Any]:
        return await self._request("GET", endpoint)

    async def post(self, endpoint: str, data: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", endpoint, data)

    async def _request(
        self, method: str, endpoint: str, data: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """
        Issue a request and return the decoded JSON body.

        Raises:
            TransportError: On timeout, network failure, or a non-2xx status
        """
        try:
            response = await self._client.request(
                method, endpoint.lstrip("/"), json=data
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning(f"{method} {endpoint}: request timed out")
            raise TransportError(str(e) or "Request timed out", kind="timeout") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            message = _extract_error_message(e.response)
            logger.warning(f"{method} {endpoint}: HTTP {status} - {message}")
            raise TransportError(message, status_code=status) from e
        except httpx.RequestError as e:
            logger.warning(f"{method} {endpoint}: network error - {e}")
            raise TransportError(str(e) or type(e).__name__, kind="network") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise TransportError(
                "Response body is not valid JSON", status_code=response.status_code
            ) from e

        if not isinstance(payload, dict):
            raise TransportError(
                "Unexpected response shape", status_code=response.status_code
            )
        return payload
