"""
Pytest configuration and fixtures for the Veo MCP server tests.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Generator
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from veo_mcp.core.config import Settings, get_settings

# Configure pytest-asyncio to use function-scoped event loops
pytest_plugins = ("pytest_asyncio",)

TEST_API_KEY = "test-gemini-key"
TEST_BASE_URL = "https://veo.test/v1beta"


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep every test independent of the host environment and settings cache."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("VEO_GEMINI_API_KEY", raising=False)
    monkeypatch.setenv("VEO_API_BASE_URL", TEST_BASE_URL)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings with a test API key and base URL."""
    return Settings(
        _env_file=None, gemini_api_key=TEST_API_KEY, api_base_url=TEST_BASE_URL
    )


@pytest.fixture
def api_key_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Expose the test API key through the environment."""
    monkeypatch.setenv("GEMINI_API_KEY", TEST_API_KEY)
    get_settings.cache_clear()


# =============================================================================
# Clock and Sleep Fakes
# =============================================================================


class FakeClock:
    """
    Deterministic monotonic clock.

    sleep() advances time instantly and records the requested delay, so the
    poll loop runs without real waiting.
    """

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


# =============================================================================
# Operation Payloads
# =============================================================================


def operation_payload(
    name: str = "operations/abc123",
    *,
    done: bool | None = None,
    error: dict[str, Any] | None = None,
    uris: list[str] | None = None,
) -> dict[str, Any]:
    """Build an operation body the way the Gemini API returns it."""
    payload: dict[str, Any] = {"name": name}
    if done is not None:
        payload["done"] = done
    if error is not None:
        payload["error"] = error
    if uris is not None:
        payload["response"] = {
            "@type": "type.googleapis.com/google.ai.generativelanguage.v1beta.PredictLongRunningResponse",
            "generateVideoResponse": {
                "generatedSamples": [{"video": {"uri": uri}} for uri in uris]
            },
        }
    return payload


@pytest.fixture
def stub_client() -> MagicMock:
    """VeoClient stand-in with async get/post."""
    client = MagicMock()
    client.get = AsyncMock()
    client.post = AsyncMock()
    return client


# =============================================================================
# HTTP Transport
# =============================================================================


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    def json_bodies(self) -> list[Any]:
        return [json.loads(r.content) if r.content else None for r in self.requests]

