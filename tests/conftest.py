"""Pytest fixtures and shared test configuration.

Fixtures:
    - make_pdf / make_docx: Build real document bytes in memory
    - gemini_requests / gemini_responder: Mock upstream Gemini API
    - gemini_client: GeminiClient wired to the mock upstream
    - async_client: HTTPX client for the FastAPI app, with the Gemini
      dependency overridden
"""

from collections.abc import AsyncGenerator, Callable
from typing import Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from src.agent.config import GeminiConfig
from src.agent.gemini_client import GeminiClient, get_gemini_client
from src.api import app
from tests.helpers import TEST_PERSONA, build_docx, build_pdf, gemini_reply


@pytest.fixture
def make_pdf() -> Callable[..., bytes]:
    return build_pdf


@pytest.fixture
def make_docx() -> Callable[..., bytes]:
    return build_docx


@pytest.fixture
def gemini_config() -> GeminiConfig:
    """Deterministic configuration independent of the environment."""
    return GeminiConfig(
        api_key="test-key",
        base_url="https://gemini.test/v1beta",
        model_name="gemini-2.0-flash",
        timeout=5.0,
        persona_prompt=TEST_PERSONA,
        temperature=None,
        max_output_tokens=None,
    )


@pytest.fixture
def gemini_requests() -> list[httpx.Request]:
    """Requests received by the mock Gemini API."""
    return []


@pytest.fixture
def gemini_responder() -> dict[str, Any]:
    """Mutable response settings for the mock Gemini API.

    Tests change ``status``, ``json``, ``content`` or ``error`` to shape the
    next reply.
    """
    return {
        "status": 200,
        "json": gemini_reply("Hello from Gemini"),
        "content": None,
        "error": None,
    }


@pytest.fixture
def gemini_transport(
    gemini_requests: list[httpx.Request], gemini_responder: dict[str, Any]
) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        gemini_requests.append(request)
        if gemini_responder["error"] is not None:
            raise gemini_responder["error"]
        if gemini_responder["content"] is not None:
            return httpx.Response(gemini_responder["status"], content=gemini_responder["content"])
        return httpx.Response(gemini_responder["status"], json=gemini_responder["json"])

    return httpx.MockTransport(handler)


@pytest.fixture
def gemini_client(
    gemini_config: GeminiConfig, gemini_transport: httpx.MockTransport
) -> GeminiClient:
    return GeminiClient(config=gemini_config, transport=gemini_transport)


@pytest.fixture
async def async_client(gemini_client: GeminiClient) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        AsyncClient bound to the app, with Gemini calls going to the mock.
    """
    app.dependency_overrides[get_gemini_client] = lambda: gemini_client
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()
