"""HTTP client the chat page uses to reach the upload and model endpoints."""

import os
from typing import Any

import httpx

from src.models.schemas import UploadedDocument


def default_api_base_url() -> str:
    """API_BASE_URL if set, otherwise the local server on PORT."""
    return os.getenv("API_BASE_URL") or f"http://localhost:{os.getenv('PORT', '8000')}"


class ChatApiError(Exception):
    """Raised when an API call fails or returns an error envelope."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(data, dict) and data.get("error"):
        details = data.get("details")
        if isinstance(details, str) and details:
            return f"{data['error']}: {details}"
        return str(data["error"])
    return f"HTTP {response.status_code}"


class ChatApiClient:
    """Calls POST /api/upload and POST /api/gemini."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = (base_url or default_api_base_url()).rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def _post(self, path: str, **kwargs: Any) -> dict[str, Any]:
        async with httpx.AsyncClient(
            base_url=self._base_url, timeout=self._timeout, transport=self._transport
        ) as client:
            try:
                response = await client.post(path, **kwargs)
            except httpx.RequestError as e:
                raise ChatApiError(f"Connection failed: {e}") from e

        if not response.is_success:
            raise ChatApiError(_error_message(response), response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise ChatApiError(f"Invalid response from {path}") from e

    async def upload_document(self, document: UploadedDocument) -> str:
        """Upload a document and return its extracted text."""
        content_type = document.content_type or "application/octet-stream"
        data = await self._post(
            "/api/upload",
            files={"document": (document.filename, document.content, content_type)},
        )
        return str(data.get("content", ""))

    async def request_reply(self, payload: dict[str, Any]) -> str:
        """Send the conversation to the model proxy and return the reply text."""
        data = await self._post("/api/gemini", json=payload)
        return str(data.get("reply", ""))
