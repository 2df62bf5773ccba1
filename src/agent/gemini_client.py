"""Async client for the Gemini generateContent REST API.

Builds the upstream request from the conversation turns, prepends the
persona preamble, and reads the reply text out of the first candidate.

Design notes:

1. **Persona as a user turn** - This integration never sends a system role,
   so the persona instruction is the first ``user`` entry of ``contents``.

2. **Lenient reply extraction** - A successful upstream call without text in
   ``candidates[0].content.parts[0]`` (safety blocks, empty candidates) maps
   to a fixed fallback reply instead of an error.

3. **Injectable transport** - Tests pass an ``httpx.MockTransport`` so no
   network access is needed.
"""

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from src.agent.config import GeminiConfig, get_gemini_config
from src.agent.conversation import to_upstream_contents
from src.agent.exceptions import GeminiAPIError, GeminiTransportError
from src.models.schemas import ChatTurn, DocumentTopic, UpstreamRole

logger = logging.getLogger(__name__)

FALLBACK_REPLY = "I couldn't process that request."


def extract_reply_text(data: Any) -> str:
    """Return the first candidate's first text part, or the fallback reply."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return FALLBACK_REPLY
    if not isinstance(text, str) or not text:
        return FALLBACK_REPLY
    return text


class GeminiClient:
    """Client for generating chat replies with Gemini."""

    def __init__(
        self,
        config: GeminiConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Optional configuration. Loads from environment if not provided.
            transport: Optional httpx transport, used by tests.
        """
        self._config = config or get_gemini_config()
        self._transport = transport

    def _persona(self, topic: DocumentTopic | None) -> str:
        persona = self._config.persona_prompt.strip()
        if persona and topic is not None:
            persona = f"{persona} The user's questions concern {topic.value} documents."
        return persona

    def build_request_body(
        self,
        turns: Sequence[ChatTurn],
        topic: DocumentTopic | None = None,
    ) -> dict[str, Any]:
        """Build the generateContent request body.

        Args:
            turns: Conversation turns, oldest first.
            topic: Optional document category to mention in the persona.

        Returns:
            JSON-serialisable request body.
        """
        contents: list[dict[str, Any]] = []
        persona = self._persona(topic)
        if persona:
            contents.append({"role": UpstreamRole.USER.value, "parts": [{"text": persona}]})
        contents.extend(to_upstream_contents(turns))

        body: dict[str, Any] = {"contents": contents}

        generation_config: dict[str, Any] = {}
        if self._config.temperature is not None:
            generation_config["temperature"] = self._config.temperature
        if self._config.max_output_tokens is not None:
            generation_config["maxOutputTokens"] = self._config.max_output_tokens
        if generation_config:
            body["generationConfig"] = generation_config

        return body

    async def generate_reply(
        self,
        turns: Sequence[ChatTurn],
        topic: DocumentTopic | None = None,
    ) -> str:
        """Ask the model for the next reply in the conversation.

        Args:
            turns: Conversation turns, oldest first.
            topic: Optional document category.

        Returns:
            The reply text, or the fallback reply when the model returned none.

        Raises:
            GeminiAPIError: Upstream answered with a non-success status.
            GeminiTransportError: Upstream unreachable or reply not JSON.
        """
        body = self.build_request_body(turns, topic)

        async with httpx.AsyncClient(
            timeout=self._config.timeout, transport=self._transport
        ) as client:
            try:
                response = await client.post(
                    self._config.generate_url,
                    json=body,
                    headers={"x-goog-api-key": self._config.api_key},
                )
            except httpx.HTTPError as e:
                logger.error(f"Gemini request failed: {e}")
                raise GeminiTransportError(str(e) or type(e).__name__) from e

        try:
            data = response.json()
        except ValueError as e:
            if response.is_success:
                raise GeminiTransportError(f"Invalid JSON from Gemini API: {e}") from e
            data = response.text

        logger.debug(f"Gemini API response ({response.status_code}): {data}")

        if not response.is_success:
            logger.error(f"Gemini API returned {response.status_code}")
            raise GeminiAPIError(
                "Gemini API Error",
                status_code=response.status_code,
                details=data,
            )

        return extract_reply_text(data)


# Module-level singleton instance
_gemini_client: GeminiClient | None = None


def get_gemini_client() -> GeminiClient:
    """Get or create the global Gemini client.

    Returns:
        The GeminiClient instance.
    """
    global _gemini_client
    if _gemini_client is None:
        _gemini_client = GeminiClient()
    return _gemini_client
