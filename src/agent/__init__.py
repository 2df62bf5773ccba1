"""Conversation assembly and upstream model access.

Responsibilities:
    - Conversation state per chat session, with single-flight sends
    - Folding extracted document text into user turns
    - Role mapping from assistant turns to the upstream model role
    - Gemini generateContent calls with the persona preamble
    - Configuration loaded from the environment

Kept free of HTTP routing so the UI and the API can share it.
"""

from src.agent.config import GeminiConfig, get_gemini_config
from src.agent.conversation import (
    Conversation,
    append_user_turn,
    to_upstream_contents,
)
from src.agent.exceptions import (
    ConversationBusyError,
    DocumentUploadError,
    GeminiAPIError,
    GeminiError,
    GeminiTransportError,
)
from src.agent.gemini_client import GeminiClient, get_gemini_client

__all__ = [
    "Conversation",
    "ConversationBusyError",
    "DocumentUploadError",
    "GeminiAPIError",
    "GeminiClient",
    "GeminiConfig",
    "GeminiError",
    "GeminiTransportError",
    "append_user_turn",
    "get_gemini_client",
    "get_gemini_config",
    "to_upstream_contents",
]
