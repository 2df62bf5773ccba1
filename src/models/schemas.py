from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Role(str, Enum):
    """Speaker of a chat turn as tracked by the assistant."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class UpstreamRole(str, Enum):
    """Role names accepted by the Gemini generateContent API."""

    USER = "user"
    MODEL = "model"


class DocumentTopic(str, Enum):
    """Document categories offered by the chat page."""

    FINANCIAL_AID = "Financial Aid"
    STUDY_ABROAD = "Study Abroad"
    LEASE_AGREEMENTS = "Lease Agreements"


# Labels older clients used for model-authored turns
_ASSISTANT_ALIASES = {"ai", "model"}


class ChatTurn(BaseModel):
    """A single message in the conversation.

    Attributes:
        role: The speaker (user, assistant, or system).
        content: The message text.
    """

    model_config = ConfigDict(frozen=True)

    role: Role = Field(..., description="Message role: 'user', 'assistant', or 'system'")
    content: str = Field(..., description="The message content")

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v: Any) -> Any:
        """Map legacy model-turn labels onto the assistant role."""
        if isinstance(v, str) and v.strip().lower() in _ASSISTANT_ALIASES:
            return Role.ASSISTANT
        return v


class ChatRequest(BaseModel):
    """Request payload for the model proxy endpoint.

    Attributes:
        chat: Ordered conversation turns, oldest first.
        topic: Optional document category selected on the chat page.
    """

    chat: list[ChatTurn] = Field(..., min_length=1)
    topic: DocumentTopic | None = None

    @field_validator("chat")
    @classmethod
    def require_conversation_turn(cls, v: list[ChatTurn]) -> list[ChatTurn]:
        """System turns are never forwarded, so at least one other turn is needed."""
        if all(turn.role is Role.SYSTEM for turn in v):
            raise ValueError("chat must contain at least one user or assistant turn")
        return v


class ChatReply(BaseModel):
    """Reply text produced by the model."""

    reply: str


class UploadResponse(BaseModel):
    """Text extracted from an uploaded document."""

    content: str


class ErrorResponse(BaseModel):
    """JSON error envelope returned by every endpoint.

    Attributes:
        error: Short human readable error.
        details: Diagnostic message or upstream payload, when available.
    """

    error: str
    details: Any = None


class UploadedDocument(BaseModel):
    """A file chosen by the user, pending text extraction.

    Attributes:
        filename: Original file name.
        content_type: Declared MIME type, if the browser sent one.
        content: Raw file bytes.
    """

    filename: str
    content_type: str | None = None
    content: bytes
