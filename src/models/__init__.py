"""Pydantic models for API requests, responses and conversation state.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - ChatTurn: Individual message in conversation
    - ChatRequest: Incoming model proxy payload
    - ChatReply: Model reply text
    - UploadResponse: Extracted document text
    - ErrorResponse: JSON error envelope
    - UploadedDocument: File pending extraction
"""

from src.models.schemas import (
    ChatReply,
    ChatRequest,
    ChatTurn,
    DocumentTopic,
    ErrorResponse,
    Role,
    UploadedDocument,
    UploadResponse,
    UpstreamRole,
)

__all__ = [
    "ChatReply",
    "ChatRequest",
    "ChatTurn",
    "DocumentTopic",
    "ErrorResponse",
    "Role",
    "UploadResponse",
    "UploadedDocument",
    "UpstreamRole",
]
