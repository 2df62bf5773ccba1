"""Exceptions raised by the upstream model client and the conversation."""

from typing import Any


class GeminiError(Exception):
    """Base exception for all Gemini-related errors."""

    def __init__(self, message: str, status_code: int = 500, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


class GeminiAPIError(GeminiError):
    """Raised when the Gemini API answers with a non-success status."""

    pass


class GeminiTransportError(GeminiError):
    """Raised when the Gemini API cannot be reached or its reply cannot be read."""

    pass


class ConversationBusyError(Exception):
    """Raised when a send is attempted while another is still in flight."""

    pass


class DocumentUploadError(Exception):
    """Raised when the attached document could not be turned into text."""

    pass
