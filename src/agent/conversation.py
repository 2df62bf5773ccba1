"""Conversation state and chat-turn assembly.

Holds the ordered turn list for one chat session, folds extracted document
text into user turns, and prepares the payload sent to the model proxy.

A conversation is single-flight: while one submission is uploading or
waiting on the model, further submissions are refused.
"""

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import Any, Protocol

from src.agent.exceptions import ConversationBusyError, DocumentUploadError
from src.models.schemas import ChatTurn, DocumentTopic, Role, UploadedDocument, UpstreamRole
from src.parsing.extractor import DocumentKind, UnsupportedDocumentError, classify_document

logger = logging.getLogger(__name__)

DOCUMENT_PREFIX = "Uploaded Document: "
FALLBACK_REPLY = "Sorry, I couldn't generate a response."

# system turns have no upstream counterpart and are dropped
UPSTREAM_ROLES: dict[Role, UpstreamRole | None] = {
    Role.USER: UpstreamRole.USER,
    Role.ASSISTANT: UpstreamRole.MODEL,
    Role.SYSTEM: None,
}


class ChatBackend(Protocol):
    """The two boundary calls a conversation depends on."""

    async def upload_document(self, document: UploadedDocument) -> str: ...

    async def request_reply(self, payload: dict[str, Any]) -> str: ...


def compose_user_content(typed_message: str | None, extracted_text: str | None) -> str | None:
    """Choose the content of the next user turn.

    A typed message wins over document text. Returns None when there is
    nothing to send.
    """
    message = (typed_message or "").strip()
    if message:
        return message
    if extracted_text and extracted_text.strip():
        return f"{DOCUMENT_PREFIX}{extracted_text}"
    return None


def append_user_turn(
    history: Sequence[ChatTurn],
    typed_message: str | None,
    extracted_text: str | None = None,
) -> tuple[list[ChatTurn], ChatTurn | None]:
    """Append a user turn built from a typed message or extracted text.

    Args:
        history: Existing turns, oldest first. Not modified.
        typed_message: Text typed by the user.
        extracted_text: Text extracted from an attached document.

    Returns:
        The new history and the appended turn. Empty submissions return
        an unchanged copy of the history and None.
    """
    content = compose_user_content(typed_message, extracted_text)
    if content is None:
        return list(history), None

    turn = ChatTurn(role=Role.USER, content=content)
    return [*history, turn], turn


def to_upstream_contents(turns: Sequence[ChatTurn]) -> list[dict[str, Any]]:
    """Convert turns to Gemini ``contents`` entries.

    System turns are dropped, assistant turns are relabelled ``model``,
    order is preserved.
    """
    contents: list[dict[str, Any]] = []
    for turn in turns:
        upstream_role = UPSTREAM_ROLES[turn.role]
        if upstream_role is None:
            continue
        contents.append({"role": upstream_role.value, "parts": [{"text": turn.content}]})
    return contents


class Conversation:
    """Chat state for a single page session.

    Attributes:
        turns: Conversation turns in order. Only ever appended to.
        pending_document: The file waiting to be uploaded with the next send.
        topic: Document category selected by the user, if any.
    """

    def __init__(self, topic: DocumentTopic | None = None) -> None:
        self.turns: list[ChatTurn] = []
        self.pending_document: UploadedDocument | None = None
        self.topic = topic
        self._lock = asyncio.Lock()

    @property
    def is_busy(self) -> bool:
        return self._lock.locked()

    def attach_document(self, document: UploadedDocument) -> DocumentKind:
        """Set the document to send with the next message.

        Replaces any previously attached document.

        Raises:
            UnsupportedDocumentError: If the file type is not supported. The
                pending document is cleared and history is left untouched.
        """
        kind = classify_document(document.filename, document.content_type)
        if kind is DocumentKind.UNSUPPORTED:
            self.pending_document = None
            raise UnsupportedDocumentError(document.filename, document.content_type)

        self.pending_document = document
        return kind

    def clear_document(self) -> None:
        self.pending_document = None

    def append_user_turn(
        self, typed_message: str | None, extracted_text: str | None = None
    ) -> ChatTurn | None:
        self.turns, turn = append_user_turn(self.turns, typed_message, extracted_text)
        return turn

    def append_reply(self, reply: str | None) -> ChatTurn:
        """Append the model's reply, or the fallback message if there is none."""
        content = reply if reply and reply.strip() else FALLBACK_REPLY
        turn = ChatTurn(role=Role.ASSISTANT, content=content)
        self.turns.append(turn)
        return turn

    def request_payload(self) -> dict[str, Any]:
        """Build the model proxy request body from the current turns."""
        payload: dict[str, Any] = {
            "chat": [
                turn.model_dump(mode="json") for turn in self.turns if turn.role is not Role.SYSTEM
            ]
        }
        if self.topic is not None:
            payload["topic"] = self.topic.value
        return payload

    async def submit(
        self,
        message: str | None,
        backend: ChatBackend,
        on_turn: Callable[[ChatTurn], None] | None = None,
    ) -> ChatTurn | None:
        """Send a message, uploading the pending document first if there is one.

        Args:
            message: Text typed by the user.
            backend: Client for the upload and model endpoints.
            on_turn: Called with each turn as it is appended.

        Returns:
            The appended assistant turn, or None for an empty submission.

        Raises:
            ConversationBusyError: If another submission is in flight.
            DocumentUploadError: If the attached document could not be
                extracted, or yielded no text and no message was typed.
                Nothing is appended in that case.
        """
        if self._lock.locked():
            raise ConversationBusyError("A message is already being sent")

        async with self._lock:
            document = self.pending_document
            if not (message or "").strip() and document is None:
                return None

            extracted_text: str | None = None
            if document is not None:
                self.pending_document = None
                try:
                    extracted_text = await backend.upload_document(document)
                except Exception as e:
                    logger.warning(f"Document upload failed for {document.filename}: {e}")
                    raise DocumentUploadError(str(e)) from e

            user_turn = self.append_user_turn(message, extracted_text)
            if user_turn is None:
                if document is not None:
                    logger.warning(f"No text extracted from {document.filename}")
                    raise DocumentUploadError("The document contains no extractable text")
                return None
            if on_turn is not None:
                on_turn(user_turn)

            reply: str | None = None
            try:
                reply = await backend.request_reply(self.request_payload())
            except Exception as e:
                logger.error(f"Model request failed: {e}")

            reply_turn = self.append_reply(reply)
            if on_turn is not None:
                on_turn(reply_turn)
            return reply_turn
