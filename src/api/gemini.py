"""Model proxy endpoint.

Forwards the assembled conversation to Gemini and returns the reply text.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.agent.exceptions import GeminiAPIError, GeminiTransportError
from src.agent.gemini_client import GeminiClient, get_gemini_client
from src.api.errors import error_response
from src.models.schemas import ChatReply, ChatRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

TRANSPORT_ERROR = "Failed to fetch response from Gemini API"


@router.post("/gemini", response_model=ChatReply)
async def chat_with_gemini(
    request: ChatRequest,
    client: GeminiClient = Depends(get_gemini_client),
) -> ChatReply | JSONResponse:
    """Generate the model's reply to a conversation.

    Args:
        request: Conversation turns and optional topic.
        client: Upstream Gemini client.

    Returns:
        ChatReply with the model's text.

    Raises:
        400: Missing, empty or malformed chat history.
        4xx/5xx: Upstream error status, relayed as-is.
        500: Upstream unreachable or unreadable.
    """
    logger.info(f"Forwarding {len(request.chat)} turns to Gemini")

    try:
        reply = await client.generate_reply(request.chat, request.topic)
    except GeminiAPIError as e:
        return error_response(e.status_code, e.message, details=e.details)
    except GeminiTransportError as e:
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, TRANSPORT_ERROR, details=e.message
        )
    except Exception as e:
        logger.exception("Unexpected error calling Gemini")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, TRANSPORT_ERROR, details=str(e)
        )

    return ChatReply(reply=reply)
