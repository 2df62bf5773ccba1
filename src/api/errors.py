"""JSON error envelope and application-wide exception handlers.

Every failure leaves the API as ``{"error": ..., "details": ...}``.
"""

import logging
from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

CHAT_HISTORY_ERROR = "Chat history is required and should be a non-empty array."
INVALID_BODY_ERROR = "Invalid request body"


def error_response(status_code: int, error: str, details: Any = None) -> JSONResponse:
    """Build a JSON error response.

    Args:
        status_code: HTTP status to return.
        error: Short error description.
        details: Optional diagnostic payload; omitted when None.
    """
    content: dict[str, Any] = {"error": error}
    if details is not None:
        content["details"] = jsonable_encoder(details)
    return JSONResponse(status_code=status_code, content=content)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTPException (including 404/405 from routing) as an error envelope."""
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


def validation_message(errors: Sequence[Any]) -> str:
    """Pick the error text for a list of request validation errors."""
    for error in errors:
        loc = tuple(error.get("loc", ()))
        if loc[:2] == ("body", "chat"):
            return CHAT_HISTORY_ERROR
    return INVALID_BODY_ERROR


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as client errors (400)."""
    errors = exc.errors()
    logger.warning(f"Rejected request to {request.url.path}: {len(errors)} invalid field(s)")
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        validation_message(errors),
        details=errors,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: never let an exception escape without an envelope."""
    logger.exception(f"Unhandled error on {request.url.path}")
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        details=str(exc),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error envelope handlers on an application."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
