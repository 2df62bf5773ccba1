"""FastAPI endpoints for the chat assistant.

Endpoints:
    - GET /health: Service health status
    - POST /api/upload: Extract text from an uploaded document
    - POST /api/gemini: Relay a conversation to the model and return its reply
"""

from src.api.app import app, create_app

__all__ = ["app", "create_app"]
