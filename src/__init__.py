"""Lightyear Assistant - chat with Gemini about your documents.

Combines FastAPI for the HTTP boundary, httpx for upstream calls,
NiceGUI for the chat page, and Pydantic for data validation.

Components:
    - api: Upload and model proxy endpoints
    - agent: Conversation assembly and Gemini client
    - parsing: Text, PDF and Word extraction
    - ui: Web interface for chat interactions
    - models: Request/response schemas
"""

__version__ = "0.1.0"
