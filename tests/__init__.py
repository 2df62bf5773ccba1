"""Test package for the Lightyear Assistant.

Structure:
    - unit/: Extraction, conversation assembly, Gemini client and config
    - integration/: Endpoint tests against the FastAPI app over ASGI

The upstream Gemini API is replaced by an httpx MockTransport; PDF and
Word fixtures are generated at test time.
"""
