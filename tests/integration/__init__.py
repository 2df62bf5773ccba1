"""Integration tests for the upload and model proxy endpoints.

Requests go through the real FastAPI app with httpx ASGITransport. Only
the Gemini API itself is mocked.
"""
