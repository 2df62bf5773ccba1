"""Unit tests for individual components in isolation.

Coverage:
    - parsing/: Classification and text extraction
    - agent/: Conversation assembly, Gemini request building, configuration
    - models/: Pydantic validation
"""
