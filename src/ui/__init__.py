"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat message display
    - Document picker with type checking before upload
    - Topic selection
    - Blocking new sends while a reply is pending

Conversation state lives in ``src.agent.conversation``; the page only
renders it and talks to the API through ``ChatApiClient``.
"""
