"""Chat service (FastAPI): dispatcher and chat-config routes."""
