"""Session orchestrator: chat session, read loop and HTTP transport."""

from .post_chat import CANCELLED_NOTE, post_chat_message
from .session import ChatSession
from .transport import ChatTransport, HttpChatTransport, TransportStream

__all__ = [
    "CANCELLED_NOTE",
    "post_chat_message",
    "ChatSession",
    "ChatTransport",
    "HttpChatTransport",
    "TransportStream",
]
