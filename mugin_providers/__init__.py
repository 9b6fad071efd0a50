"""mugin_providers package

Streaming normalization and accumulation engine for multi-vendor LLM chat.

Purpose:
    Vendor adapters translate OpenAI, Mistral and Ollama streams into one
    canonical event vocabulary, a wire codec carries those events to the
    client, and the session orchestrator folds them into the live chat
    transcript.

Public API (re-exported):
    - Version: ``__version__``
    - Errors: :class:`EngineError`, :class:`ErrorCode`
    - Session: :class:`ChatSession`, :class:`HttpChatTransport`
    - Factory: :class:`VendorFactory`
"""

from .base.errors import EngineError, ErrorCode
from .base.factory import VendorFactory
from .client import ChatSession, HttpChatTransport

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "EngineError",
    "ErrorCode",
    "VendorFactory",
    "ChatSession",
    "HttpChatTransport",
]
