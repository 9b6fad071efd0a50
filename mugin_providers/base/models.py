"""
Vendor-agnostic domain models public surface.

Re-exports the implementations under ``mugin_providers.base.models_parts``.
"""

from .models_parts.chat_config import AuditStamp, ChatConfig, utc_now_iso
from .models_parts.chat_items import (
    INPUT_MESSAGE_TYPE,
    OUTPUT_MESSAGE_TYPE,
    ChatInputMessage,
    ChatItem,
    ChatOutputMessage,
    InputText,
    OutputText,
    item_from_dict,
)
from .models_parts.chat_response import (
    RESPONSE_STATUSES,
    TERMINAL_STATUSES,
    ChatResponseObject,
    ChatResponseUsage,
    ResponseStatus,
    ResponseView,
)
from .models_parts.chat_request import ChatRequest
from .models_parts.chat import Chat, ChatHistoryItem

__all__ = [
    "AuditStamp",
    "ChatConfig",
    "utc_now_iso",
    "INPUT_MESSAGE_TYPE",
    "OUTPUT_MESSAGE_TYPE",
    "InputText",
    "OutputText",
    "ChatInputMessage",
    "ChatOutputMessage",
    "ChatItem",
    "item_from_dict",
    "ResponseStatus",
    "RESPONSE_STATUSES",
    "TERMINAL_STATUSES",
    "ChatResponseUsage",
    "ChatResponseObject",
    "ResponseView",
    "ChatRequest",
    "Chat",
    "ChatHistoryItem",
]
