"""
Chat transcript model.

``history`` is append-only during a session except for its most recent
response object, which mutates while streaming and then freezes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from .chat_config import ChatConfig, utc_now_iso
from .chat_items import ChatInputMessage, ChatItem, ChatOutputMessage
from .chat_response import ChatResponseObject

ChatHistoryItem = Union[ChatInputMessage, ChatOutputMessage, ChatResponseObject]


@dataclass
class Chat:
    config: ChatConfig
    id: str = ""
    history: List[ChatHistoryItem] = field(default_factory=list)
    created_at: str = field(default_factory=utc_now_iso)
    updated_at: str = field(default_factory=utc_now_iso)
    owner_id: str = ""
    owner_name: Optional[str] = None

    def flatten_inputs(self) -> List[ChatItem]:
        """Return the history with every response object replaced by its outputs."""
        flat: List[ChatItem] = []
        for item in self.history:
            if isinstance(item, ChatResponseObject):
                flat.extend(item.outputs)
            elif item is not None:
                flat.append(item)
        return flat

    def responses(self) -> List[ChatResponseObject]:
        return [item for item in self.history if isinstance(item, ChatResponseObject)]


__all__ = ["Chat", "ChatHistoryItem"]
