"""Chat-config store contract used by the service layer.

Controllers depend only on this ``Protocol``; the in-memory implementation
under ``persistence/memory`` stands in for a real database.

Failure semantics:
- Lookups return ``None`` (or an empty list) when nothing matches.
- ``replace_chat_config`` raises ``ChatConfigNotFound`` for an unknown id.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from ...base.models import ChatConfig


class ChatConfigNotFound(KeyError):
    """Raised when a chat config id does not exist in the store."""


class IChatConfigStore(Protocol):
    def get_chat_config(self, config_id: str) -> Optional[ChatConfig]: ...

    def list_chat_configs(self) -> List[ChatConfig]: ...

    def get_chat_configs_by_vendor_agent_id(self, vendor_agent_id: str) -> List[ChatConfig]: ...

    def create_chat_config(self, config: ChatConfig) -> ChatConfig: ...

    def replace_chat_config(self, config_id: str, config: ChatConfig) -> ChatConfig: ...

    def delete_chat_config(self, config_id: str) -> None: ...


__all__ = ["ChatConfigNotFound", "IChatConfigStore"]
