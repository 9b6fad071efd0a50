from .store import InMemoryChatConfigStore, default_chat_configs

__all__ = ["InMemoryChatConfigStore", "default_chat_configs"]
