"""In-memory chat-config store, seeded with the published default agents.

Thread-safe for the FastAPI thread pool. Every read returns copies so callers
cannot mutate stored configs behind the store's back.
"""

from __future__ import annotations

import time
from threading import Lock
from typing import Dict, Iterable, List, Optional

from ...base.models import AuditStamp, ChatConfig, utc_now_iso
from ..interfaces.repos import ChatConfigNotFound


def default_chat_configs() -> List[ChatConfig]:
    now = utc_now_iso()

    def _published(config_id: str, name: str, description: str, vendor_id: str, model: str) -> ChatConfig:
        return ChatConfig(
            id=config_id,
            name=name,
            description=description,
            vendor_id=vendor_id,
            project="DEFAULT",
            model=model,
            instructions="",
            type="published",
            access_groups="all",
            created=AuditStamp(at=now, by_id="system"),
            updated=AuditStamp(at=now, by_id="system"),
        )

    return [
        _published("1000", "Mistral", "Mistral er en kraftig europeisk variant av ChatGPT", "MISTRAL", "mistral-large-latest"),
        _published("2000", "ChatGPT rask", "OpenAIs KI for rask og presis informasjon.", "OPENAI", "gpt-4.1"),
        _published(
            "3000",
            "ChatGPT tenker",
            "OpenAIs avanserte og nyeste KI for rask tenkning og resonnering.",
            "OPENAI",
            "gpt-5.2",
        ),
    ]


class InMemoryChatConfigStore:
    def __init__(self, seed: Optional[Iterable[ChatConfig]] = None) -> None:
        self._lock = Lock()
        configs = default_chat_configs() if seed is None else list(seed)
        self._configs: Dict[str, ChatConfig] = {c.id: c.copy() for c in configs}

    def get_chat_config(self, config_id: str) -> Optional[ChatConfig]:
        with self._lock:
            config = self._configs.get(config_id)
            return config.copy() if config else None

    def list_chat_configs(self) -> List[ChatConfig]:
        with self._lock:
            return [c.copy() for c in self._configs.values()]

    def get_chat_configs_by_vendor_agent_id(self, vendor_agent_id: str) -> List[ChatConfig]:
        if not vendor_agent_id:
            return []
        with self._lock:
            return [c.copy() for c in self._configs.values() if c.vendor_agent_id == vendor_agent_id]

    def create_chat_config(self, config: ChatConfig) -> ChatConfig:
        with self._lock:
            new_id = str(int(time.time() * 1000))
            while new_id in self._configs:
                new_id = str(int(new_id) + 1)
            stored = config.copy()
            stored.id = new_id
            self._configs[new_id] = stored
            return stored.copy()

    def replace_chat_config(self, config_id: str, config: ChatConfig) -> ChatConfig:
        with self._lock:
            if config_id not in self._configs:
                raise ChatConfigNotFound(config_id)
            stored = config.copy()
            stored.id = config_id
            self._configs[config_id] = stored
            return stored.copy()

    def delete_chat_config(self, config_id: str) -> None:
        with self._lock:
            self._configs.pop(config_id, None)


__all__ = ["InMemoryChatConfigStore", "default_chat_configs"]
