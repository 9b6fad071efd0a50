"""
ChatRequest DTO sent from the session orchestrator to the dispatcher.

``inputs`` is already flattened: prior response objects are unwrapped to
their output messages so responses are never nested into a new request.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from .chat_config import ChatConfig
from .chat_items import ChatItem, ChatOutputMessage, item_from_dict


@dataclass
class ChatRequest:
    """Vendor/model selection plus the flattened input sequence."""

    config: ChatConfig
    inputs: List[ChatItem] = field(default_factory=list)
    store: bool = False
    stream: bool = True

    @property
    def vendor_id(self) -> str:
        return self.config.vendor_id

    def messages(self, *, since_last_output: bool = False) -> List[Dict[str, str]]:
        """Inputs as ``{"role", "content"}`` text messages, empty ones skipped.

        With ``since_last_output`` only the items after the last assistant
        message are returned (the vendor already holds the rest).
        """
        items = list(self.inputs)
        if since_last_output:
            for idx in range(len(items) - 1, -1, -1):
                if isinstance(items[idx], ChatOutputMessage):
                    items = items[idx + 1:]
                    break
        out: List[Dict[str, str]] = []
        for item in items:
            text = item.text()
            if text:
                out.append({"role": item.role, "content": text})
        return out

    def to_dict(self) -> Dict[str, Any]:
        return {
            "config": self.config.to_dict(),
            "inputs": [i.to_dict() for i in self.inputs],
            "store": self.store,
            "stream": self.stream,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ChatRequest":
        return cls(
            config=ChatConfig.from_dict(data["config"]),
            inputs=[item_from_dict(i) for i in data.get("inputs", [])],
            store=bool(data.get("store", False)),
            stream=bool(data.get("stream", True)),
        )


__all__ = ["ChatRequest"]
