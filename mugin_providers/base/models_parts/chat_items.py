"""
Transcript item models: user input messages and assistant output messages.

Output messages produced by the streaming engine always carry exactly one
``OutputText`` block; the accumulator grows its ``text`` in place.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Mapping, Union

INPUT_MESSAGE_TYPE = "message.input"
OUTPUT_MESSAGE_TYPE = "message.output"


@dataclass
class InputText:
    text: str
    type: Literal["input_text"] = "input_text"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "text": self.text}


@dataclass
class OutputText:
    text: str = ""
    type: Literal["output_text"] = "output_text"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "text": self.text}


@dataclass
class ChatInputMessage:
    """A user-authored message in the transcript."""

    content: List[InputText] = field(default_factory=list)
    role: Literal["user"] = "user"
    type: Literal["message.input"] = INPUT_MESSAGE_TYPE

    def text(self) -> str:
        return "\n".join(part.text for part in self.content)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "role": self.role, "content": [c.to_dict() for c in self.content]}


@dataclass
class ChatOutputMessage:
    """An assistant message produced by a vendor (or a synthetic error note)."""

    id: str
    content: List[OutputText] = field(default_factory=list)
    role: Literal["assistant"] = "assistant"
    type: Literal["message.output"] = OUTPUT_MESSAGE_TYPE

    def text(self) -> str:
        return "".join(part.text for part in self.content)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "role": self.role,
            "content": [c.to_dict() for c in self.content],
        }


ChatItem = Union[ChatInputMessage, ChatOutputMessage]


def item_from_dict(data: Mapping[str, Any]) -> ChatItem:
    """Build an input or output message from its wire dictionary.

    Raises:
        ValueError: when ``type`` is not a known message type.
    """
    item_type = data.get("type")
    if item_type == INPUT_MESSAGE_TYPE:
        return ChatInputMessage(content=[InputText(text=str(c.get("text", ""))) for c in data.get("content", [])])
    if item_type == OUTPUT_MESSAGE_TYPE:
        return ChatOutputMessage(
            id=str(data.get("id", "")),
            content=[OutputText(text=str(c.get("text", ""))) for c in data.get("content", [])],
        )
    raise ValueError(f"Unknown chat item type: {item_type!r}")


__all__ = [
    "INPUT_MESSAGE_TYPE",
    "OUTPUT_MESSAGE_TYPE",
    "InputText",
    "OutputText",
    "ChatInputMessage",
    "ChatOutputMessage",
    "ChatItem",
    "item_from_dict",
]
