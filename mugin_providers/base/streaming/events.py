"""Canonical streaming event vocabulary.

Every vendor stream is normalized into these five event types. Each event is
a frozen dataclass exposing its wire name as ``event`` and its payload via
``to_data``; ``event_from_frame`` is the inverse and is strict: unknown names
raise ``UnknownEventType`` and payloads of the wrong shape raise
``MalformedFrame``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, Mapping, Union

from ..errors import MalformedFrame, UnknownEventType
from ..models import ChatResponseUsage


def _require_str(data: Mapping[str, Any], key: str, event: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise MalformedFrame(message=f"'{event}' payload field '{key}' must be a string")
    return value


@dataclass(frozen=True)
class ConversationCreated:
    conversation_id: str
    event: ClassVar[str] = "conversation.created"

    def to_data(self) -> Dict[str, Any]:
        return {"conversationId": self.conversation_id}

    @classmethod
    def from_data(cls, data: Mapping[str, Any]) -> "ConversationCreated":
        return cls(conversation_id=_require_str(data, "conversationId", cls.event))


@dataclass(frozen=True)
class ResponseStarted:
    response_id: str
    event: ClassVar[str] = "response.started"

    def to_data(self) -> Dict[str, Any]:
        return {"responseId": self.response_id}

    @classmethod
    def from_data(cls, data: Mapping[str, Any]) -> "ResponseStarted":
        return cls(response_id=_require_str(data, "responseId", cls.event))


@dataclass(frozen=True)
class OutputTextDelta:
    item_id: str
    content: str
    event: ClassVar[str] = "response.output_text.delta"

    def to_data(self) -> Dict[str, Any]:
        return {"itemId": self.item_id, "content": self.content}

    @classmethod
    def from_data(cls, data: Mapping[str, Any]) -> "OutputTextDelta":
        return cls(
            item_id=_require_str(data, "itemId", cls.event),
            content=_require_str(data, "content", cls.event),
        )


@dataclass(frozen=True)
class ResponseDone:
    usage: ChatResponseUsage = field(default_factory=ChatResponseUsage)
    event: ClassVar[str] = "response.done"

    def to_data(self) -> Dict[str, Any]:
        return {"usage": self.usage.to_dict()}

    @classmethod
    def from_data(cls, data: Mapping[str, Any]) -> "ResponseDone":
        usage = data.get("usage")
        if usage is None:
            usage = {}
        if not isinstance(usage, Mapping):
            raise MalformedFrame(message=f"'{cls.event}' payload field 'usage' must be an object")
        return cls(usage=ChatResponseUsage.from_dict(usage))


@dataclass(frozen=True)
class ResponseError:
    code: str
    message: str
    event: ClassVar[str] = "response.error"

    def to_data(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message}

    @classmethod
    def from_data(cls, data: Mapping[str, Any]) -> "ResponseError":
        return cls(
            code=_require_str(data, "code", cls.event),
            message=_require_str(data, "message", cls.event),
        )


CanonicalEvent = Union[ConversationCreated, ResponseStarted, OutputTextDelta, ResponseDone, ResponseError]

EVENT_TYPES: Dict[str, Callable[[Mapping[str, Any]], CanonicalEvent]] = {
    ConversationCreated.event: ConversationCreated.from_data,
    ResponseStarted.event: ResponseStarted.from_data,
    OutputTextDelta.event: OutputTextDelta.from_data,
    ResponseDone.event: ResponseDone.from_data,
    ResponseError.event: ResponseError.from_data,
}

TERMINAL_EVENTS = frozenset({ResponseDone.event, ResponseError.event})


def event_from_frame(name: str, data: Any) -> CanonicalEvent:
    """Build a canonical event from a decoded frame name and payload."""
    builder = EVENT_TYPES.get(name)
    if builder is None:
        raise UnknownEventType(message=f"Unknown stream event type: {name!r}", event_name=name)
    if not isinstance(data, Mapping):
        raise MalformedFrame(message=f"'{name}' payload must be a JSON object")
    return builder(data)


def is_terminal_event(event: CanonicalEvent) -> bool:
    return event.event in TERMINAL_EVENTS


__all__ = [
    "ConversationCreated",
    "ResponseStarted",
    "OutputTextDelta",
    "ResponseDone",
    "ResponseError",
    "CanonicalEvent",
    "EVENT_TYPES",
    "TERMINAL_EVENTS",
    "event_from_frame",
    "is_terminal_event",
]
