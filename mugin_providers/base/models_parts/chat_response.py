"""
ChatResponseObject: the mutable, in-flight response of one chat turn.

The session orchestrator owns the object for the duration of a request. It
is inserted into the transcript as a ``queued`` placeholder before any network
activity, mutated field by field while canonical events arrive, and frozen
once it reaches a terminal status. Observers get a ``ResponseView`` so they
can render progress without being able to write.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Mapping, Tuple

from .chat_config import ChatConfig, utc_now_iso
from .chat_items import ChatOutputMessage, item_from_dict

ResponseStatus = Literal["queued", "in_progress", "completed", "failed", "cancelled", "incomplete"]

RESPONSE_STATUSES: Tuple[str, ...] = ("queued", "in_progress", "completed", "failed", "cancelled", "incomplete")
TERMINAL_STATUSES = frozenset({"completed", "failed", "cancelled", "incomplete"})


@dataclass
class ChatResponseUsage:
    """Token usage; every field is a non-negative integer, 0 until known."""

    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "inputTokens": self.input_tokens,
            "outputTokens": self.output_tokens,
            "totalTokens": self.total_tokens,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "ChatResponseUsage":
        data = data or {}
        return cls(
            input_tokens=_non_negative_int(data.get("inputTokens")),
            output_tokens=_non_negative_int(data.get("outputTokens")),
            total_tokens=_non_negative_int(data.get("totalTokens")),
        )


def _non_negative_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return max(int(value), 0)


@dataclass
class ChatResponseObject:
    """Structured, possibly partially complete chat response.

    Attributes:
        id: Temporary id until the vendor assigns a real one.
        config: The config the request was issued with.
        status: Lifecycle status, see ``RESPONSE_STATUSES``.
        outputs: Output messages in arrival order, unique by ``id``.
        usage: Token usage, overwritten wholesale on ``response.done``.
    """

    id: str
    config: ChatConfig
    created_at: str = field(default_factory=utc_now_iso)
    outputs: List[ChatOutputMessage] = field(default_factory=list)
    status: ResponseStatus = "queued"
    usage: ChatResponseUsage = field(default_factory=ChatResponseUsage)
    type: Literal["chat_response"] = "chat_response"

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def text(self) -> str:
        return "".join(item.text() for item in self.outputs)

    def find_output(self, item_id: str) -> ChatOutputMessage | None:
        return next((o for o in self.outputs if o.type == "message.output" and o.id == item_id), None)

    def overwrite_from(self, other: "ChatResponseObject") -> None:
        """Copy every field of ``other`` onto this object, keeping its identity.

        ``outputs`` is refilled in place so observers holding the list see the
        new items.
        """
        self.id = other.id
        self.config = other.config
        self.created_at = other.created_at
        self.outputs[:] = other.outputs
        self.status = other.status
        self.usage = other.usage

    def view(self) -> "ResponseView":
        return ResponseView(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "config": self.config.to_dict(),
            "createdAt": self.created_at,
            "outputs": [o.to_dict() for o in self.outputs],
            "status": self.status,
            "usage": self.usage.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ChatResponseObject":
        """Parse a whole-response payload.

        Raises:
            ValueError: on an unknown status or an output that is not an
                assistant message.
        """
        status = data.get("status", "queued")
        if status not in RESPONSE_STATUSES:
            raise ValueError(f"Unknown response status: {status!r}")
        outputs: List[ChatOutputMessage] = []
        for raw in data.get("outputs", []):
            item = item_from_dict(raw)
            if not isinstance(item, ChatOutputMessage):
                raise ValueError("Response outputs must be assistant output messages")
            outputs.append(item)
        return cls(
            id=str(data["id"]),
            config=ChatConfig.from_dict(data["config"]),
            created_at=str(data.get("createdAt") or utc_now_iso()),
            outputs=outputs,
            status=status,
            usage=ChatResponseUsage.from_dict(data.get("usage")),
        )


class ResponseView:
    """Read-only view over a live ``ChatResponseObject``.

    Every access reads through to the underlying object, so a view taken when
    the placeholder was queued keeps reflecting each delta.
    """

    __slots__ = ("_response",)

    def __init__(self, response: ChatResponseObject) -> None:
        self._response = response

    @property
    def id(self) -> str:
        return self._response.id

    @property
    def status(self) -> str:
        return self._response.status

    @property
    def is_terminal(self) -> bool:
        return self._response.is_terminal

    @property
    def usage(self) -> Dict[str, int]:
        return self._response.usage.to_dict()

    @property
    def outputs(self) -> Tuple[Tuple[str, str], ...]:
        """``(item_id, text)`` pairs in arrival order."""
        return tuple((o.id, o.text()) for o in self._response.outputs)

    def text(self) -> str:
        return self._response.text()

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"ResponseView(id={self.id!r}, status={self.status!r}, outputs={len(self._response.outputs)})"


__all__ = [
    "ResponseStatus",
    "RESPONSE_STATUSES",
    "TERMINAL_STATUSES",
    "ChatResponseUsage",
    "ChatResponseObject",
    "ResponseView",
]
