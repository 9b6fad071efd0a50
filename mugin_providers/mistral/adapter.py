"""Mistral Conversations API stream adapter.

Native events are ``ConversationEvents`` from the ``mistralai`` SDK: an
envelope whose ``data`` carries the typed event with its ``type`` tag.

One native event may map to two canonical ones: the first
``conversation.response.started`` of a new conversation reports the
vendor-side conversation id (``conversation.created``) before the response
starts. Mistral has no separate response id; the conversation id is used.
"""

from __future__ import annotations

import json
from typing import Any, List, Optional

from ..base.models import ChatResponseUsage
from ..base.streaming import (
    BaseVendorAdapter,
    CanonicalEvent,
    ConversationCreated,
    OutputTextDelta,
    ResponseDone,
    ResponseError,
    ResponseStarted,
    read_field,
    token_count,
)


def _payload(native: Any) -> Any:
    return read_field(native, "data", native)


def _jsonable(value: Any) -> Any:
    dump = getattr(value, "model_dump", None)
    if callable(dump):
        return dump()
    return str(value)


def _started(adapter: BaseVendorAdapter, native: Any) -> List[CanonicalEvent]:
    conversation_id = str(read_field(_payload(native), "conversation_id", ""))
    if not conversation_id:
        return []
    events: List[CanonicalEvent] = []
    if not adapter.request.config.conversation_id:
        events.append(ConversationCreated(conversation_id=conversation_id))
    events.append(ResponseStarted(response_id=conversation_id))
    return events


def _delta(adapter: BaseVendorAdapter, native: Any) -> List[CanonicalEvent]:
    data = _payload(native)
    content = read_field(data, "content", "")
    if not isinstance(content, str):
        content = json.dumps(content, ensure_ascii=False, default=_jsonable)
    if not content:
        return []
    return [OutputTextDelta(item_id=str(read_field(data, "id", "")), content=content)]


def _done(adapter: BaseVendorAdapter, native: Any) -> List[CanonicalEvent]:
    usage = read_field(_payload(native), "usage")
    return [
        ResponseDone(
            usage=ChatResponseUsage(
                input_tokens=token_count(read_field(usage, "prompt_tokens")),
                output_tokens=token_count(read_field(usage, "completion_tokens")),
                total_tokens=token_count(read_field(usage, "total_tokens")),
            )
        )
    ]


def _error(adapter: BaseVendorAdapter, native: Any) -> List[CanonicalEvent]:
    data = _payload(native)
    return [
        ResponseError(
            code=str(read_field(data, "code", "unknown")),
            message=str(read_field(data, "message") or "Unknown error"),
        )
    ]


class MistralConversationsAdapter(BaseVendorAdapter):
    vendor_id = "MISTRAL"
    EVENT_MAP = {
        "conversation.response.started": _started,
        "message.output.delta": _delta,
        "conversation.response.done": _done,
        "conversation.response.error": _error,
    }

    def native_tag(self, native: Any) -> Optional[str]:
        return read_field(_payload(native), "type") or read_field(native, "event")


__all__ = ["MistralConversationsAdapter"]
