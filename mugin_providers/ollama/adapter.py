"""Ollama ``/api/chat`` stream adapter.

Native events are the decoded NDJSON chunks of a streaming chat call::

    {"model": "...", "message": {"role": "assistant", "content": "Hel"}, "done": false}
    {"model": "...", "done": true, "prompt_eval_count": 12, "eval_count": 40}
    {"error": "model 'x' not found"}

Ollama assigns no response or message ids, so the adapter opens with a
synthetic ``response.started{ollama_<uuid>}`` and writes every delta to the
single item ``msg_<responseId>``.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, List, Optional

from ..base.models import ChatRequest, ChatResponseUsage
from ..base.streaming import (
    BaseVendorAdapter,
    CanonicalEvent,
    OutputTextDelta,
    ResponseDone,
    ResponseError,
    ResponseStarted,
    read_field,
    token_count,
)


def _message(adapter: "OllamaChatAdapter", native: Any) -> List[CanonicalEvent]:
    content = read_field(read_field(native, "message"), "content", "")
    if not content:
        return []
    return [OutputTextDelta(item_id=adapter.item_id, content=str(content))]


def _done(adapter: "OllamaChatAdapter", native: Any) -> List[CanonicalEvent]:
    prompt = token_count(read_field(native, "prompt_eval_count"))
    completion = token_count(read_field(native, "eval_count"))
    events: List[CanonicalEvent] = _message(adapter, native)
    events.append(
        ResponseDone(usage=ChatResponseUsage(input_tokens=prompt, output_tokens=completion, total_tokens=prompt + completion))
    )
    return events


def _error(adapter: "OllamaChatAdapter", native: Any) -> List[CanonicalEvent]:
    return [ResponseError(code="unknown", message=str(read_field(native, "error") or "Unknown error"))]


class OllamaChatAdapter(BaseVendorAdapter):
    vendor_id = "OLLAMA"
    EVENT_MAP = {
        "message": _message,
        "done": _done,
        "error": _error,
    }

    def __init__(self, request: ChatRequest, *, logger: Optional[logging.Logger] = None) -> None:
        super().__init__(request, logger=logger)
        self.response_id = f"ollama_{uuid.uuid4().hex}"
        self.item_id = f"msg_{self.response_id}"
        self.ctx.response_id = self.response_id

    def opening_events(self) -> List[CanonicalEvent]:
        return [ResponseStarted(response_id=self.response_id)]

    def native_tag(self, native: Any) -> Optional[str]:
        if not isinstance(native, dict):
            return None
        if native.get("error"):
            return "error"
        if native.get("done") is True:
            return "done"
        if "message" in native:
            return "message"
        return None


__all__ = ["OllamaChatAdapter"]
