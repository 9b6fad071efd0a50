"""OpenAI Responses API stream adapter.

Native events are the typed ``ResponseStreamEvent`` models of the ``openai``
SDK; only their ``type`` tag and a few attributes are read, so any object
with the same attributes (or a mapping) translates the same way.

=================================  ==================================
native ``type``                    canonical event(s)
=================================  ==================================
``response.created``               ``response.started{response.id}``
``response.in_progress``           ``response.started{response.id}``
``response.output_text.delta``     ``response.output_text.delta``
``response.completed``             ``response.done{usage}``
``response.failed``                ``response.error{response.error}``
``error``                          ``response.error{code, message}``
=================================  ==================================
"""

from __future__ import annotations

from typing import Any, List, Optional

from ..base.models import ChatResponseUsage
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


def _started(adapter: BaseVendorAdapter, native: Any) -> List[CanonicalEvent]:
    response_id = read_field(read_field(native, "response"), "id")
    if not response_id:
        return []
    return [ResponseStarted(response_id=str(response_id))]


def _delta(adapter: BaseVendorAdapter, native: Any) -> List[CanonicalEvent]:
    delta = read_field(native, "delta", "")
    if not delta:
        return []
    return [OutputTextDelta(item_id=str(read_field(native, "item_id", "")), content=delta)]


def _completed(adapter: BaseVendorAdapter, native: Any) -> List[CanonicalEvent]:
    usage = read_field(read_field(native, "response"), "usage")
    return [
        ResponseDone(
            usage=ChatResponseUsage(
                input_tokens=token_count(read_field(usage, "input_tokens")),
                output_tokens=token_count(read_field(usage, "output_tokens")),
                total_tokens=token_count(read_field(usage, "total_tokens")),
            )
        )
    ]


def _failed(adapter: BaseVendorAdapter, native: Any) -> List[CanonicalEvent]:
    error = read_field(read_field(native, "response"), "error")
    return [
        ResponseError(
            code=str(read_field(error, "code") or "unknown"),
            message=str(read_field(error, "message") or "Unknown error"),
        )
    ]


def _error(adapter: BaseVendorAdapter, native: Any) -> List[CanonicalEvent]:
    return [
        ResponseError(
            code=str(read_field(native, "code") or "unknown"),
            message=str(read_field(native, "message") or "Unknown error"),
        )
    ]


class OpenAIResponsesAdapter(BaseVendorAdapter):
    vendor_id = "OPENAI"
    EVENT_MAP = {
        "response.created": _started,
        "response.in_progress": _started,
        "response.output_text.delta": _delta,
        "response.completed": _completed,
        "response.failed": _failed,
        "error": _error,
    }

    def native_tag(self, native: Any) -> Optional[str]:
        return read_field(native, "type")


__all__ = ["OpenAIResponsesAdapter"]
