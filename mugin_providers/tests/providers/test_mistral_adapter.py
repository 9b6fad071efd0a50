"""Mistral Conversations adapter and request builder tests (no network)."""

from __future__ import annotations

import asyncio
import json
from types import SimpleNamespace as NS

from mugin_providers.base.models import (
    ChatConfig,
    ChatInputMessage,
    ChatOutputMessage,
    ChatRequest,
    ChatResponseUsage,
    InputText,
    OutputText,
)
from mugin_providers.base.streaming import (
    ConversationCreated,
    OutputTextDelta,
    ResponseDone,
    ResponseError,
    ResponseStarted,
)
from mugin_providers.mistral.adapter import MistralConversationsAdapter
from mugin_providers.mistral.client import build_mistral_params, open_mistral_stream


def _envelope(**data):
    return NS(event=data["type"], data=NS(**data))


def _run(request, stream):
    async def _go():
        return [e async for e in MistralConversationsAdapter(request).events(stream)]

    return asyncio.run(_go())


def _config(**kw) -> ChatConfig:
    return ChatConfig(vendor_id="MISTRAL", model="mistral-large-latest", **kw)


def test_new_conversation_reports_conversation_id_first(native_stream):
    stream = native_stream(
        [
            _envelope(type="conversation.response.started", conversation_id="conv_1"),
            _envelope(type="message.output.delta", id="msg_1", content="Bon"),
            _envelope(type="message.output.delta", id="msg_1", content="jour"),
            _envelope(
                type="conversation.response.done",
                usage=NS(prompt_tokens=3, completion_tokens=2, total_tokens=5),
            ),
        ]
    )
    events = _run(ChatRequest(config=_config()), stream)
    assert events == [  # nosec B101
        ConversationCreated(conversation_id="conv_1"),
        ResponseStarted(response_id="conv_1"),
        OutputTextDelta(item_id="msg_1", content="Bon"),
        OutputTextDelta(item_id="msg_1", content="jour"),
        ResponseDone(usage=ChatResponseUsage(3, 2, 5)),
    ]


def test_existing_conversation_skips_conversation_created(native_stream):
    stream = native_stream([_envelope(type="conversation.response.started", conversation_id="conv_1")])
    events = _run(ChatRequest(config=_config(conversation_id="conv_1")), stream)
    assert events == [ResponseStarted(response_id="conv_1")]  # nosec B101


def test_structured_delta_content_is_json_encoded(native_stream):
    content = [{"type": "text", "text": "hi"}]
    stream = native_stream([_envelope(type="message.output.delta", id="m", content=content)])
    events = _run(ChatRequest(config=_config()), stream)
    assert events == [OutputTextDelta(item_id="m", content=json.dumps(content))]  # nosec B101


def test_error_event_stringifies_numeric_code(native_stream):
    stream = native_stream([_envelope(type="conversation.response.error", code=3000, message="quota")])
    assert _run(ChatRequest(config=_config()), stream) == [ResponseError(code="3000", message="quota")]  # nosec B101


def test_tool_events_are_dropped(native_stream, log_events, named):
    stream = native_stream([_envelope(type="tool.execution.started", id="t1")])
    assert _run(ChatRequest(config=_config()), stream) == []  # nosec B101
    assert named(log_events, "stream.unhandled_event")[0]["native_tag"] == "tool.execution.started"  # nosec B101


def test_params_for_new_conversation_with_model():
    request = ChatRequest(config=_config(instructions="Be brief"), inputs=[ChatInputMessage(content=[InputText("Hi")])])
    assert build_mistral_params(request) == {  # nosec B101
        "inputs": [{"role": "user", "content": "Hi"}],
        "store": False,
        "model": "mistral-large-latest",
        "instructions": "Be brief",
    }


def test_params_for_agent_omit_model():
    config = ChatConfig(vendor_id="MISTRAL", vendor_agent_id="ag_1")
    params = build_mistral_params(ChatRequest(config=config, inputs=[ChatInputMessage(content=[InputText("Hi")])]))
    assert params["agent_id"] == "ag_1" and "model" not in params  # nosec B101


def test_params_for_existing_conversation_send_only_new_inputs():
    request = ChatRequest(
        config=_config(conversation_id="conv_1"),
        inputs=[
            ChatInputMessage(content=[InputText("first")]),
            ChatOutputMessage(id="m1", content=[OutputText("answer")]),
            ChatInputMessage(content=[InputText("second")]),
        ],
    )
    assert build_mistral_params(request) == {  # nosec B101
        "conversation_id": "conv_1",
        "inputs": [{"role": "user", "content": "second"}],
        "store": True,
    }


def test_open_stream_appends_to_existing_conversation():
    calls = []

    class _Conversations:
        async def start_stream_async(self, **kwargs):
            calls.append(("start", kwargs))
            return "started"

        async def append_stream_async(self, **kwargs):
            calls.append(("append", kwargs))
            return "appended"

    client = NS(beta=NS(conversations=_Conversations()))
    fresh = ChatRequest(config=_config(), inputs=[ChatInputMessage(content=[InputText("Hi")])])
    follow = ChatRequest(config=_config(conversation_id="conv_1"), inputs=[ChatInputMessage(content=[InputText("Hi")])])
    assert asyncio.run(open_mistral_stream(fresh, client=client)) == "started"  # nosec B101
    assert asyncio.run(open_mistral_stream(follow, client=client)) == "appended"  # nosec B101
    assert [c[0] for c in calls] == ["start", "append"]  # nosec B101
