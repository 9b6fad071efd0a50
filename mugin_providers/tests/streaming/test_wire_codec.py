"""Wire codec tests: framing, incremental decoding and strict parsing."""

from __future__ import annotations

import pytest

from mugin_providers.base.errors import MalformedFrame, UnknownEventType
from mugin_providers.base.models import ChatResponseUsage
from mugin_providers.base.streaming import (
    ConversationCreated,
    FrameDecoder,
    OutputTextDelta,
    ResponseDone,
    ResponseError,
    ResponseStarted,
    decode_frames,
    encode_event,
    encode_event_bytes,
)

CANONICAL_SAMPLES = [
    ConversationCreated(conversation_id="conv_1"),
    ResponseStarted(response_id="resp_1"),
    ResponseStarted(response_id=""),
    OutputTextDelta(item_id="msg_1", content="Hello\nworld \"quoted\""),
    OutputTextDelta(item_id="msg_1", content=""),
    ResponseDone(usage=ChatResponseUsage()),
    ResponseDone(usage=ChatResponseUsage(input_tokens=1, output_tokens=2, total_tokens=3)),
    ResponseError(code="rate_limit", message="slow down"),
]


def test_encode_event_frame_layout():
    frame = encode_event(OutputTextDelta(item_id="msg_1", content="Hel"))
    assert frame == 'event: response.output_text.delta\ndata: {"itemId":"msg_1","content":"Hel"}\n\n'  # nosec B101


def test_payload_stays_on_one_line():
    frame = encode_event(OutputTextDelta(item_id="a", content="line1\nline2\r\n"))
    assert frame.count("\n") == 3  # nosec B101


@pytest.mark.parametrize("event", CANONICAL_SAMPLES, ids=lambda e: e.event)
def test_decode_inverts_encode(event):
    assert decode_frames(encode_event(event)) == [event]  # nosec B101


def test_non_ascii_is_emitted_verbatim():
    frame = encode_event(OutputTextDelta(item_id="a", content="blåbær"))
    assert "blåbær" in frame  # nosec B101


def test_frame_split_at_any_byte_boundary_decodes_identically():
    event = OutputTextDelta(item_id="msg_æ", content="Hei på deg 👋")
    raw = encode_event_bytes(event)
    for cut in range(1, len(raw)):
        decoder = FrameDecoder()
        events = decoder.feed(raw[:cut]) + decoder.feed(raw[cut:]) + decoder.flush()
        assert events == [event], f"split at byte {cut}"  # nosec B101


def test_incomplete_frame_is_buffered_until_separator():
    decoder = FrameDecoder()
    assert decoder.feed(b"event: response.started\ndata: {\"responseId\":\"R1\"}\n") == []  # nosec B101
    assert decoder.pending  # nosec B101
    assert decoder.feed(b"\n") == [ResponseStarted(response_id="R1")]  # nosec B101
    assert decoder.pending == ""  # nosec B101


def test_several_frames_in_one_chunk_keep_order():
    events = [ResponseStarted(response_id="R1"), OutputTextDelta(item_id="A", content="x"), ResponseDone()]
    blob = b"".join(encode_event_bytes(e) for e in events)
    assert decode_frames(blob) == events  # nosec B101


def test_crlf_line_endings_are_tolerated():
    blob = 'event: response.started\r\ndata: {"responseId":"R1"}\r\n\r\n'
    decoder = FrameDecoder()
    # CR and LF of one line ending arrive in different reads.
    first = decoder.feed(blob[:-1].encode())
    rest = decoder.feed(blob[-1:].encode())
    assert first + rest + decoder.flush() == [ResponseStarted(response_id="R1")]  # nosec B101


def test_comment_lines_and_keepalive_frames_are_ignored():
    blob = ': keep-alive\n\nevent: response.started\n: note\ndata: {"responseId":"R1"}\n\n'
    assert decode_frames(blob) == [ResponseStarted(response_id="R1")]  # nosec B101


def test_flush_parses_trailing_frame_without_separator():
    decoder = FrameDecoder()
    assert decoder.feed('event: response.done\ndata: {"usage":{}}') == []  # nosec B101
    assert decoder.flush() == [ResponseDone()]  # nosec B101


def test_unknown_event_name_raises():
    with pytest.raises(UnknownEventType) as ei:
        decode_frames('event: response.reasoning\ndata: {}\n\n')
    assert ei.value.event_name == "response.reasoning"  # nosec B101


@pytest.mark.parametrize(
    "blob",
    [
        'event: response.started\ndata: {not json}\n\n',
        'event: response.started\n\n',
        'data: {"responseId":"R1"}\n\n',
        'event: response.started\ndata: ["R1"]\n\n',
        'event: response.output_text.delta\ndata: {"itemId":"A"}\n\n',
        'event: response.done\ndata: {"usage":5}\n\n',
        'garbage line\n\n',
    ],
)
def test_malformed_frames_raise(blob):
    with pytest.raises(MalformedFrame):
        decode_frames(blob)


def test_flush_rejects_truncated_utf8():
    decoder = FrameDecoder()
    decoder.feed('event: response.output_text.delta\ndata: {"itemId":"A","content":"'.encode() + "é".encode()[:1])
    with pytest.raises(MalformedFrame):
        decoder.flush()


def test_usage_counts_are_clamped_non_negative():
    events = decode_frames('event: response.done\ndata: {"usage":{"inputTokens":-4,"outputTokens":2.0,"totalTokens":"x"}}\n\n')
    assert events == [ResponseDone(usage=ChatResponseUsage(input_tokens=0, output_tokens=2, total_tokens=0))]  # nosec B101


def test_good_frames_before_a_bad_one_are_kept():
    decoder = FrameDecoder()
    chunk = encode_event(ResponseStarted(response_id="R1")) + encode_event(
        OutputTextDelta(item_id="A", content="Hello")
    ) + "event: response.started\ndata: {oops}\n\n"
    assert decoder.feed(chunk) == [  # nosec B101
        ResponseStarted(response_id="R1"),
        OutputTextDelta(item_id="A", content="Hello"),
    ]
    with pytest.raises(MalformedFrame):
        decoder.feed(encode_event(ResponseDone()))


def test_deferred_decode_error_surfaces_on_flush():
    decoder = FrameDecoder()
    decoder.feed(encode_event(ResponseStarted(response_id="R1")) + "event: response.reasoning\ndata: {}\n\n")
    with pytest.raises(UnknownEventType):
        decoder.flush()
    with pytest.raises(MalformedFrame):
        decode_frames(encode_event(ResponseDone()) + "garbage line\n\n")
