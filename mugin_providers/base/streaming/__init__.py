"""Streaming package: canonical events, wire codec, accumulator, vendor adapter base."""

from .events import (
    EVENT_TYPES,
    TERMINAL_EVENTS,
    CanonicalEvent,
    ConversationCreated,
    OutputTextDelta,
    ResponseDone,
    ResponseError,
    ResponseStarted,
    event_from_frame,
    is_terminal_event,
)
from .wire_codec import FrameDecoder, decode_frames, encode_event, encode_event_bytes
from .accumulator import GENERIC_ERROR_NOTE, accumulate, append_error_note, apply_delta, apply_event
from .stream_metrics import StreamMetrics
from .vendor_adapter import BaseVendorAdapter, close_native_stream, read_field, token_count

__all__ = [
    "CanonicalEvent",
    "ConversationCreated",
    "ResponseStarted",
    "OutputTextDelta",
    "ResponseDone",
    "ResponseError",
    "EVENT_TYPES",
    "TERMINAL_EVENTS",
    "event_from_frame",
    "is_terminal_event",
    "encode_event",
    "encode_event_bytes",
    "FrameDecoder",
    "decode_frames",
    "GENERIC_ERROR_NOTE",
    "apply_delta",
    "append_error_note",
    "apply_event",
    "accumulate",
    "StreamMetrics",
    "BaseVendorAdapter",
    "close_native_stream",
    "read_field",
    "token_count",
]
