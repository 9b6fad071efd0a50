"""
Streaming Engine Base Package

Exports the vendor-independent pieces of the engine:

- Models: chat configs, transcript items, the live ChatResponseObject
- Streaming: canonical events, wire codec, response accumulator, adapter base
- Errors: the engine error taxonomy
- Factory: lazy resolution of vendor adapters and stream openers
"""

from .cancellation import CancellationToken, CancelledError
from .errors import (
    EngineError,
    ErrorCode,
    MalformedFrame,
    MissingField,
    TransportFailure,
    UnknownEventType,
    VendorError,
    classify_exception,
)
from .factory import UnknownVendorError, VendorBinding, VendorFactory, resolve_vendor
from .models import (
    Chat,
    ChatConfig,
    ChatInputMessage,
    ChatOutputMessage,
    ChatRequest,
    ChatResponseObject,
    ChatResponseUsage,
    InputText,
    OutputText,
    ResponseView,
)
from .streaming import (
    BaseVendorAdapter,
    FrameDecoder,
    accumulate,
    apply_event,
    decode_frames,
    encode_event,
)

__all__ = [
    "CancellationToken",
    "CancelledError",
    "EngineError",
    "ErrorCode",
    "MalformedFrame",
    "MissingField",
    "TransportFailure",
    "UnknownEventType",
    "VendorError",
    "classify_exception",
    "UnknownVendorError",
    "VendorBinding",
    "VendorFactory",
    "resolve_vendor",
    "Chat",
    "ChatConfig",
    "ChatInputMessage",
    "ChatOutputMessage",
    "ChatRequest",
    "ChatResponseObject",
    "ChatResponseUsage",
    "InputText",
    "OutputText",
    "ResponseView",
    "BaseVendorAdapter",
    "FrameDecoder",
    "accumulate",
    "apply_event",
    "decode_frames",
    "encode_event",
]
