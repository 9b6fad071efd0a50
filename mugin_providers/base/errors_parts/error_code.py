"""
Normalized engine error codes (taxonomy).

Defines the `ErrorCode` enumeration used by the wire codec, accumulator,
vendor adapters and session orchestrator. Values are lowercase snake_case and
are a stable contract for logging and for the ``code`` field carried by
``response.error`` frames.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    MALFORMED_FRAME = "malformed_frame"
    UNKNOWN_EVENT_TYPE = "unknown_event_type"
    MISSING_FIELD = "missing_field"
    VENDOR_ERROR = "vendor_error"
    TRANSPORT_FAILURE = "transport_failure"
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
