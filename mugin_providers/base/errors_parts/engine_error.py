"""
Structured engine error exception types.

``EngineError`` is the common base for every failure the streaming engine
surfaces. Each subclass pins one category of the taxonomy so callers can
``except`` precisely while logging code can rely on ``code`` and ``vendor``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .error_code import ErrorCode


@dataclass
class EngineError(Exception):
    """Represents a structured engine failure with a normalized error code.

    Attributes:
        message: Human-readable error message suitable for logging.
        code: Normalized :class:`ErrorCode` classification for the failure.
        vendor: Vendor id where the failure originated, when known.
        raw: Optional original exception for diagnostics.
    """

    message: str
    code: ErrorCode = ErrorCode.UNKNOWN
    vendor: Optional[str] = None
    raw: Optional[BaseException] = field(default=None, repr=False)

    def __str__(self) -> str:  # pragma: no cover - trivial
        prefix = f"{self.vendor} " if self.vendor else ""
        return f"{prefix}{self.code.value}: {self.message}"


@dataclass
class MalformedFrame(EngineError):
    """A wire frame could not be parsed (bad payload text or missing lines)."""

    code: ErrorCode = ErrorCode.MALFORMED_FRAME
    frame: Optional[str] = None


@dataclass
class UnknownEventType(EngineError):
    """A wire frame named an event outside the canonical vocabulary."""

    code: ErrorCode = ErrorCode.UNKNOWN_EVENT_TYPE
    event_name: Optional[str] = None


@dataclass
class MissingField(EngineError):
    """An accumulator precondition was violated (empty id/delta, bad shape)."""

    code: ErrorCode = ErrorCode.MISSING_FIELD


@dataclass
class VendorError(EngineError):
    """The upstream vendor reported an explicit failure."""

    code: ErrorCode = ErrorCode.VENDOR_ERROR
    vendor_code: Optional[str] = None


@dataclass
class TransportFailure(EngineError):
    """Reading from or connecting to the chat transport failed."""

    code: ErrorCode = ErrorCode.TRANSPORT_FAILURE
    status_code: Optional[int] = None


__all__ = [
    "EngineError",
    "MalformedFrame",
    "UnknownEventType",
    "MissingField",
    "VendorError",
    "TransportFailure",
]
