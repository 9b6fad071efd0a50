"""Unified engine error taxonomy public surface.

Re-exports the implementations under ``mugin_providers.base.errors_parts`` to
keep a single stable import path.
"""

from .errors_parts import (
    EngineError,
    ErrorCode,
    MalformedFrame,
    MissingField,
    TransportFailure,
    UnknownEventType,
    VendorError,
    classify_exception,
)

__all__ = [
    "ErrorCode",
    "EngineError",
    "MalformedFrame",
    "UnknownEventType",
    "MissingField",
    "VendorError",
    "TransportFailure",
    "classify_exception",
]
