"""Errors parts package public surface.

Prefer importing from `mugin_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .engine_error import (
    EngineError,
    MalformedFrame,
    MissingField,
    TransportFailure,
    UnknownEventType,
    VendorError,
)
from .classification import classify_exception

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
