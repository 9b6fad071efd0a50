"""Cooperative cancellation primitives (public API facade).

``CancellationToken`` lets a caller stop an in-flight chat turn; the session
read loop raises ``CancelledError`` when it observes the request.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
