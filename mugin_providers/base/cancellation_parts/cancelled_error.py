"""Cancellation error type raised when a chat turn observes a cancel request."""

from __future__ import annotations

from typing import Optional


class CancelledError(RuntimeError):
    """Raised when a streaming chat turn is cancelled cooperatively.

    Distinct from ``asyncio.CancelledError`` (task cancellation): this one is
    raised by ``CancellationToken.raise_if_cancelled`` between transport reads.
    """

    def __init__(self, reason: Optional[str] = None) -> None:
        self.reason = reason or "chat turn cancelled"
        super().__init__(self.reason)


__all__ = ["CancelledError"]
