"""Cooperative cancellation token for streaming chat turns.

The session read loop polls the token between transport reads; a UI (or any
other thread or task) calls ``cancel`` to stop the turn. The token is a
one-way latch: once cancelled it stays cancelled.
"""

from __future__ import annotations

from threading import Lock
from typing import Callable, List, Optional

from .cancelled_error import CancelledError


class CancellationToken:
    """Thread-safe one-way cancellation latch with optional callbacks."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._cancelled = False
        self._reason: Optional[str] = None
        self._callbacks: List[Callable[[Optional[str]], None]] = []

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cancellation; callbacks run once, on the first call only."""
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            self._reason = reason
            callbacks = list(self._callbacks)
        for callback in callbacks:
            callback(reason)

    def on_cancel(self, callback: Callable[[Optional[str]], None]) -> None:
        """Register ``callback``; it runs immediately if already cancelled."""
        with self._lock:
            if not self._cancelled:
                self._callbacks.append(callback)
                return
            reason = self._reason
        callback(reason)

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise CancelledError(self._reason)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self._cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken"]
