"""Base vendor adapter: native vendor stream -> canonical events.

Each vendor subclass declares a static ``EVENT_MAP`` from native event tags
to translator functions ``(adapter, native_event) -> list of canonical
events`` and a ``native_tag`` accessor. The base class owns the loop:

- arrival order is preserved; each native event maps to zero or more
  canonical events emitted immediately, nothing is buffered;
- native tags missing from ``EVENT_MAP`` are logged as
  ``stream.unhandled_event`` and dropped;
- iteration stops after the first terminal event (``response.done`` or
  ``response.error``);
- an exception raised by the native stream becomes a final
  ``response.error`` so the failure reaches the client inline;
- the native stream is closed on every exit path.

The adapter never opens vendor connections itself; it consumes a stream
handle that was already established by the vendor's stream opener.
"""
from __future__ import annotations

import asyncio
import inspect
import logging
import time
from contextlib import suppress
from typing import Any, AsyncIterable, AsyncIterator, Callable, ClassVar, List, Mapping, Optional

from ..errors import classify_exception
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import ChatRequest
from .events import CanonicalEvent, OutputTextDelta, ResponseError, is_terminal_event
from .stream_metrics import StreamMetrics
from .wire_codec import encode_event_bytes

Translator = Callable[["BaseVendorAdapter", Any], List[CanonicalEvent]]


def read_field(obj: Any, name: str, default: Any = None) -> Any:
    """Read ``name`` from an SDK model, a plain object or a mapping."""
    if obj is None:
        return default
    if isinstance(obj, Mapping):
        value = obj.get(name, default)
    else:
        value = getattr(obj, name, default)
    return default if value is None else value


def token_count(value: Any) -> int:
    """Coerce a vendor token count to a non-negative int (0 when absent)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return max(int(value), 0)


async def close_native_stream(stream: Any) -> None:
    """Best-effort close of a vendor stream handle (async or sync)."""
    for name in ("aclose", "close"):
        closer = getattr(stream, name, None)
        if not callable(closer):
            continue
        with suppress(Exception):
            result = closer()
            if inspect.isawaitable(result):
                await result
        return


class BaseVendorAdapter:
    """Translate one vendor stream into the canonical event vocabulary."""

    vendor_id: ClassVar[str] = ""
    EVENT_MAP: ClassVar[Mapping[str, Translator]] = {}

    def __init__(self, request: ChatRequest, *, logger: Optional[logging.Logger] = None) -> None:
        self.request = request
        self.ctx = LogContext(vendor=self.vendor_id, model=request.config.model)
        self._logger = logger or get_logger(f"mugin.{self.vendor_id.lower() or 'vendor'}")
        self.metrics = StreamMetrics()

    # Hooks -----------------------------------------------------------------
    def native_tag(self, native: Any) -> Optional[str]:
        """Return the vendor's event tag for ``native`` (``None`` if absent)."""
        raise NotImplementedError

    def opening_events(self) -> List[CanonicalEvent]:
        """Events emitted before the first native event (default: none)."""
        return []

    # Translation -------------------------------------------------------------
    def translate(self, native: Any) -> List[CanonicalEvent]:
        tag = self.native_tag(native)
        translator = self.EVENT_MAP.get(tag) if tag is not None else None
        if translator is None:
            self.metrics.dropped += 1
            normalized_log_event(
                self._logger,
                "stream.unhandled_event",
                self.ctx,
                phase="translate",
                level=logging.WARNING,
                native_tag=tag,
            )
            return []
        return list(translator(self, native))

    # Streaming ---------------------------------------------------------------
    def _track(self, event: CanonicalEvent, t0: float) -> CanonicalEvent:
        self.metrics.emitted += 1
        if isinstance(event, OutputTextDelta):
            self.metrics.deltas += 1
            if self.metrics.time_to_first_delta_ms is None:
                self.metrics.time_to_first_delta_ms = (time.perf_counter() - t0) * 1000.0
        if is_terminal_event(event):
            self.metrics.terminal_event = event.event
        return event

    async def events(self, native_stream: AsyncIterable[Any]) -> AsyncIterator[CanonicalEvent]:
        """Yield canonical events for ``native_stream`` in arrival order."""
        t0 = time.perf_counter()
        normalized_log_event(self._logger, "stream.start", self.ctx, phase="start")
        try:
            for event in self.opening_events():
                yield self._track(event, t0)
            async for native in native_stream:
                for event in self.translate(native):
                    yield self._track(event, t0)
                if self.metrics.terminal_event is not None:
                    break
        except asyncio.CancelledError:
            raise
        except Exception as e:
            code = classify_exception(e)
            normalized_log_event(
                self._logger,
                "stream.vendor_error",
                self.ctx,
                phase="mid_stream",
                level=logging.ERROR,
                error_code=code.value,
                emitted=self.metrics.emitted,
                error=str(e),
            )
            yield self._track(ResponseError(code=code.value, message=str(e) or e.__class__.__name__), t0)
        finally:
            await close_native_stream(native_stream)
            self.metrics.total_duration_ms = (time.perf_counter() - t0) * 1000.0
            if self.metrics.terminal_event is None:
                normalized_log_event(
                    self._logger,
                    "stream.unterminated",
                    self.ctx,
                    phase="finalize",
                    level=logging.WARNING,
                    emitted=self.metrics.emitted,
                )
            normalized_log_event(
                self._logger,
                "stream.end",
                self.ctx,
                phase="finalize",
                emitted=self.metrics.emitted,
                metrics=self.metrics.to_dict(),
            )

    async def frames(self, native_stream: AsyncIterable[Any]) -> AsyncIterator[bytes]:
        """Yield encoded wire frames for ``native_stream``."""
        async for event in self.events(native_stream):
            yield encode_event_bytes(event)


__all__ = ["BaseVendorAdapter", "Translator", "close_native_stream", "read_field", "token_count"]
