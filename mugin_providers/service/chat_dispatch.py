"""
Server-side chat dispatcher: ChatRequest -> vendor stream -> wire frames.

Purpose
-------
Resolve the vendor for a validated ``ChatRequest``, open the native vendor
stream and either forward it as canonical wire frames (streaming mode) or
fold it through the Response Accumulator into one ``ChatResponseObject``
(whole-response mode).

Failure semantics
-----------------
- Unknown or disabled vendor: ``UnknownVendorError`` / ``VendorDisabled``,
  mapped to HTTP 400 by the route.
- Failure to open the vendor stream: ``DispatchError`` carrying the
  classified ``ErrorCode`` and an HTTP status; no frame has been sent yet.
- Failures after the stream opened are reported in-band by the adapter as a
  final ``response.error`` frame.
- Whole-response mode: an event the accumulator cannot apply (for example a
  delta without an item id) raises ``DispatchError``, mapped to HTTP 502.
"""

from __future__ import annotations

import logging
import time
from contextlib import aclosing
from typing import AsyncIterator, Callable, Tuple

from ..base.errors import EngineError, ErrorCode, classify_exception
from ..base.factory import VendorBinding
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ChatRequest, ChatResponseObject
from ..base.streaming import BaseVendorAdapter, apply_event
from ..config.app_config import AppConfig

VendorResolver = Callable[[str], VendorBinding]

_logger = get_logger("mugin.service")

_STATUS_FOR_CODE = {
    ErrorCode.AUTH: 401,
    ErrorCode.RATE_LIMIT: 429,
    ErrorCode.TIMEOUT: 504,
    ErrorCode.VALIDATION: 400,
    ErrorCode.NOT_FOUND: 404,
}


class VendorDisabled(Exception):
    """Raised when the requested vendor has no DEFAULT credentials configured."""


class DispatchError(Exception):
    """Opening the vendor stream failed before any frame was produced."""

    def __init__(self, message: str, code: ErrorCode) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = _STATUS_FOR_CODE.get(code, 502)


async def open_vendor_stream(
    request: ChatRequest,
    resolver: VendorResolver,
    app_config: AppConfig,
) -> Tuple[BaseVendorAdapter, object]:
    """Return ``(adapter, native_stream)`` for ``request``.

    Raises:
        UnknownVendorError: vendor id not registered.
        VendorDisabled: vendor known but not enabled.
        DispatchError: the vendor stream could not be opened.
    """
    binding = resolver(request.vendor_id)
    info = app_config.vendor(binding.vendor_id)
    if info is None or not info.enabled:
        raise VendorDisabled(f"Vendor '{binding.vendor_id}' is not enabled")

    adapter = binding.create_adapter(request)
    ctx = LogContext(vendor=binding.vendor_id, model=request.config.model)
    t0 = time.perf_counter()
    try:
        native = await binding.open_stream(request)
    except Exception as e:
        code = classify_exception(e)
        normalized_log_event(
            _logger,
            "dispatch.open_failed",
            ctx,
            phase="start",
            level=logging.ERROR,
            error_code=code.value,
            error=str(e),
        )
        raise DispatchError(str(e) or e.__class__.__name__, code) from e
    normalized_log_event(
        _logger,
        "dispatch.opened",
        ctx,
        phase="start",
        open_ms=round((time.perf_counter() - t0) * 1000.0, 2),
        stream=request.stream,
    )
    return adapter, native


def stream_frames(adapter: BaseVendorAdapter, native) -> AsyncIterator[bytes]:
    """Wire frames for a ``text/event-stream`` response body."""
    return adapter.frames(native)


async def collect_response(adapter: BaseVendorAdapter, native, request: ChatRequest) -> ChatResponseObject:
    """Drain ``native`` through the accumulator into one whole response.

    A stream that ends without a terminal event yields ``incomplete``. An
    event the accumulator rejects raises ``DispatchError``; the event
    iterator, and with it the native stream, is closed on every path.
    """
    response = ChatResponseObject(id=f"temp_id_{int(time.time() * 1000)}", config=request.config.copy())
    try:
        async with aclosing(adapter.events(native)) as events:
            async for event in events:
                apply_event(response, event)
    except EngineError as e:
        normalized_log_event(
            _logger,
            "dispatch.collect_failed",
            LogContext(vendor=request.vendor_id, model=request.config.model, response_id=response.id),
            phase="mid_stream",
            level=logging.ERROR,
            error_code=e.code.value,
            error=e.message,
        )
        raise DispatchError(e.message or e.__class__.__name__, e.code) from e
    if not response.is_terminal:
        response.status = "incomplete"
    return response


__all__ = [
    "VendorResolver",
    "VendorDisabled",
    "DispatchError",
    "open_vendor_stream",
    "stream_frames",
    "collect_response",
]
