"""Session read loop: drive one chat turn into its response object.

``post_chat_message`` sends the request through the transport and mutates
the queued placeholder as events arrive:

- streaming mode: every received chunk goes through a ``FrameDecoder``; each
  decoded event is applied by the accumulator, in order, before the next
  chunk is read;
- whole-response mode: the parsed response overwrites the placeholder field
  by field (the ``outputs`` list is refilled in place); a body whose status
  is ``failed`` raises ``VendorError`` like a streamed ``response.error``.

Exit paths:

- end of stream without a terminal event: status ``incomplete``;
- ``CancellationToken`` or task cancellation: status ``cancelled`` with an
  inline note, then the cancellation propagates;
- any other exception: generic inline error note and status ``failed`` (left
  as is when already terminal), then the exception propagates;
- a ``response.error`` from the vendor: the turn completes as ``failed`` and
  ``VendorError`` is raised once the transport is released.

The transport handle is released on every path.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ..base.cancellation import CancellationToken, CancelledError
from ..base.errors import ErrorCode, VendorError, classify_exception
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import Chat, ChatRequest, ChatResponseObject
from ..base.streaming import FrameDecoder, ResponseError, append_error_note, apply_event
from .transport import ChatTransport

CANCELLED_NOTE = "\n\n[Response cancelled]"

_logger = get_logger("mugin.session")


def _failure_message(whole: ChatResponseObject) -> str:
    """Message of a whole response that arrived already failed.

    The error item carries it as ``[Error: <message>]``; fall back to a fixed
    message when the body has no such item.
    """
    text = whole.outputs[-1].text().strip() if whole.outputs else ""
    if text.startswith("[") and text.endswith("]"):
        text = text[1:-1].strip()
    if text.startswith("Error:"):
        text = text[len("Error:"):].strip()
    return text or "Vendor reported a failed response"


def _mark_cancelled(response: ChatResponseObject) -> None:
    if not response.is_terminal:
        append_error_note(response, CANCELLED_NOTE, status="cancelled")


async def post_chat_message(
    request: ChatRequest,
    response: ChatResponseObject,
    chat: Optional[Chat],
    transport: ChatTransport,
    token: Optional[CancellationToken] = None,
    *,
    logger: Optional[logging.Logger] = None,
) -> ChatResponseObject:
    """Run one chat turn; return ``response`` once it is terminal."""
    log = logger or _logger
    ctx = LogContext(vendor=request.vendor_id, model=request.config.model, response_id=response.id)
    vendor_error: Optional[ResponseError] = None
    whole_failure: Optional[str] = None
    applied = 0
    try:
        if token is not None:
            token.raise_if_cancelled()
        async with transport.send(request) as stream:
            if not request.stream:
                whole = ChatResponseObject.from_dict(await stream.read_json())
                response.overwrite_from(whole)
                if chat is not None and whole.config.conversation_id:
                    chat.config.conversation_id = whole.config.conversation_id
                if whole.status == "failed":
                    whole_failure = _failure_message(whole)
            else:
                decoder = FrameDecoder()
                async for chunk in stream.aiter_bytes():
                    if token is not None:
                        token.raise_if_cancelled()
                    for event in decoder.feed(chunk):
                        if apply_event(response, event, chat, logger=log):
                            applied += 1
                            if isinstance(event, ResponseError):
                                vendor_error = event
                for event in decoder.flush():
                    if apply_event(response, event, chat, logger=log):
                        applied += 1
                        if isinstance(event, ResponseError):
                            vendor_error = event
    except (CancelledError, asyncio.CancelledError) as e:
        _mark_cancelled(response)
        ctx.response_id = response.id
        normalized_log_event(
            log,
            "session.cancelled",
            ctx,
            phase="read",
            level=logging.WARNING,
            emitted=applied,
            reason=getattr(e, "reason", None),
        )
        raise
    except Exception as e:
        ctx.response_id = response.id
        normalized_log_event(
            log,
            "session.read_failed",
            ctx,
            phase="read",
            level=logging.ERROR,
            error_code=classify_exception(e).value,
            emitted=applied,
            error=str(e),
        )
        if not response.is_terminal:
            append_error_note(response)
        raise

    if not response.is_terminal:
        response.status = "incomplete"
        ctx.response_id = response.id
        normalized_log_event(log, "session.incomplete", ctx, phase="finalize", level=logging.WARNING, emitted=applied)
    if vendor_error is not None:
        raise VendorError(message=vendor_error.message, vendor=request.vendor_id, vendor_code=vendor_error.code)
    if whole_failure is not None:
        ctx.response_id = response.id
        normalized_log_event(
            log,
            "session.vendor_failed",
            ctx,
            phase="finalize",
            level=logging.ERROR,
            error_code=ErrorCode.VENDOR_ERROR.value,
            error=whole_failure,
        )
        raise VendorError(message=whole_failure, vendor=request.vendor_id)
    return response


__all__ = ["CANCELLED_NOTE", "post_chat_message"]
