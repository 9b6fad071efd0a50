"""Response accumulator: folds canonical events into a ChatResponseObject.

Mutation rules per event:

- ``conversation.created``: sets ``chat.config.conversation_id`` (session
  level, not the response object's fields).
- ``response.started``: replaces the placeholder id, status ``in_progress``.
- ``response.output_text.delta``: ``apply_delta``.
- ``response.done``: status ``completed``; usage overwritten wholesale.
- ``response.error``: status ``failed``; the vendor message is appended as an
  inline note on a fresh error item.

Once a response is terminal, further events are rejected: nothing is
mutated, a ``response.post_terminal_event`` warning is logged and
``apply_event`` returns ``False``.
"""
from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Iterable, Optional

from ..errors import MissingField
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import Chat, ChatOutputMessage, ChatResponseObject, OutputText, ResponseStatus
from .events import (
    CanonicalEvent,
    ConversationCreated,
    OutputTextDelta,
    ResponseDone,
    ResponseError,
    ResponseStarted,
)

GENERIC_ERROR_NOTE = "\n\n[Error occurred while receiving agent response]"

_logger = get_logger("mugin.accumulator")


def apply_delta(response: ChatResponseObject, item_id: str, delta: str) -> ChatOutputMessage:
    """Append ``delta`` to the output message ``item_id``, creating it if needed.

    Raises:
        MissingField: when ``outputs`` is not a list, ``item_id`` or ``delta``
            is empty, or the existing item does not hold exactly one
            ``output_text`` block. The response is left unchanged.
    """
    if response is None or not isinstance(response.outputs, list):
        raise MissingField(message="No response outputs to add message delta to")
    if not item_id:
        raise MissingField(message="No item id provided for output text delta")
    if not delta:
        raise MissingField(message=f"No delta content provided for item {item_id!r}")

    item = response.find_output(item_id)
    if item is None:
        item = ChatOutputMessage(id=item_id, content=[OutputText(text="")])
        response.outputs.append(item)
    if len(item.content) != 1 or not isinstance(item.content[0], OutputText):
        raise MissingField(message=f"Output item {item_id!r} does not hold a single output_text block")
    item.content[0].text += delta
    return item


def _error_item_id(response: ChatResponseObject) -> str:
    base = f"error_{int(time.time() * 1000)}"
    item_id, n = base, 1
    while response.find_output(item_id) is not None:
        n += 1
        item_id = f"{base}_{n}"
    return item_id


def append_error_note(
    response: ChatResponseObject,
    note: str = GENERIC_ERROR_NOTE,
    *,
    status: ResponseStatus = "failed",
) -> ChatOutputMessage:
    """Make a failure visible inline: a new error item carrying ``note``.

    The response moves to ``status`` (``failed`` unless the turn was cancelled).
    """
    item = apply_delta(response, _error_item_id(response), note)
    response.status = status
    return item


def apply_event(
    response: ChatResponseObject,
    event: CanonicalEvent,
    chat: Optional[Chat] = None,
    *,
    logger: Optional[logging.Logger] = None,
) -> bool:
    """Apply one canonical event; return ``False`` when it was rejected."""
    log = logger or _logger
    ctx = LogContext(vendor=response.config.vendor_id, model=response.config.model, response_id=response.id)
    if response.is_terminal:
        normalized_log_event(
            log,
            "response.post_terminal_event",
            ctx,
            phase="accumulate",
            level=logging.WARNING,
            status=response.status,
            ignored_event=event.event,
        )
        return False

    if isinstance(event, ConversationCreated):
        # Without a session (server-side whole-response mode) the id travels
        # back on the response's own config.
        target = chat.config if chat is not None else response.config
        target.conversation_id = event.conversation_id
        normalized_log_event(log, "conversation.created", ctx, phase="accumulate", conversation_id=event.conversation_id)
    elif isinstance(event, ResponseStarted):
        response.id = event.response_id
        response.status = "in_progress"
        ctx.response_id = event.response_id
        normalized_log_event(log, "response.started", ctx, phase="accumulate")
    elif isinstance(event, OutputTextDelta):
        apply_delta(response, event.item_id, event.content)
    elif isinstance(event, ResponseDone):
        response.status = "completed"
        response.usage = replace(event.usage)
        normalized_log_event(log, "response.done", ctx, phase="accumulate", tokens=response.usage.to_dict())
    elif isinstance(event, ResponseError):
        append_error_note(response, f"\n\n[Error: {event.message}]")
        normalized_log_event(
            log,
            "response.error",
            ctx,
            phase="accumulate",
            level=logging.ERROR,
            error_code=event.code,
            error=event.message,
        )
    else:  # pragma: no cover - CanonicalEvent is closed
        raise TypeError(f"Not a canonical event: {event!r}")
    return True


def accumulate(
    events: Iterable[CanonicalEvent],
    response: ChatResponseObject,
    chat: Optional[Chat] = None,
) -> ChatResponseObject:
    """Apply a whole event sequence in order and return ``response``."""
    for event in events:
        apply_event(response, event, chat)
    return response


__all__ = [
    "GENERIC_ERROR_NOTE",
    "apply_delta",
    "append_error_note",
    "apply_event",
    "accumulate",
]
