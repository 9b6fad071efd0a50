"""Chat session: owns one transcript and runs its chat turns.

A turn appends the user message and a ``queued`` placeholder response to the
transcript before any network activity, so a UI rendering
``chat.history`` (or the placeholder's ``ResponseView``) sees the turn
immediately and then watches it fill in. Only one turn may be in flight.
"""

from __future__ import annotations

import time
from typing import Optional

from ..base.cancellation import CancellationToken
from ..base.models import (
    Chat,
    ChatInputMessage,
    ChatRequest,
    ChatResponseObject,
    InputText,
    ResponseView,
    utc_now_iso,
)
from .post_chat import post_chat_message
from .transport import ChatTransport


def _temp_response_id() -> str:
    return f"temp_id_{int(time.time() * 1000)}"


class ChatSession:
    def __init__(self, chat: Chat, transport: ChatTransport, *, stream: bool = True, store: bool = False) -> None:
        self.chat = chat
        self.transport = transport
        self.stream = stream
        self.store = store
        self._current: Optional[ChatResponseObject] = None

    @property
    def busy(self) -> bool:
        return self._current is not None and not self._current.is_terminal

    @property
    def current(self) -> Optional[ResponseView]:
        """Read-only view of the latest response object, if any."""
        return self._current.view() if self._current is not None else None

    def build_request(self) -> ChatRequest:
        """Flattened request for the transcript as it stands."""
        return ChatRequest(
            config=self.chat.config.copy(),
            inputs=self.chat.flatten_inputs(),
            store=self.store,
            stream=self.stream,
        )

    async def prompt(self, text: str, *, token: Optional[CancellationToken] = None) -> ChatResponseObject:
        """Send ``text`` as the next user message and run the turn to completion.

        Raises:
            ValueError: empty prompt.
            RuntimeError: another turn is still in flight.
            EngineError / CancelledError: propagated from the read loop after
                the placeholder has been marked.
        """
        if not text or not text.strip():
            raise ValueError("Prompt text must be non-empty")
        if self.busy:
            raise RuntimeError("A chat turn is already in flight")

        self.chat.history.append(ChatInputMessage(content=[InputText(text=text)]))
        request = self.build_request()
        response = ChatResponseObject(id=_temp_response_id(), config=request.config)
        self.chat.history.append(response)
        self.chat.updated_at = utc_now_iso()
        self._current = response
        try:
            return await post_chat_message(request, response, self.chat, self.transport, token)
        finally:
            self.chat.updated_at = utc_now_iso()

    def new_chat(self) -> Chat:
        """Start an empty transcript with the same config (no vendor conversation)."""
        if self.busy:
            raise RuntimeError("Cannot start a new chat while a turn is in flight")
        config = self.chat.config.copy()
        config.conversation_id = None
        self.chat = Chat(config=config, owner_id=self.chat.owner_id, owner_name=self.chat.owner_name)
        self._current = None
        return self.chat

    def change_chat(self, chat: Chat) -> None:
        """Switch to ``chat``; its config must name a model or a vendor agent."""
        if not chat.config.model and not chat.config.vendor_agent_id:
            raise ValueError("Chat config must name a model or a vendor agent")
        if self.busy:
            raise RuntimeError("Cannot change chat while a turn is in flight")
        self.chat = chat
        self._current = None


__all__ = ["ChatSession"]
