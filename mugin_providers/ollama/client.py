"""Stream opener for the local Ollama daemon (``POST /api/chat``).

Purpose:
    Establish a streaming chat call over HTTP and expose the NDJSON body as
    an async iterator of decoded chunks. No SDK and no API key: Ollama is a
    local daemon reached with ``httpx``.

Failure modes:
    - Non-2xx status at open time raises ``TransportFailure`` carrying the
      daemon's error text, before any frame is produced.
    - Undecodable lines are logged as ``stream.decode_error`` and skipped.
"""

from __future__ import annotations

import json
import logging
from typing import Any, AsyncIterator, Dict, Optional

import httpx

from ..base.errors import TransportFailure
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ChatRequest
from ..config import get_vendor_config
from ..config.defaults import HTTP_DEFAULT_TIMEOUT_SECONDS, OLLAMA_DEFAULT_HOST

_logger = get_logger("mugin.ollama")


def build_ollama_payload(request: ChatRequest, *, default_model: Optional[str] = None) -> Dict[str, Any]:
    messages = request.messages()
    if request.config.instructions:
        messages.insert(0, {"role": "system", "content": request.config.instructions})
    return {"model": request.config.model or default_model, "messages": messages, "stream": True}


class OllamaLineStream:
    """Async iterator over the decoded NDJSON chunks of one response."""

    def __init__(self, response: httpx.Response, client: Optional[httpx.AsyncClient], ctx: LogContext) -> None:
        self._response = response
        self._client = client
        self._ctx = ctx

    async def __aiter__(self) -> AsyncIterator[Dict[str, Any]]:
        async for line in self._response.aiter_lines():
            if not line.strip():
                continue
            try:
                yield json.loads(line)
            except ValueError as e:
                normalized_log_event(
                    _logger,
                    "stream.decode_error",
                    self._ctx,
                    phase="mid_stream",
                    level=logging.WARNING,
                    error=str(e),
                    line=line[:200],
                )

    async def aclose(self) -> None:
        await self._response.aclose()
        if self._client is not None:
            await self._client.aclose()


async def open_ollama_stream(request: ChatRequest, *, client: Optional[httpx.AsyncClient] = None) -> OllamaLineStream:
    """Send the chat call and return the chunk stream once headers arrived."""
    cfg = get_vendor_config("ollama")
    owned = client is None
    if client is None:
        client = httpx.AsyncClient(base_url=cfg.get("host") or OLLAMA_DEFAULT_HOST, timeout=HTTP_DEFAULT_TIMEOUT_SECONDS)
    payload = build_ollama_payload(request, default_model=cfg.get("model"))
    ctx = LogContext(vendor="OLLAMA", model=payload["model"])
    try:
        response = await client.send(client.build_request("POST", "/api/chat", json=payload), stream=True)
    except httpx.HTTPError as e:
        if owned:
            await client.aclose()
        raise TransportFailure(message=f"Ollama request failed: {e}", vendor="OLLAMA", raw=e) from e
    if response.status_code >= 400:
        body = (await response.aread()).decode("utf-8", errors="replace")
        await response.aclose()
        if owned:
            await client.aclose()
        raise TransportFailure(
            message=f"Ollama returned HTTP {response.status_code}: {body[:500]}",
            vendor="OLLAMA",
            status_code=response.status_code,
        )
    return OllamaLineStream(response, client if owned else None, ctx)


__all__ = ["build_ollama_payload", "OllamaLineStream", "open_ollama_stream"]
