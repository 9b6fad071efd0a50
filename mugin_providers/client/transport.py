"""HTTP transport between the session orchestrator and the chat service.

``send(request)`` is an async context manager: entering it posts the
request and waits for response headers, the body is consumed inside the
block, and leaving it (normally, on error or on cancellation) closes the
response stream.

Failure modes:
    - Non-2xx status: ``TransportFailure`` with the service's ``detail``.
    - Connect/read errors raised by ``httpx`` (including those raised while
      the caller iterates the body): wrapped in ``TransportFailure``.
"""

from __future__ import annotations

import json
from contextlib import asynccontextmanager
from typing import Any, AsyncContextManager, AsyncIterator, Optional, Protocol

import httpx

from ..base.errors import TransportFailure
from ..base.models import ChatRequest
from ..config.defaults import CHAT_ROUTE_PATH, HTTP_DEFAULT_TIMEOUT_SECONDS


class TransportStream(Protocol):
    def aiter_bytes(self) -> AsyncIterator[bytes]: ...

    async def read_json(self) -> Any: ...


class ChatTransport(Protocol):
    def send(self, request: ChatRequest) -> AsyncContextManager[TransportStream]: ...


class HttpTransportStream:
    def __init__(self, response: httpx.Response) -> None:
        self._response = response

    def aiter_bytes(self) -> AsyncIterator[bytes]:
        return self._response.aiter_bytes()

    async def read_json(self) -> Any:
        return json.loads(await self._response.aread())


def _error_detail(body: bytes) -> str:
    text = body.decode("utf-8", errors="replace")
    try:
        detail = json.loads(text).get("detail")
    except (ValueError, AttributeError):
        return text[:500]
    if isinstance(detail, dict):
        return str(detail.get("message") or detail)
    return str(detail) if detail is not None else text[:500]


class HttpChatTransport:
    """``httpx.AsyncClient`` based transport posting to ``/api/chat``.

    Pass ``client`` to reuse a connection pool (or an ``httpx.MockTransport``
    in tests); otherwise a client is created and closed per request.
    """

    def __init__(
        self,
        base_url: str = "",
        *,
        client: Optional[httpx.AsyncClient] = None,
        path: str = CHAT_ROUTE_PATH,
        timeout: float = HTTP_DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._base_url = base_url
        self._client = client
        self._path = path
        self._timeout = timeout

    @asynccontextmanager
    async def send(self, request: ChatRequest) -> AsyncIterator[HttpTransportStream]:
        owned = self._client is None
        client = self._client or httpx.AsyncClient(base_url=self._base_url, timeout=self._timeout)
        accept = "text/event-stream" if request.stream else "application/json"
        try:
            async with client.stream("POST", self._path, json=request.to_dict(), headers={"Accept": accept}) as response:
                if response.status_code >= 400:
                    detail = _error_detail(await response.aread())
                    raise TransportFailure(
                        message=f"Chat service returned HTTP {response.status_code}: {detail}",
                        vendor=request.vendor_id,
                        status_code=response.status_code,
                    )
                yield HttpTransportStream(response)
        except httpx.HTTPError as e:
            raise TransportFailure(message=f"Chat transport failed: {e}", vendor=request.vendor_id, raw=e) from e
        finally:
            if owned:
                await client.aclose()


__all__ = ["TransportStream", "ChatTransport", "HttpTransportStream", "HttpChatTransport"]
