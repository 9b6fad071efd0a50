"""Fake chat transport for session orchestrator tests."""

from __future__ import annotations

import inspect
from contextlib import asynccontextmanager
from typing import Any, List, Optional

import pytest


class _FakeStream:
    def __init__(self, transport: "FakeTransport") -> None:
        self._transport = transport

    async def aiter_bytes(self):
        for chunk in self._transport.chunks:
            if isinstance(chunk, BaseException):
                raise chunk
            if callable(chunk):
                result = chunk()
                if inspect.isawaitable(result):
                    await result
                continue
            self._transport.delivered += 1
            yield chunk

    async def read_json(self) -> Any:
        if isinstance(self._transport.whole, BaseException):
            raise self._transport.whole
        return self._transport.whole


class FakeTransport:
    """Plays back ``chunks`` (bytes; exceptions are raised; callables are invoked)."""

    def __init__(self, chunks: Optional[List[Any]] = None, whole: Any = None) -> None:
        self.chunks = list(chunks or [])
        self.whole = whole
        self.requests: List[Any] = []
        self.opened = 0
        self.closed = 0
        self.delivered = 0

    @asynccontextmanager
    async def send(self, request):
        self.requests.append(request)
        self.opened += 1
        try:
            yield _FakeStream(self)
        finally:
            self.closed += 1


@pytest.fixture()
def fake_transport():
    return FakeTransport
