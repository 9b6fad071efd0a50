"""Shared fixtures for the engine test suite.

- ``log_events``: decoded JSON payloads of every record logged under the
  shared ``mugin`` logger during the test.
- ``chat_config`` / ``make_response``: small domain object factories.
- ``native_stream``: the ``FakeNativeStream`` class, an async vendor stream
  stand-in that records whether it was closed.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Iterator, List, Optional

import pytest

from mugin_providers.base.logging import BASE_LOGGER_NAME, get_logger
from mugin_providers.base.models import ChatConfig, ChatResponseObject


class _JsonListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.payloads: List[dict] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            payload = {"event": None, "message": record.getMessage()}
        payload["_level"] = record.levelname
        self.payloads.append(payload)


class FakeNativeStream:
    """Async iterable over ``items``; raises ``fail_with`` after the last one."""

    def __init__(self, items: Iterable[Any], fail_with: Optional[BaseException] = None) -> None:
        self.items = list(items)
        self.fail_with = fail_with
        self.closed = False
        self.consumed = 0

    def __aiter__(self):
        return self._gen()

    async def _gen(self):
        for item in self.items:
            self.consumed += 1
            yield item
        if self.fail_with is not None:
            raise self.fail_with

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture()
def log_events() -> Iterator[List[dict]]:
    base = get_logger(BASE_LOGGER_NAME)
    handler = _JsonListHandler()
    base.addHandler(handler)
    try:
        yield handler.payloads
    finally:
        base.removeHandler(handler)


@pytest.fixture()
def chat_config() -> ChatConfig:
    return ChatConfig(vendor_id="OPENAI", id="2000", name="ChatGPT rask", model="gpt-4.1")


@pytest.fixture()
def make_response(chat_config):
    def _make(response_id: str = "temp_id_1", status: str = "queued") -> ChatResponseObject:
        return ChatResponseObject(id=response_id, config=chat_config.copy(), status=status)

    return _make


@pytest.fixture()
def native_stream():
    return FakeNativeStream


def events_named(payloads: List[dict], name: str) -> List[dict]:
    return [p for p in payloads if p.get("event") == name]


@pytest.fixture()
def named():
    return events_named
