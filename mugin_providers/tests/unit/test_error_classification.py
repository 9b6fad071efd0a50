"""Exception classification into normalized error codes."""

from __future__ import annotations

import asyncio

import pytest

from mugin_providers.base.errors import ErrorCode, MalformedFrame, VendorError, classify_exception


class _StatusError(Exception):
    def __init__(self, status_code):
        super().__init__("http failure")
        self.status_code = status_code


class _Resp:
    status_code = 503


class _WrappedResponseError(Exception):
    response = _Resp()


@pytest.mark.parametrize(
    "exc, code",
    [
        (MalformedFrame(message="x"), ErrorCode.MALFORMED_FRAME),
        (VendorError(message="x", vendor_code="quota"), ErrorCode.VENDOR_ERROR),
        (TimeoutError(), ErrorCode.TIMEOUT),
        (asyncio.TimeoutError(), ErrorCode.TIMEOUT),
        (_StatusError(401), ErrorCode.AUTH),
        (_StatusError(429), ErrorCode.RATE_LIMIT),
        (_StatusError(404), ErrorCode.NOT_FOUND),
        (_WrappedResponseError("boom"), ErrorCode.UNAVAILABLE),
        (RuntimeError("Rate limit exceeded"), ErrorCode.RATE_LIMIT),
        (RuntimeError("Invalid API key provided"), ErrorCode.AUTH),
        (RuntimeError("request timed out"), ErrorCode.TIMEOUT),
        (RuntimeError("something odd"), ErrorCode.UNKNOWN),
    ],
)
def test_classify_exception(exc, code):
    assert classify_exception(exc) is code  # nosec B101


def test_engine_error_str_includes_vendor_and_code():
    err = VendorError(message="bad key", vendor="OPENAI", vendor_code="invalid_api_key")
    assert str(err) == "OPENAI vendor_error: bad key"  # nosec B101
    assert err.vendor_code == "invalid_api_key"  # nosec B101
