"""Stream opener for the OpenAI Responses API.

Builds the Responses ``input`` from the flattened request and opens a
streaming response with the official ``openai`` SDK (``AsyncOpenAI``). The
API key comes from ``OPENAI_API_KEY_PROJECT_<project>``; model and base URL
from the merged vendor config.

Failure modes
-------------
- ``EngineError(code=AUTH)`` when the project has no key configured.
- SDK errors (auth, rate limit, connection) propagate to the caller, which
  reports them before any frame is sent.
"""

from __future__ import annotations

from typing import Any, AsyncIterator, Dict, Optional

from openai import AsyncOpenAI

from ..base.errors import EngineError, ErrorCode
from ..base.models import ChatRequest
from ..config import get_vendor_config
from ..config.env import resolve_vendor_key, vendor_key_env_name


def build_openai_params(request: ChatRequest, *, default_model: Optional[str] = None) -> Dict[str, Any]:
    """Keyword arguments for ``client.responses.create`` (minus ``stream``)."""
    params: Dict[str, Any] = {
        "model": request.config.model or default_model,
        "input": request.messages(),
        "store": request.store,
    }
    if request.config.instructions:
        params["instructions"] = request.config.instructions
    return params


def make_openai_client(request: ChatRequest) -> AsyncOpenAI:
    cfg = get_vendor_config("openai")
    api_key = resolve_vendor_key("OPENAI", request.config.project)
    if not api_key:
        raise EngineError(
            message=f"No API key configured ({vendor_key_env_name('OPENAI', request.config.project)})",
            code=ErrorCode.AUTH,
            vendor="OPENAI",
        )
    return AsyncOpenAI(api_key=api_key, base_url=cfg.get("base_url"))


async def open_openai_stream(request: ChatRequest, *, client: Optional[AsyncOpenAI] = None) -> AsyncIterator[Any]:
    """Open the native Responses event stream for ``request``."""
    client = client or make_openai_client(request)
    params = build_openai_params(request, default_model=get_vendor_config("openai").get("model"))
    return await client.responses.create(stream=True, **params)


__all__ = ["build_openai_params", "make_openai_client", "open_openai_stream"]
