"""Stream opener for the Mistral Conversations API.

New conversations start with ``beta.conversations.start_stream_async`` using
either the configured vendor agent or the model plus instructions. When the
config already carries a ``conversation_id`` the turn is appended with
``append_stream_async`` and only the inputs after the last assistant message
are sent, since Mistral stores the earlier history server-side.
"""

from __future__ import annotations

from typing import Any, AsyncIterator, Dict, Optional

from mistralai import Mistral

from ..base.errors import EngineError, ErrorCode
from ..base.models import ChatRequest
from ..config import get_vendor_config
from ..config.env import resolve_vendor_key, vendor_key_env_name


def build_mistral_params(request: ChatRequest, *, default_model: Optional[str] = None) -> Dict[str, Any]:
    config = request.config
    if config.conversation_id:
        return {
            "conversation_id": config.conversation_id,
            "inputs": request.messages(since_last_output=True),
            "store": True,
        }
    params: Dict[str, Any] = {"inputs": request.messages(), "store": request.store}
    if config.vendor_agent_id:
        params["agent_id"] = config.vendor_agent_id
    else:
        params["model"] = config.model or default_model
        if config.instructions:
            params["instructions"] = config.instructions
    return params


def make_mistral_client(request: ChatRequest) -> Mistral:
    cfg = get_vendor_config("mistral")
    api_key = resolve_vendor_key("MISTRAL", request.config.project)
    if not api_key:
        raise EngineError(
            message=f"No API key configured ({vendor_key_env_name('MISTRAL', request.config.project)})",
            code=ErrorCode.AUTH,
            vendor="MISTRAL",
        )
    if cfg.get("base_url"):
        return Mistral(api_key=api_key, server_url=cfg["base_url"])
    return Mistral(api_key=api_key)


async def open_mistral_stream(request: ChatRequest, *, client: Optional[Mistral] = None) -> AsyncIterator[Any]:
    """Open the native conversation event stream for ``request``."""
    client = client or make_mistral_client(request)
    params = build_mistral_params(request, default_model=get_vendor_config("mistral").get("model"))
    conversations = client.beta.conversations
    if "conversation_id" in params:
        return await conversations.append_stream_async(**params)
    return await conversations.start_stream_async(**params)


__all__ = ["build_mistral_params", "make_mistral_client", "open_mistral_stream"]
