"""FastAPI application for the chat service.

Routes
------
- ``POST /api/chat``: dispatch a chat turn; ``text/event-stream`` of wire
  frames when ``stream`` is true, otherwise the whole response as JSON.
- ``GET /api/health``, ``GET /api/vendors``.
- ``/api/chatconfigs`` CRUD over the chat-config store.

Collaborators (store, vendor resolver, app config) are FastAPI dependencies
so tests can replace them through ``app.dependency_overrides``.
"""

from __future__ import annotations

import os
from typing import Any, Dict, List

from fastapi import Body, Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse
from pydantic import ValidationError

from ..base.dto import ChatConfigDTO, ChatRequestDTO, dump_errors
from ..base.factory import UnknownVendorError, VendorFactory
from ..config.app_config import AppConfig, get_app_config
from ..config.defaults import SERVICE_CORS_DEFAULT_ORIGINS
from ..persistence.interfaces import ChatConfigNotFound, IChatConfigStore
from ..persistence.memory import InMemoryChatConfigStore
from .chat_dispatch import (
    DispatchError,
    VendorDisabled,
    VendorResolver,
    collect_response,
    open_vendor_stream,
    stream_frames,
)

SSE_HEADERS = {"Cache-Control": "no-cache", "X-Accel-Buffering": "no"}


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def get_store(request: Request) -> IChatConfigStore:
    return request.app.state.store


def get_vendor_resolver() -> VendorResolver:
    return VendorFactory.resolve


def get_app_config_dep() -> AppConfig:
    return get_app_config()


def _validate(dto_cls, body: Dict[str, Any]):
    try:
        return dto_cls.model_validate(body)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=dump_errors(e)) from e


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


def health() -> Dict[str, Any]:
    return {"ok": True}


def get_vendors(app_config: AppConfig = Depends(get_app_config_dep)) -> Dict[str, Any]:
    """Enabled vendors with their projects and models."""
    return {
        "ok": True,
        "name": app_config.name,
        "vendors": {k: v.to_dict() for k, v in app_config.enabled_vendors().items()},
    }


async def post_chat(
    body: Dict[str, Any] = Body(...),
    resolver: VendorResolver = Depends(get_vendor_resolver),
    app_config: AppConfig = Depends(get_app_config_dep),
):
    """Run one chat turn against the vendor named by ``config.vendorId``."""
    request = _validate(ChatRequestDTO, body).to_domain()
    try:
        adapter, native = await open_vendor_stream(request, resolver, app_config)
    except (UnknownVendorError, VendorDisabled) as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except DispatchError as e:
        raise HTTPException(status_code=e.status_code, detail={"code": e.code.value, "message": str(e)}) from e

    if request.stream:
        return StreamingResponse(stream_frames(adapter, native), media_type="text/event-stream", headers=SSE_HEADERS)
    try:
        response = await collect_response(adapter, native, request)
    except DispatchError as e:
        raise HTTPException(status_code=e.status_code, detail={"code": e.code.value, "message": str(e)}) from e
    return response.to_dict()


def list_chat_configs(store: IChatConfigStore = Depends(get_store)) -> List[Dict[str, Any]]:
    return [c.to_dict() for c in store.list_chat_configs()]


def create_chat_config(body: Dict[str, Any] = Body(...), store: IChatConfigStore = Depends(get_store)) -> Dict[str, Any]:
    config = _validate(ChatConfigDTO, body).to_domain()
    return store.create_chat_config(config).to_dict()


def get_chat_config(config_id: str, store: IChatConfigStore = Depends(get_store)) -> Dict[str, Any]:
    config = store.get_chat_config(config_id)
    if config is None:
        raise HTTPException(status_code=404, detail=f"Chat config '{config_id}' not found")
    return config.to_dict()


def replace_chat_config(
    config_id: str,
    body: Dict[str, Any] = Body(...),
    store: IChatConfigStore = Depends(get_store),
) -> Dict[str, Any]:
    config = _validate(ChatConfigDTO, body).to_domain()
    try:
        return store.replace_chat_config(config_id, config).to_dict()
    except ChatConfigNotFound as e:
        raise HTTPException(status_code=404, detail=f"Chat config '{config_id}' not found") from e


def delete_chat_config(config_id: str, store: IChatConfigStore = Depends(get_store)) -> Dict[str, Any]:
    store.delete_chat_config(config_id)
    return {"ok": True, "deleted": config_id}


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


def create_app(store: IChatConfigStore | None = None) -> FastAPI:
    app = FastAPI(title="Mugin Chat Service", version="0.1.0")
    app.state.store = store if store is not None else InMemoryChatConfigStore()

    cors_origins = os.getenv("MUGIN_SERVICE_CORS_ORIGINS", SERVICE_CORS_DEFAULT_ORIGINS)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in cors_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_api_route("/api/health", health, methods=["GET"])
    app.add_api_route("/api/vendors", get_vendors, methods=["GET"])
    app.add_api_route("/api/chat", post_chat, methods=["POST"])
    app.add_api_route("/api/chatconfigs", list_chat_configs, methods=["GET"])
    app.add_api_route("/api/chatconfigs", create_chat_config, methods=["POST"])
    app.add_api_route("/api/chatconfigs/{config_id}", get_chat_config, methods=["GET"])
    app.add_api_route("/api/chatconfigs/{config_id}", replace_chat_config, methods=["PUT"])
    app.add_api_route("/api/chatconfigs/{config_id}", delete_chat_config, methods=["DELETE"])
    return app


app = create_app()

__all__ = ["app", "create_app", "get_store", "get_vendor_resolver", "get_app_config_dep"]
