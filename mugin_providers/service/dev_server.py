from __future__ import annotations

import os

import uvicorn

from ..config.defaults import SERVICE_DEFAULT_HOST, SERVICE_DEFAULT_PORT


def _parse_port(value: str | None, default: int) -> int:
    """Best-effort parse of a port from string, falling back to ``default``."""
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def main() -> None:
    """Start the development server for the chat service.

    - MUGIN_SERVICE_HOST: interface to bind (default "127.0.0.1")
    - MUGIN_SERVICE_PORT: port to bind (default 8091)
    - MUGIN_SERVICE_RELOAD: "true"/"false" to toggle auto-reload (default true)
    """
    host = os.getenv("MUGIN_SERVICE_HOST", SERVICE_DEFAULT_HOST)
    port = _parse_port(os.getenv("MUGIN_SERVICE_PORT"), SERVICE_DEFAULT_PORT)
    reload_env = os.getenv("MUGIN_SERVICE_RELOAD")
    reload_enabled = True if reload_env is None else reload_env.lower() == "true"

    uvicorn.run(
        "mugin_providers.service.app:app",
        host=host,
        port=port,
        reload=reload_enabled,
    )


if __name__ == "__main__":
    main()
