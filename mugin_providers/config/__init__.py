"""Unified configuration layer for the vendor stream openers.

Merge order (later wins)
------------------------
1. Built-in defaults (``config.defaults``)
2. ``.env`` file in the working directory (lightweight loader, no dependency)
3. External config file (JSON, else YAML) pointed to by ``MUGIN_CONFIG_FILE``
4. Environment variables ``<VENDOR>_MODEL``, ``<VENDOR>_BASE_URL``,
   ``<VENDOR>_HOST``
5. In-code overrides passed to ``get_vendor_config``

External config file example::

    openai:
      model: gpt-4.1
      base_url: https://api.openai.com/v1
    ollama:
      host: http://gpu-box:11434

API keys are not part of this merge: they are per project and resolved with
``config.env.resolve_vendor_key``.

Public API
----------
* get_vendor_config(vendor: str, overrides: dict | None = None) -> dict
* get_model(vendor: str) -> str | None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import MISTRAL_DEFAULT_MODEL, OLLAMA_DEFAULT_HOST, OLLAMA_DEFAULT_MODEL, OPENAI_DEFAULT_MODEL
from .env import is_placeholder

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"model": OPENAI_DEFAULT_MODEL},
    "mistral": {"model": MISTRAL_DEFAULT_MODEL},
    "ollama": {"model": OLLAMA_DEFAULT_MODEL, "host": OLLAMA_DEFAULT_HOST},
}

ENV_FIELD_MAP = {
    "model": "MODEL",
    "base_url": "BASE_URL",
    "host": "HOST",
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Parse ``KEY=VALUE`` lines of ``.env`` (or ``DOTENV_FILE``) into ``os.environ``.

    Existing variables win unless they hold a placeholder value.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv("MUGIN_CONFIG_FILE")
    data: Any = {}
    if path and Path(path).exists():
        text = Path(path).read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except ValueError:
            data = yaml.safe_load(text) or {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def reset_config_cache() -> None:
    """Forget the cached external config file and ``.env`` state (tests)."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


def _env_overrides(vendor: str) -> Dict[str, Any]:
    prefix = vendor.upper()
    out: Dict[str, Any] = {}
    for key, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val:
            out[key] = val
    return out


def get_vendor_config(vendor: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged configuration for ``vendor`` (case-insensitive)."""
    _load_dotenv_once()
    name = (vendor or "").lower().strip()
    cfg: Dict[str, Any] = dict(DEFAULTS.get(name, {}))

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= _env_overrides(name)

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def get_model(vendor: str) -> Optional[str]:
    return get_vendor_config(vendor).get("model")


__all__ = [
    "DEFAULTS",
    "get_vendor_config",
    "get_model",
    "reset_config_cache",
]
