"""Application-level vendor catalogue.

Describes which vendors the service can dispatch to, which projects carry a
key for each, and which models the UI may offer. Built from the environment
on demand so tests can ``monkeypatch`` variables freely.

A remote vendor is enabled iff its ``DEFAULT`` project key is set. Ollama is
a local daemon without keys: it is enabled iff ``OLLAMA_HOST`` is set.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .defaults import (
    APP_DEFAULT_NAME,
    MISTRAL_MODELS,
    OLLAMA_DEFAULT_MODEL,
    OPENAI_MODELS,
    VENDOR_DISPLAY_NAMES,
)
from .env import list_vendor_projects, resolve_vendor_key


@dataclass(frozen=True)
class ModelInfo:
    id: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id}


@dataclass
class VendorInfo:
    name: str
    enabled: bool = False
    projects: List[str] = field(default_factory=list)
    models: List[ModelInfo] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "enabled": self.enabled,
            "projects": list(self.projects),
            "models": [m.to_dict() for m in self.models],
        }


@dataclass
class AppConfig:
    name: str
    vendors: Dict[str, VendorInfo] = field(default_factory=dict)

    def vendor(self, vendor_id: str) -> Optional[VendorInfo]:
        return self.vendors.get((vendor_id or "").upper())

    def enabled_vendors(self) -> Dict[str, VendorInfo]:
        return {k: v for k, v in self.vendors.items() if v.enabled}

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "vendors": {k: v.to_dict() for k, v in self.vendors.items()}}


def _remote_vendor(vendor_id: str, models, env: Mapping[str, str]) -> VendorInfo:
    return VendorInfo(
        name=VENDOR_DISPLAY_NAMES[vendor_id],
        enabled=resolve_vendor_key(vendor_id, "DEFAULT", env) is not None,
        projects=list_vendor_projects(vendor_id, env),
        models=[ModelInfo(m) for m in models],
    )


def get_app_config(environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Build the vendor catalogue from ``environ`` (default: ``os.environ``)."""
    env = os.environ if environ is None else environ
    ollama_model = env.get("OLLAMA_MODEL") or OLLAMA_DEFAULT_MODEL
    return AppConfig(
        name=env.get("APP_NAME") or APP_DEFAULT_NAME,
        vendors={
            "MISTRAL": _remote_vendor("MISTRAL", MISTRAL_MODELS, env),
            "OPENAI": _remote_vendor("OPENAI", OPENAI_MODELS, env),
            "OLLAMA": VendorInfo(
                name=VENDOR_DISPLAY_NAMES["OLLAMA"],
                enabled=bool(env.get("OLLAMA_HOST")),
                projects=["DEFAULT"],
                models=[ModelInfo(ollama_model)],
            ),
        },
    )


__all__ = ["ModelInfo", "VendorInfo", "AppConfig", "get_app_config"]
