"""mugin_providers.config.env
==========================

Per-project vendor credentials from the process environment.

Each vendor may hold several API keys, one per project, named
``<VENDOR>_API_KEY_PROJECT_<PROJECT>`` (e.g. ``OPENAI_API_KEY_PROJECT_DEFAULT``).
A chat config picks its project; the stream opener resolves the key here.

Failure Modes
-------------
Helpers never raise on unknown vendors or unset variables; they return
``None`` (or an empty list) and callers decide how to proceed.
"""

from __future__ import annotations

import os
from typing import List, Mapping, Optional

from .defaults import DEFAULT_PROJECT

PROJECT_KEY_INFIX = "_API_KEY_PROJECT_"


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if ``val`` looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_' (case-insensitive, surrounding spaces ignored).
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "example" in v or v.startswith("test_")


def vendor_key_env_name(vendor: str, project: Optional[str] = None) -> str:
    """Return the env var name holding ``vendor``'s key for ``project``."""
    return f"{(vendor or '').upper()}{PROJECT_KEY_INFIX}{(project or DEFAULT_PROJECT).upper()}"


def resolve_vendor_key(vendor: str, project: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Return the API key for ``vendor``/``project``, or ``None`` when unset.

    Placeholder values are treated as unset.
    """
    env = os.environ if environ is None else environ
    value = env.get(vendor_key_env_name(vendor, project))
    if not value or is_placeholder(value):
        return None
    return value


def list_vendor_projects(vendor: str, environ: Optional[Mapping[str, str]] = None) -> List[str]:
    """Return the project names that have a key configured for ``vendor`` (sorted)."""
    env = os.environ if environ is None else environ
    prefix = f"{(vendor or '').upper()}{PROJECT_KEY_INFIX}"
    return sorted(k[len(prefix):] for k, v in env.items() if k.startswith(prefix) and k != prefix and v)


__all__ = [
    "PROJECT_KEY_INFIX",
    "is_placeholder",
    "vendor_key_env_name",
    "resolve_vendor_key",
    "list_vendor_projects",
]
