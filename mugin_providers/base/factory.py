"""Vendor factory: vendor id -> stream adapter class + stream opener.

Purpose
-------
Resolve the adapter and opener for a chat config's ``vendorId``. Vendor
packages are imported lazily with ``importlib`` so a vendor SDK is only
loaded when a request for that vendor arrives.

Failure modes
-------------
``UnknownVendorError`` for an unregistered vendor id, an import failure or a
missing attribute. No retries or fallbacks are attempted.
"""

from __future__ import annotations

from dataclasses import dataclass
from importlib import import_module
from typing import Any, Awaitable, Callable, Dict, Tuple, Type

from .models import ChatRequest
from .streaming import BaseVendorAdapter

StreamOpener = Callable[[ChatRequest], Awaitable[Any]]


class UnknownVendorError(Exception):
    """Raised when a vendor id cannot be resolved to an adapter and opener."""


@dataclass(frozen=True)
class VendorBinding:
    vendor_id: str
    adapter_cls: Type[BaseVendorAdapter]
    open_stream: StreamOpener

    def create_adapter(self, request: ChatRequest, **kwargs: Any) -> BaseVendorAdapter:
        return self.adapter_cls(request, **kwargs)


class VendorFactory:
    """Lazy registry of the supported vendors."""

    _VENDORS: Dict[str, Dict[str, str]] = {
        "OPENAI": {"module": "mugin_providers.openai", "adapter": "OpenAIResponsesAdapter", "opener": "open_openai_stream"},
        "MISTRAL": {"module": "mugin_providers.mistral", "adapter": "MistralConversationsAdapter", "opener": "open_mistral_stream"},
        "OLLAMA": {"module": "mugin_providers.ollama", "adapter": "OllamaChatAdapter", "opener": "open_ollama_stream"},
    }

    @classmethod
    def resolve(cls, vendor_id: str) -> VendorBinding:
        """Return the binding for ``vendor_id`` (case-insensitive).

        Raises
        ------
        UnknownVendorError
            If the vendor is not registered or its package fails to import.
        """
        name = (vendor_id or "").upper().strip()
        spec = cls._VENDORS.get(name)
        if not spec:
            raise UnknownVendorError(f"Unknown vendor '{vendor_id}'")
        try:
            mod = import_module(spec["module"])
        except Exception as exc:  # pragma: no cover - import failure path
            raise UnknownVendorError(f"Failed to import module '{spec['module']}' for vendor '{name}': {exc}") from exc
        try:
            adapter_cls = getattr(mod, spec["adapter"])
            opener = getattr(mod, spec["opener"])
        except AttributeError as exc:
            raise UnknownVendorError(f"Vendor '{name}' is missing its adapter or opener: {exc}") from exc
        return VendorBinding(vendor_id=name, adapter_cls=adapter_cls, open_stream=opener)

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        return tuple(cls._VENDORS.keys())


def resolve_vendor(vendor_id: str) -> VendorBinding:
    """Shortcut for :meth:`VendorFactory.resolve`."""
    return VendorFactory.resolve(vendor_id)


__all__ = ["StreamOpener", "UnknownVendorError", "VendorBinding", "VendorFactory", "resolve_vendor"]
