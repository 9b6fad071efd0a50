"""mugin_providers.config.defaults
===============================

Small, stable default values used by the vendor stream openers and the chat
service. Everything here can be overridden via environment variables or the
external config file (see ``mugin_providers.config``).

Only plain constants live here; this module imports nothing from the rest of
the package.
"""

from __future__ import annotations

# ---- Application ----
APP_DEFAULT_NAME = "Mugin"
DEFAULT_PROJECT = "DEFAULT"

# ---- Service / HTTP layer ----

# Comma-separated list of allowed origins for the dev server.
SERVICE_CORS_DEFAULT_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"
SERVICE_DEFAULT_HOST = "127.0.0.1"
SERVICE_DEFAULT_PORT = 8091

# Seconds; applies to the client transport and the Ollama HTTP stream.
HTTP_DEFAULT_TIMEOUT_SECONDS = 120.0
# Path of the chat dispatcher route, relative to the service base URL.
CHAT_ROUTE_PATH = "/api/chat"

# ---- Vendor defaults ----
OPENAI_DEFAULT_MODEL = "gpt-4.1"
OPENAI_MODELS = ("gpt-4o", "gpt-4.1", "gpt-5.2")

MISTRAL_DEFAULT_MODEL = "mistral-large-latest"
MISTRAL_MODELS = ("mistral-medium-latest", "mistral-large-latest")

OLLAMA_DEFAULT_MODEL = "llama3.2"
OLLAMA_DEFAULT_HOST = "http://localhost:11434"

VENDOR_IDS = ("MISTRAL", "OPENAI", "OLLAMA")
VENDOR_DISPLAY_NAMES = {"MISTRAL": "Mistral", "OPENAI": "OpenAI", "OLLAMA": "Ollama"}

__all__ = [
    "APP_DEFAULT_NAME",
    "DEFAULT_PROJECT",
    "SERVICE_CORS_DEFAULT_ORIGINS",
    "SERVICE_DEFAULT_HOST",
    "SERVICE_DEFAULT_PORT",
    "HTTP_DEFAULT_TIMEOUT_SECONDS",
    "CHAT_ROUTE_PATH",
    "OPENAI_DEFAULT_MODEL",
    "OPENAI_MODELS",
    "MISTRAL_DEFAULT_MODEL",
    "MISTRAL_MODELS",
    "OLLAMA_DEFAULT_MODEL",
    "OLLAMA_DEFAULT_HOST",
    "VENDOR_IDS",
    "VENDOR_DISPLAY_NAMES",
]
