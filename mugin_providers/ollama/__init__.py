"""Ollama vendor: local ``/api/chat`` NDJSON stream adapter and opener."""

from .adapter import OllamaChatAdapter
from .client import open_ollama_stream

__all__ = ["OllamaChatAdapter", "open_ollama_stream"]
