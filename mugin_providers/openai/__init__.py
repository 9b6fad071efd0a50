"""OpenAI vendor: Responses API stream adapter and opener."""

from .adapter import OpenAIResponsesAdapter
from .client import open_openai_stream

__all__ = ["OpenAIResponsesAdapter", "open_openai_stream"]
