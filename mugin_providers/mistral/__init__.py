"""Mistral vendor: Conversations API stream adapter and opener."""

from .adapter import MistralConversationsAdapter
from .client import open_mistral_stream

__all__ = ["MistralConversationsAdapter", "open_mistral_stream"]
