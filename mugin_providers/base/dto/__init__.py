"""DTO validation package for the chat service edge."""

from .chat import (
    ChatConfigDTO,
    ChatItemDTO,
    ChatRequestDTO,
    InputMessageDTO,
    OutputMessageDTO,
    TextPartDTO,
    dump_errors,
)

__all__ = [
    "TextPartDTO",
    "InputMessageDTO",
    "OutputMessageDTO",
    "ChatItemDTO",
    "ChatConfigDTO",
    "ChatRequestDTO",
    "dump_errors",
]
