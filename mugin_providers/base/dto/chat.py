"""
Pydantic DTOs validating inbound chat-service bodies.

Purpose
-------
Validate the JSON posted to ``/api/chat`` and ``/api/chatconfigs`` before it
reaches the engine. Field names follow the camelCase wire form via aliases;
``to_domain()`` converts a validated DTO into the engine dataclasses.

Failure modes
-------------
Validation either succeeds or raises ``pydantic.ValidationError``; the
service turns that into a 4xx response.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..models import (
    AuditStamp,
    ChatConfig,
    ChatInputMessage,
    ChatItem,
    ChatOutputMessage,
    ChatRequest,
    InputText,
    OutputText,
)


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class TextPartDTO(_WireModel):
    type: Literal["input_text", "output_text"]
    text: str


class InputMessageDTO(_WireModel):
    type: Literal["message.input"]
    role: Literal["user"] = "user"
    content: List[TextPartDTO] = Field(default_factory=list)

    def to_domain(self) -> ChatInputMessage:
        return ChatInputMessage(content=[InputText(text=p.text) for p in self.content])


class OutputMessageDTO(_WireModel):
    type: Literal["message.output"]
    id: str = Field(..., min_length=1)
    role: Literal["assistant"] = "assistant"
    content: List[TextPartDTO] = Field(default_factory=list)

    def to_domain(self) -> ChatOutputMessage:
        return ChatOutputMessage(id=self.id, content=[OutputText(text=p.text) for p in self.content])


ChatItemDTO = Annotated[Union[InputMessageDTO, OutputMessageDTO], Field(discriminator="type")]


class AuditByDTO(_WireModel):
    id: str = ""
    name: Optional[str] = None


class AuditStampDTO(_WireModel):
    at: str = ""
    by: AuditByDTO = Field(default_factory=AuditByDTO)

    def to_domain(self) -> AuditStamp:
        return AuditStamp(at=self.at, by_id=self.by.id, by_name=self.by.name)


class VendorAgentDTO(_WireModel):
    id: str = Field(..., min_length=1)


class ChatConfigDTO(_WireModel):
    """Chat config body.

    Rules:
        - ``vendorId`` is non-empty.
        - Either ``model`` or ``vendorAgent.id`` must be present.
    """

    id: str = Field(default="", alias="_id")
    name: str = ""
    description: str = ""
    vendor_id: str = Field(..., alias="vendorId", min_length=1)
    project: str = "DEFAULT"
    model: Optional[str] = None
    vendor_agent: Optional[VendorAgentDTO] = Field(default=None, alias="vendorAgent")
    instructions: Optional[str] = None
    conversation_id: Optional[str] = Field(default=None, alias="conversationId")
    type: Literal["published", "private"] = "private"
    access_groups: Union[Literal["all"], List[str]] = Field(default="all", alias="accessGroups")
    created: AuditStampDTO = Field(default_factory=AuditStampDTO)
    updated: AuditStampDTO = Field(default_factory=AuditStampDTO)

    @model_validator(mode="after")
    def _require_model_or_agent(self) -> "ChatConfigDTO":
        if not self.model and self.vendor_agent is None:
            raise ValueError("chat config must name a model or a vendor agent")
        return self

    def to_domain(self) -> ChatConfig:
        return ChatConfig(
            id=self.id,
            name=self.name,
            description=self.description,
            vendor_id=self.vendor_id.upper(),
            project=self.project or "DEFAULT",
            model=self.model,
            vendor_agent_id=self.vendor_agent.id if self.vendor_agent else None,
            instructions=self.instructions,
            conversation_id=self.conversation_id,
            type=self.type,
            access_groups=list(self.access_groups) if isinstance(self.access_groups, list) else "all",
            created=self.created.to_domain(),
            updated=self.updated.to_domain(),
        )


class ChatRequestDTO(_WireModel):
    """Body of ``POST /api/chat``: a config plus the flattened inputs.

    ``inputs`` must be non-empty and end with a user message.
    """

    config: ChatConfigDTO
    inputs: List[ChatItemDTO] = Field(..., min_length=1)
    store: bool = False
    stream: bool = True

    @model_validator(mode="after")
    def _last_input_is_user(self) -> "ChatRequestDTO":
        if self.inputs and not isinstance(self.inputs[-1], InputMessageDTO):
            raise ValueError("last input must be a user message")
        return self

    def to_domain(self) -> ChatRequest:
        items: List[ChatItem] = [i.to_domain() for i in self.inputs]
        return ChatRequest(config=self.config.to_domain(), inputs=items, store=self.store, stream=self.stream)


def dump_errors(exc: Any) -> List[Dict[str, Any]]:
    """JSON-safe list of pydantic validation errors for a 4xx body."""
    return [{"loc": list(e.get("loc", ())), "msg": e.get("msg", "")} for e in exc.errors()]


__all__ = [
    "TextPartDTO",
    "InputMessageDTO",
    "OutputMessageDTO",
    "ChatItemDTO",
    "ChatConfigDTO",
    "ChatRequestDTO",
    "dump_errors",
]
