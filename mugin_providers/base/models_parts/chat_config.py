"""
Chat configuration (agent) model.

A ``ChatConfig`` selects the vendor, project, model/agent and instructions a
chat runs against. Configs are resolved by the chat-config store before they
reach the engine; the only field the engine itself writes is
``conversation_id`` (set when a vendor reports a new server-side
conversation).

Wire form uses camelCase keys (``vendorId``, ``conversationId`` ...) and
``_id`` for the identifier.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

ConfigType = Literal["published", "private"]
AccessGroups = Union[Literal["all"], List[str]]


def utc_now_iso() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


@dataclass
class AuditStamp:
    """Who touched a config, and when."""

    at: str = ""
    by_id: str = ""
    by_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        by: Dict[str, Any] = {"id": self.by_id}
        if self.by_name is not None:
            by["name"] = self.by_name
        return {"at": self.at, "by": by}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "AuditStamp":
        data = data or {}
        by = data.get("by") or {}
        return cls(at=str(data.get("at", "")), by_id=str(by.get("id", "")), by_name=by.get("name"))


@dataclass
class ChatConfig:
    """Vendor/model selection plus presentation metadata for one agent.

    Attributes:
        id: Store identifier (empty for unsaved configs).
        name: Display name.
        vendor_id: Vendor key, e.g. ``"OPENAI"``, ``"MISTRAL"``, ``"OLLAMA"``.
        project: Vendor project whose API key is used.
        model: Model id; optional when ``vendor_agent_id`` is set.
        vendor_agent_id: Vendor-hosted agent id (Mistral agents).
        instructions: System instructions forwarded to the vendor.
        conversation_id: Vendor-side conversation id, once one exists.
    """

    vendor_id: str
    id: str = ""
    name: str = ""
    description: str = ""
    project: str = "DEFAULT"
    model: Optional[str] = None
    vendor_agent_id: Optional[str] = None
    instructions: Optional[str] = None
    conversation_id: Optional[str] = None
    type: ConfigType = "private"
    access_groups: AccessGroups = "all"
    created: AuditStamp = field(default_factory=AuditStamp)
    updated: AuditStamp = field(default_factory=AuditStamp)

    def copy(self) -> "ChatConfig":
        return replace(
            self,
            access_groups=list(self.access_groups) if isinstance(self.access_groups, list) else self.access_groups,
            created=replace(self.created),
            updated=replace(self.updated),
        )

    def display_name(self) -> str:
        """Name shown for the agent, falling back to the model id."""
        return self.name or self.model or "Unknown name"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "_id": self.id,
            "name": self.name,
            "description": self.description,
            "vendorId": self.vendor_id,
            "project": self.project,
            "type": self.type,
            "accessGroups": list(self.access_groups) if isinstance(self.access_groups, list) else self.access_groups,
            "created": self.created.to_dict(),
            "updated": self.updated.to_dict(),
        }
        if self.vendor_agent_id:
            data["vendorAgent"] = {"id": self.vendor_agent_id}
        for key, value in (
            ("model", self.model),
            ("instructions", self.instructions),
            ("conversationId", self.conversation_id),
        ):
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ChatConfig":
        agent = data.get("vendorAgent") or {}
        groups = data.get("accessGroups", "all")
        return cls(
            id=str(data.get("_id", "")),
            name=str(data.get("name", "")),
            description=str(data.get("description", "")),
            vendor_id=str(data["vendorId"]),
            project=str(data.get("project", "DEFAULT")),
            model=data.get("model"),
            vendor_agent_id=agent.get("id"),
            instructions=data.get("instructions"),
            conversation_id=data.get("conversationId"),
            type=data.get("type", "private"),
            access_groups=list(groups) if isinstance(groups, list) else "all",
            created=AuditStamp.from_dict(data.get("created")),
            updated=AuditStamp.from_dict(data.get("updated")),
        )


__all__ = ["AuditStamp", "ChatConfig", "ConfigType", "AccessGroups", "utc_now_iso"]
