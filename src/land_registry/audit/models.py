"""
Notification models for the Land Registry.

Every state change and every peer query is recorded as a RegistryEvent.
"""

import hashlib
import json
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class EventName(str, Enum):
    """Notifications emitted by the registry."""

    AGENT_ADDED = "AgentAdded"
    AGENT_REVOKED = "AgentRevoked"
    LAND_REGISTERED = "LandRegistered"
    LAND_VERIFIED = "LandVerified"
    LAND_TRANSFERRED = "LandTransferred"
    FEE_PAID = "FeePaid"
    EXTERNAL_VIEW_RESULT = "ExternalViewResult"


def _utc_now() -> str:
    """Return current UTC timestamp as ISO8601 string."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


class RegistryEvent(BaseModel):
    """
    A single emitted notification.

    Immutable record of a registry state change or peer query.
    """

    event_id: str = Field(default_factory=lambda: f"evt_{uuid.uuid4().hex[:12]}")
    timestamp: str = Field(default_factory=_utc_now)
    name: EventName
    payload: dict[str, Any] = Field(default_factory=dict)
    checksum: str | None = Field(default=None, description="SHA256 hash for integrity verification")

    model_config = {"frozen": True}

    def compute_checksum(self) -> str:
        """Compute SHA256 checksum of event data for integrity verification."""
        data = {
            "event_id": self.event_id,
            "timestamp": self.timestamp,
            "name": self.name.value,
            "payload": self.payload,
        }
        canonical = json.dumps(data, sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(canonical.encode()).hexdigest()

    def with_checksum(self) -> "RegistryEvent":
        """Return a new event with checksum computed."""
        return self.model_copy(update={"checksum": self.compute_checksum()})

    def to_log_line(self) -> str:
        """Convert to JSONL string for file storage."""
        return self.with_checksum().model_dump_json(exclude_none=True)


def agent_added(agent: str) -> RegistryEvent:
    return RegistryEvent(name=EventName.AGENT_ADDED, payload={"agent": agent})


def agent_revoked(agent: str) -> RegistryEvent:
    return RegistryEvent(name=EventName.AGENT_REVOKED, payload={"agent": agent})


def land_registered(certificate: int, owner: str) -> RegistryEvent:
    return RegistryEvent(
        name=EventName.LAND_REGISTERED,
        payload={"certificate": certificate, "owner": owner},
    )


def land_verified(certificate: int, agent: str) -> RegistryEvent:
    return RegistryEvent(
        name=EventName.LAND_VERIFIED,
        payload={"certificate": certificate, "agent": agent},
    )


def land_transferred(certificate: int, from_owner: str, to_owner: str) -> RegistryEvent:
    return RegistryEvent(
        name=EventName.LAND_TRANSFERRED,
        payload={"certificate": certificate, "from": from_owner, "to": to_owner},
    )


def fee_paid(payer: str, amount: int) -> RegistryEvent:
    return RegistryEvent(name=EventName.FEE_PAID, payload={"payer": payer, "amount": amount})


def external_view_result(success: bool, owner: str) -> RegistryEvent:
    return RegistryEvent(
        name=EventName.EXTERNAL_VIEW_RESULT,
        payload={"success": success, "owner": owner},
    )
