"""
Registry snapshots - save and restore the full registry state.

Snapshots are written atomically with the write-temp-then-replace pattern
so a crash never leaves a half-written file behind.
"""

import json
import os
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from land_registry.audit.logger import EventLog
from land_registry.bridge.query import ExternalQueryBridge
from land_registry.core.exceptions import ConfigurationError, LandRegistryError
from land_registry.core.models import Parcel
from land_registry.registry.parcels import ParcelStore
from land_registry.registry.roster import AgentRoster
from land_registry.registry.service import RegistryService
from land_registry.settlement.ledger import InMemoryLedger


class RegistrySnapshot(BaseModel):
    """Serializable registry state."""

    version: str = "1.0"
    admin: str
    registration_fee: int
    parcels: list[Parcel] = Field(default_factory=list)
    agents: list[str] = Field(default_factory=list, description="Roster order")
    balances: dict[str, int] = Field(default_factory=dict)

    @classmethod
    def capture(cls, service: RegistryService) -> "RegistrySnapshot":
        """Capture the current state of a service."""
        settlement = service.settlement
        balances = settlement.balances if isinstance(settlement, InMemoryLedger) else {}
        return cls(
            admin=service.admin,
            registration_fee=service.registration_fee,
            parcels=[p.model_copy() for p in service.parcels.parcels()],
            agents=service.get_agents(),
            balances=balances,
        )

    def restore(
        self,
        event_log: EventLog | None = None,
        bridge: ExternalQueryBridge | None = None,
    ) -> RegistryService:
        """Build a service holding this snapshot's state."""
        parcels = ParcelStore()
        for parcel in self.parcels:
            parcels.restore(parcel.model_copy())

        roster = AgentRoster()
        for agent in self.agents:
            roster.add(agent)

        return RegistryService(
            admin=self.admin,
            registration_fee=self.registration_fee,
            settlement=InMemoryLedger(self.balances),
            event_log=event_log,
            bridge=bridge,
            parcels=parcels,
            roster=roster,
        )


def save_snapshot(service: RegistryService, path: Path) -> Path:
    """Persist a service's state to ``path`` atomically."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.with_name(f"{path.name}.tmp")

    snapshot = RegistrySnapshot.capture(service)
    try:
        temp_path.write_text(snapshot.model_dump_json(indent=2))
        os.replace(temp_path, path)
    except Exception:
        temp_path.unlink(missing_ok=True)
        raise
    return path


def load_snapshot(
    path: Path,
    event_log: EventLog | None = None,
    bridge: ExternalQueryBridge | None = None,
) -> RegistryService:
    """
    Rebuild a service from a snapshot file.

    Raises:
        ConfigurationError: If the file is missing or malformed
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError("Registry snapshot not found", config_file=str(path))

    try:
        snapshot = RegistrySnapshot(**json.loads(path.read_text()))
    except (json.JSONDecodeError, PydanticValidationError, TypeError) as e:
        raise ConfigurationError(
            f"Malformed registry snapshot: {e}", config_file=str(path)
        ) from e

    try:
        return snapshot.restore(event_log=event_log, bridge=bridge)
    except LandRegistryError as e:
        raise ConfigurationError(
            f"Inconsistent registry snapshot: {e}", config_file=str(path)
        ) from e


class SnapshotPeer:
    """
    Peer registry backed by another instance's snapshot file.

    The file is read on every query, so a missing or corrupt peer
    surfaces as a failure of that query only.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def view_land(self, certificate: int):
        service = load_snapshot(self.path, event_log=EventLog())
        try:
            return service.view_land(certificate)
        finally:
            service.close()
