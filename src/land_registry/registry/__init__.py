"""
Land Registry Registry Module.

Parcel records, the agent roster, access control and the orchestrating
registry service.
"""

__all__ = [
    "AccessControl",
    "AgentRoster",
    "ParcelStore",
    "RegistryService",
    "RegistrySnapshot",
    "SnapshotPeer",
    "load_snapshot",
    "save_snapshot",
]

from land_registry.registry.access import AccessControl
from land_registry.registry.parcels import ParcelStore
from land_registry.registry.roster import AgentRoster
from land_registry.registry.service import RegistryService
from land_registry.registry.snapshot import (
    RegistrySnapshot,
    SnapshotPeer,
    load_snapshot,
    save_snapshot,
)
