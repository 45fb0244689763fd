"""
Land Registry Audit Module.

Notification models and the event log that records them.

Example:
    >>> log = EventLog()
    >>> _ = log.emit(agent_added("0xabc"))
    >>> log.names()
    [<EventName.AGENT_ADDED: 'AgentAdded'>]
"""

from .logger import EventLog, read_log
from .models import (
    EventName,
    RegistryEvent,
    agent_added,
    agent_revoked,
    external_view_result,
    fee_paid,
    land_registered,
    land_transferred,
    land_verified,
)

__all__ = [
    "EventLog",
    "EventName",
    "RegistryEvent",
    "read_log",
    "agent_added",
    "agent_revoked",
    "external_view_result",
    "fee_paid",
    "land_registered",
    "land_transferred",
    "land_verified",
]
