"""
Access Control - role checks consulted by every mutating operation.

Holds no state of its own; it reads the fixed administrator identity,
the agent roster and the parcel store.
"""

from land_registry.core.exceptions import NotAgentError, NotDeveloperError, NotOwnerError
from land_registry.core.models import is_empty_address
from land_registry.registry.parcels import ParcelStore
from land_registry.registry.roster import AgentRoster


class AccessControl:
    """Role predicates evaluated against a caller identity."""

    def __init__(self, admin: str, roster: AgentRoster, parcels: ParcelStore):
        self._admin = admin
        self._roster = roster
        self._parcels = parcels

    @property
    def admin(self) -> str:
        return self._admin

    def require_admin(self, caller: str) -> None:
        """Raise NotDeveloperError unless caller is the administrator."""
        if caller != self._admin:
            raise NotDeveloperError(caller=caller)

    def require_agent(self, caller: str) -> None:
        """Raise NotAgentError unless caller is an authorized agent."""
        if not self._roster.is_agent(caller):
            raise NotAgentError(caller=caller)

    def require_owner(self, caller: str, certificate: int) -> None:
        """
        Raise NotOwnerError unless caller owns the parcel.

        A missing parcel is owned by the zero address, and the zero
        address never owns anything, so the check rejects every caller
        for it.
        """
        if is_empty_address(caller) or caller != self._parcels.owner_of(certificate):
            raise NotOwnerError(caller=caller, certificate=certificate)
