"""Tests for role checks."""

import pytest

from land_registry.core.exceptions import NotAgentError, NotDeveloperError, NotOwnerError
from land_registry.core.models import ZERO_ADDRESS
from land_registry.registry.access import AccessControl
from land_registry.registry.parcels import ParcelStore
from land_registry.registry.roster import AgentRoster

from conftest import ADMIN, AGENT, ALICE, BOB


@pytest.fixture
def access() -> AccessControl:
    roster = AgentRoster()
    roster.add(AGENT)
    parcels = ParcelStore()
    parcels.create(42, 100, ALICE)
    return AccessControl(ADMIN, roster, parcels)


class TestAccessControl:
    """Tests for AccessControl predicates."""

    def test_admin_passes(self, access: AccessControl) -> None:
        access.require_admin(ADMIN)

    def test_non_admin_rejected(self, access: AccessControl) -> None:
        with pytest.raises(NotDeveloperError) as exc_info:
            access.require_admin(ALICE)
        assert exc_info.value.caller == ALICE

    def test_agent_passes(self, access: AccessControl) -> None:
        access.require_agent(AGENT)

    def test_admin_is_not_implicitly_agent(self, access: AccessControl) -> None:
        """The administrator must be on the roster to verify."""
        with pytest.raises(NotAgentError):
            access.require_agent(ADMIN)

    def test_owner_passes(self, access: AccessControl) -> None:
        access.require_owner(ALICE, 42)

    def test_non_owner_rejected(self, access: AccessControl) -> None:
        with pytest.raises(NotOwnerError):
            access.require_owner(BOB, 42)

    def test_missing_parcel_rejects_callers(self, access: AccessControl) -> None:
        """A missing parcel is owned by nobody a caller can be."""
        with pytest.raises(NotOwnerError):
            access.require_owner(ALICE, 7)

    def test_zero_address_never_owns(self, access: AccessControl) -> None:
        """The empty identity is rejected even for a missing parcel."""
        with pytest.raises(NotOwnerError):
            access.require_owner(ZERO_ADDRESS, 7)

    def test_blank_caller_rejected(self, access: AccessControl) -> None:
        with pytest.raises(NotOwnerError):
            access.require_owner("", 7)
