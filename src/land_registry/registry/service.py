"""
Registry Service - orchestrates registration, verification and transfer.

Every mutating operation runs under one re-entrant lock, so checks and
state changes are atomic with respect to each other and to local reads.
Peer queries go through the ExternalQueryBridge outside that lock.
"""

import logging
import threading
from typing import Any

from land_registry.audit.logger import EventLog
from land_registry.audit.models import (
    agent_added,
    agent_revoked,
    fee_paid,
    land_registered,
    land_transferred,
    land_verified,
)
from land_registry.bridge.query import ExternalQueryBridge
from land_registry.core.config import RegistryConfig
from land_registry.core.exceptions import (
    AlreadyExistsError,
    IncorrectFeeError,
    InvalidCertificateError,
    NotVerifiedError,
    SettlementError,
    ValidationError,
)
from land_registry.core.models import (
    REGISTRATION_FEE,
    ExternalViewResult,
    LandStatus,
    LandView,
    is_empty_address,
)
from land_registry.registry.access import AccessControl
from land_registry.registry.parcels import ParcelStore
from land_registry.registry.roster import AgentRoster
from land_registry.settlement.ledger import FeeSettlement, InMemoryLedger

logger = logging.getLogger(__name__)


class RegistryService:
    """
    Authoritative land registry.

    The administrator and registration fee are fixed at construction.
    Administrator manages the agent roster, agents verify parcels, and
    owners transfer verified parcels.
    """

    def __init__(
        self,
        admin: str,
        registration_fee: int = REGISTRATION_FEE,
        settlement: FeeSettlement | None = None,
        event_log: EventLog | None = None,
        bridge: ExternalQueryBridge | None = None,
        parcels: ParcelStore | None = None,
        roster: AgentRoster | None = None,
    ):
        """
        Initialize the registry.

        Args:
            admin: Administrator identity, immutable for the service lifetime
            registration_fee: Exact amount required by ``register_land``
            settlement: Collaborator that forwards fees to the administrator
            event_log: Sink for emitted notifications
            bridge: Bridge used by ``query_remote``
            parcels: Pre-populated parcel store (snapshot restore)
            roster: Pre-populated agent roster (snapshot restore)
        """
        if not admin:
            raise ValidationError("Administrator address is required", field="admin")
        if registration_fee <= 0:
            raise ValidationError(
                "Registration fee must be positive", field="registration_fee"
            )

        self._admin = admin
        self._fee = registration_fee
        self._settlement = settlement or InMemoryLedger()
        self._events = event_log or EventLog()
        self._bridge = bridge or ExternalQueryBridge(event_log=self._events)

        self._parcels = parcels if parcels is not None else ParcelStore()
        self._roster = roster if roster is not None else AgentRoster()
        self._access = AccessControl(admin, self._roster, self._parcels)
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: RegistryConfig, **kwargs: Any) -> "RegistryService":
        """Build a service from a RegistryConfig."""
        event_log = kwargs.pop("event_log", None) or EventLog(
            config.audit_path if config.audit_log else None
        )
        bridge = kwargs.pop("bridge", None) or ExternalQueryBridge(
            event_log=event_log, timeout_seconds=config.query_timeout_seconds
        )
        return cls(
            admin=config.admin,
            registration_fee=config.registration_fee,
            event_log=event_log,
            bridge=bridge,
            **kwargs,
        )

    @property
    def admin(self) -> str:
        return self._admin

    @property
    def registration_fee(self) -> int:
        return self._fee

    @property
    def event_log(self) -> EventLog:
        return self._events

    @property
    def settlement(self) -> FeeSettlement:
        return self._settlement

    @property
    def parcels(self) -> ParcelStore:
        return self._parcels

    @property
    def roster(self) -> AgentRoster:
        return self._roster

    # Roster management

    def add_agent(self, caller: str, new_agent: str) -> None:
        """Authorize a verification agent. Administrator only."""
        with self._lock:
            self._access.require_admin(caller)
            self._roster.add(new_agent)
            self._events.emit(agent_added(new_agent))
        logger.info(f"Agent added: {new_agent}")

    def revoke_agent(self, caller: str, agent: str) -> None:
        """Remove a verification agent. Administrator only."""
        with self._lock:
            self._access.require_admin(caller)
            self._roster.revoke(agent)
            self._events.emit(agent_revoked(agent))
        logger.info(f"Agent revoked: {agent}")

    # Parcel lifecycle

    def register_land(
        self, caller: str, certificate: int, size: int, tendered_amount: int
    ) -> None:
        """
        Register a new parcel owned by ``caller``.

        The tendered amount must equal the registration fee exactly and is
        forwarded in full to the administrator. If forwarding fails the
        new record is discarded and nothing is emitted.

        An already registered certificate is rejected before the fee is
        inspected.

        Raises:
            InvalidCertificateError: If certificate is not a positive integer
            ValidationError: If size is not a positive integer or caller is empty
            AlreadyExistsError: If the certificate is already registered
            IncorrectFeeError: If tendered_amount != registration fee
            SettlementError: If the fee could not be forwarded
        """
        if not isinstance(certificate, int) or isinstance(certificate, bool) or certificate <= 0:
            raise InvalidCertificateError(
                "Certificate must be a positive integer",
                certificate=certificate,
                operation="register",
            )
        if not isinstance(size, int) or isinstance(size, bool) or size <= 0:
            raise ValidationError("Parcel size must be a positive integer", field="size")
        if is_empty_address(caller):
            raise ValidationError("Owner address must not be empty", field="caller")

        with self._lock:
            if certificate in self._parcels:
                raise AlreadyExistsError(
                    f"Land with certificate {certificate} already registered",
                    certificate=certificate,
                )
            if tendered_amount != self._fee:
                raise IncorrectFeeError(
                    f"Registration requires exactly {self._fee}",
                    expected=self._fee,
                    tendered=tendered_amount,
                )

            self._parcels.create(certificate, size, caller)
            try:
                self._settlement.forward(caller, self._admin, tendered_amount)
            except Exception as e:
                self._parcels.discard(certificate)
                logger.warning(
                    f"Registration of certificate {certificate} rolled back: {e}"
                )
                if isinstance(e, SettlementError):
                    raise
                raise SettlementError(
                    f"Fee forwarding failed: {e}",
                    payer=caller,
                    payee=self._admin,
                    amount=tendered_amount,
                ) from e

            self._events.emit(fee_paid(caller, tendered_amount))
            self._events.emit(land_registered(certificate, caller))
        logger.info(f"Land registered: certificate={certificate} owner={caller}")

    def verify_ownership(self, caller: str, certificate: int) -> None:
        """
        Attest a parcel's ownership, advancing it to VERIFIED. Agents only.

        Raises:
            NotAgentError: If caller is not an authorized agent
            InvalidCertificateError: If the parcel does not exist
        """
        with self._lock:
            self._access.require_agent(caller)
            self._parcels.verify(certificate)
            self._events.emit(land_verified(certificate, caller))
        logger.info(f"Land verified: certificate={certificate} agent={caller}")

    def transfer_land(self, caller: str, certificate: int, new_owner: str) -> None:
        """
        Hand a verified parcel to ``new_owner``. Current owner only.

        Raises:
            NotOwnerError: If caller does not own the parcel
            NotVerifiedError: If the parcel is not VERIFIED
            ValidationError: If new_owner is empty
        """
        if is_empty_address(new_owner):
            raise ValidationError("New owner address must not be empty", field="new_owner")

        with self._lock:
            self._access.require_owner(caller, certificate)
            if self._parcels.status_of(certificate) != LandStatus.VERIFIED:
                raise NotVerifiedError(
                    f"Certificate {certificate} has not been verified",
                    certificate=certificate,
                )
            self._parcels.transfer(certificate, new_owner)
            self._events.emit(land_transferred(certificate, caller, new_owner))
        logger.info(
            f"Land transferred: certificate={certificate} from={caller} to={new_owner}"
        )

    # Reads

    def view_land(self, certificate: int) -> LandView:
        """
        Return (owner, size, status text) for a parcel.

        Raises:
            InvalidCertificateError: If the parcel does not exist
        """
        with self._lock:
            parcel = self._parcels.get(certificate)
            if parcel is None:
                raise InvalidCertificateError(
                    f"Certificate {certificate} is not registered",
                    certificate=certificate,
                    operation="view",
                )
            return LandView(owner=parcel.owner, size=parcel.size, status=parcel.status.label)

    def view_all_certificates(self) -> list[int]:
        with self._lock:
            return self._parcels.list_certificates()

    def get_agents(self) -> list[str]:
        with self._lock:
            return self._roster.list()

    def is_agent(self, address: str) -> bool:
        with self._lock:
            return self._roster.is_agent(address)

    # Peer queries

    def query_remote(self, target: Any, certificate: int) -> ExternalViewResult:
        """Query a peer registry. Never raises; runs outside the service lock."""
        return self._bridge.query_remote(target, certificate)

    def close(self) -> None:
        self._bridge.close()
