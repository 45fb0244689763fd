"""
Fee settlement - forwarding registration fees to the administrator.

The registry only needs ``forward``; how value actually moves is up to
the collaborator. ``InMemoryLedger`` keeps credited balances locally.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Protocol, runtime_checkable

from land_registry.core.exceptions import SettlementError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeeTransfer:
    """Record of one forwarded fee."""

    payer: str
    payee: str
    amount: int
    settled_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )


@runtime_checkable
class FeeSettlement(Protocol):
    """Collaborator that moves a tendered fee to its recipient."""

    def forward(self, payer: str, payee: str, amount: int) -> FeeTransfer: ...


class InMemoryLedger:
    """Settlement backend that credits balances in memory."""

    def __init__(self, balances: dict[str, int] | None = None):
        self._lock = threading.Lock()
        self._balances: dict[str, int] = dict(balances or {})
        self._transfers: list[FeeTransfer] = []

    def forward(self, payer: str, payee: str, amount: int) -> FeeTransfer:
        """
        Credit ``amount`` to ``payee``.

        Raises:
            SettlementError: If the amount is not positive
        """
        if amount <= 0:
            raise SettlementError(
                "Fee amount must be positive", payer=payer, payee=payee, amount=amount
            )

        transfer = FeeTransfer(payer=payer, payee=payee, amount=amount)
        with self._lock:
            self._balances[payee] = self._balances.get(payee, 0) + amount
            self._transfers.append(transfer)

        logger.debug(f"Forwarded {amount} from {payer} to {payee}")
        return transfer

    def balance_of(self, address: str) -> int:
        with self._lock:
            return self._balances.get(address, 0)

    @property
    def balances(self) -> dict[str, int]:
        with self._lock:
            return dict(self._balances)

    @property
    def transfers(self) -> list[FeeTransfer]:
        with self._lock:
            return list(self._transfers)
