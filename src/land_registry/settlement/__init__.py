"""
Land Registry Settlement Module.

Collaborators that forward registration fees to the administrator.
"""

__all__ = [
    "FeeSettlement",
    "FeeTransfer",
    "InMemoryLedger",
]

from land_registry.settlement.ledger import FeeSettlement, FeeTransfer, InMemoryLedger
