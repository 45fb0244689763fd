"""
Core data models for the Land Registry.

Parcel records and the value types returned by registry reads.
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field

# Empty identity: owner of a certificate that was never registered.
ZERO_ADDRESS = "0x" + "0" * 40

# 0.01 of a unit with 18 decimals.
REGISTRATION_FEE = 10**16


def is_empty_address(address: str) -> bool:
    """Return True for the blank or zero identity."""
    return not address or address == ZERO_ADDRESS


class LandStatus(Enum):
    """Lifecycle states of a parcel record."""

    NONE = 0
    PENDING = 1
    VERIFIED = 2

    @property
    def label(self) -> str:
        """Return the published text form of the status."""
        match self:
            case LandStatus.PENDING:
                return "Pending"
            case LandStatus.VERIFIED:
                return "Verified"
            case _:
                return "None"


class Parcel(BaseModel):
    """A single land parcel record."""

    certificate: int = Field(gt=0, description="Registrant-chosen unique identifier")
    size: int = Field(gt=0, description="Parcel size, immutable after creation")
    owner: str
    status: LandStatus = LandStatus.PENDING

    @property
    def exists(self) -> bool:
        """Return True unless the record is in the NONE state."""
        return self.status != LandStatus.NONE


@dataclass(frozen=True)
class LandView:
    """Read-only view of a parcel as returned by ``view_land``."""

    owner: str
    size: int
    status: str

    def __iter__(self):
        return iter((self.owner, self.size, self.status))

    def __len__(self) -> int:
        return 3


@dataclass(frozen=True)
class ExternalViewResult:
    """Outcome of a query against a peer registry."""

    success: bool
    owner: str = ZERO_ADDRESS

    @classmethod
    def failed(cls) -> "ExternalViewResult":
        return cls(success=False, owner=ZERO_ADDRESS)
