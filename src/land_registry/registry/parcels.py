"""
Parcel Store - certificate to parcel record mapping.

Owns the parcel records and the append-only list of known certificates.
The store performs no access checks and no locking; callers serialize
access to it.
"""

from land_registry.core.exceptions import AlreadyExistsError, InvalidCertificateError
from land_registry.core.models import ZERO_ADDRESS, LandStatus, Parcel


class ParcelStore:
    """In-memory parcel records keyed by certificate."""

    def __init__(self):
        self._parcels: dict[int, Parcel] = {}
        self._certificates: list[int] = []

    def __len__(self) -> int:
        return len(self._certificates)

    def __contains__(self, certificate: int) -> bool:
        return self.get(certificate) is not None

    def create(self, certificate: int, size: int, owner: str) -> Parcel:
        """
        Create a new PENDING parcel.

        Raises:
            AlreadyExistsError: If the certificate is already registered
        """
        if certificate in self:
            raise AlreadyExistsError(
                f"Land with certificate {certificate} already registered",
                certificate=certificate,
            )

        parcel = Parcel(certificate=certificate, size=size, owner=owner)
        self._parcels[certificate] = parcel
        self._certificates.append(certificate)
        return parcel

    def discard(self, certificate: int) -> None:
        """Undo the most recent ``create`` of ``certificate``."""
        if self._certificates and self._certificates[-1] == certificate:
            self._certificates.pop()
        self._parcels.pop(certificate, None)

    def verify(self, certificate: int) -> Parcel:
        """
        Mark a parcel VERIFIED. Re-verifying is a no-op.

        Raises:
            InvalidCertificateError: If the parcel does not exist
        """
        parcel = self.get(certificate)
        if parcel is None:
            raise InvalidCertificateError(
                f"Certificate {certificate} is not registered",
                certificate=certificate,
                operation="verify",
            )
        parcel.status = LandStatus.VERIFIED
        return parcel

    def transfer(self, certificate: int, new_owner: str) -> Parcel:
        """Overwrite the owner. Callers check status and ownership first."""
        parcel = self._parcels[certificate]
        parcel.owner = new_owner
        return parcel

    def get(self, certificate: int) -> Parcel | None:
        """Get a parcel by certificate, or None if it does not exist."""
        parcel = self._parcels.get(certificate)
        if parcel is None or not parcel.exists:
            return None
        return parcel

    def owner_of(self, certificate: int) -> str:
        """Return the current owner, or the zero address for a missing parcel."""
        parcel = self.get(certificate)
        return parcel.owner if parcel else ZERO_ADDRESS

    def status_of(self, certificate: int) -> LandStatus:
        parcel = self.get(certificate)
        return parcel.status if parcel else LandStatus.NONE

    def list_certificates(self) -> list[int]:
        """Return all certificates ever created, in insertion order."""
        return list(self._certificates)

    def parcels(self) -> list[Parcel]:
        """Return all parcel records in insertion order."""
        return [self._parcels[c] for c in self._certificates]

    def restore(self, parcel: Parcel) -> None:
        """Load an existing record, preserving its status. Used by snapshots."""
        if not parcel.exists:
            raise InvalidCertificateError(
                f"Certificate {parcel.certificate} has no registered status",
                certificate=parcel.certificate,
                operation="restore",
            )
        if parcel.certificate in self:
            raise AlreadyExistsError(
                f"Land with certificate {parcel.certificate} already registered",
                certificate=parcel.certificate,
            )
        self._parcels[parcel.certificate] = parcel
        self._certificates.append(parcel.certificate)
