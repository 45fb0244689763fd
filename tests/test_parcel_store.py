"""Tests for parcel store record operations."""

import pytest

from land_registry.core.exceptions import AlreadyExistsError, InvalidCertificateError
from land_registry.core.models import ZERO_ADDRESS, LandStatus, Parcel
from land_registry.registry.parcels import ParcelStore

from conftest import ALICE, BOB


class TestParcelStoreCreate:
    """Tests for ParcelStore.create."""

    def test_create_sets_pending(self) -> None:
        """New parcels start PENDING and owned by the registrant."""
        store = ParcelStore()
        parcel = store.create(42, 100, ALICE)

        assert parcel.status == LandStatus.PENDING
        assert parcel.owner == ALICE
        assert parcel.size == 100
        assert store.get(42) is parcel

    def test_create_duplicate_fails(self) -> None:
        """A certificate cannot be created twice."""
        store = ParcelStore()
        store.create(42, 100, ALICE)

        with pytest.raises(AlreadyExistsError, match="already registered"):
            store.create(42, 5, BOB)

        assert store.get(42).owner == ALICE
        assert store.list_certificates() == [42]

    def test_list_certificates_insertion_order(self) -> None:
        """Certificates enumerate in creation order regardless of status."""
        store = ParcelStore()
        for cert in (7, 3, 99):
            store.create(cert, 10, ALICE)
        store.verify(3)

        assert store.list_certificates() == [7, 3, 99]

    def test_list_certificates_is_a_copy(self) -> None:
        """Mutating the returned list does not touch the store."""
        store = ParcelStore()
        store.create(1, 10, ALICE)
        store.list_certificates().append(2)

        assert store.list_certificates() == [1]

    def test_discard_undoes_create(self) -> None:
        """discard removes the record and its enumeration entry."""
        store = ParcelStore()
        store.create(1, 10, ALICE)
        store.create(2, 10, ALICE)
        store.discard(2)

        assert store.get(2) is None
        assert store.list_certificates() == [1]


class TestParcelStoreVerify:
    """Tests for ParcelStore.verify."""

    def test_verify_missing_fails(self) -> None:
        """Verifying an unknown certificate raises InvalidCertificateError."""
        store = ParcelStore()
        with pytest.raises(InvalidCertificateError):
            store.verify(42)

    def test_verify_is_idempotent(self) -> None:
        """Re-verifying a verified parcel succeeds and changes nothing."""
        store = ParcelStore()
        store.create(42, 100, ALICE)
        store.verify(42)
        parcel = store.verify(42)

        assert parcel.status == LandStatus.VERIFIED


class TestParcelStoreReads:
    """Tests for owner lookups and transfer."""

    def test_owner_of_missing_is_zero_address(self) -> None:
        store = ParcelStore()
        assert store.owner_of(42) == ZERO_ADDRESS
        assert store.status_of(42) == LandStatus.NONE

    def test_transfer_overwrites_owner_only(self) -> None:
        """transfer changes owner and nothing else."""
        store = ParcelStore()
        store.create(42, 100, ALICE)
        store.verify(42)
        parcel = store.transfer(42, BOB)

        assert parcel.owner == BOB
        assert parcel.size == 100
        assert parcel.status == LandStatus.VERIFIED


class TestParcelStoreRestore:
    """Loading saved records."""

    def test_restore_keeps_status(self) -> None:
        store = ParcelStore()
        store.restore(Parcel(certificate=9, size=3, owner=BOB, status=LandStatus.VERIFIED))
        assert store.status_of(9) == LandStatus.VERIFIED
        assert store.list_certificates()[-1] == 9

    def test_restore_duplicate_rejected(self) -> None:
        store = ParcelStore()
        store.restore(Parcel(certificate=9, size=3, owner=BOB))
        with pytest.raises(AlreadyExistsError):
            store.restore(Parcel(certificate=9, size=4, owner=ALICE))

    def test_restore_none_status_rejected(self) -> None:
        store = ParcelStore()
        with pytest.raises(InvalidCertificateError):
            store.restore(Parcel(certificate=9, size=3, owner=BOB, status=LandStatus.NONE))
        assert 9 not in store
