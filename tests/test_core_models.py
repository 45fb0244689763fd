"""Tests for core models and the exception hierarchy."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from land_registry.core.exceptions import (
    AccessDeniedError,
    AlreadyAgentError,
    AlreadyExistsError,
    IncorrectFeeError,
    InvalidCertificateError,
    LandRegistryError,
    NotAgentError,
    NotDeveloperError,
    NotOwnerError,
    NotVerifiedError,
    RegistryError,
    format_exception,
)
from land_registry.core.models import ZERO_ADDRESS, ExternalViewResult, LandStatus, LandView, Parcel


class TestLandStatus:
    """Tests for LandStatus enum."""

    def test_labels(self) -> None:
        assert LandStatus.NONE.label == "None"
        assert LandStatus.PENDING.label == "Pending"
        assert LandStatus.VERIFIED.label == "Verified"


class TestParcel:
    """Tests for Parcel model."""

    def test_defaults_to_pending(self) -> None:
        parcel = Parcel(certificate=1, size=10, owner="0xa")
        assert parcel.status == LandStatus.PENDING
        assert parcel.exists

    def test_none_status_does_not_exist(self) -> None:
        parcel = Parcel(certificate=1, size=10, owner="0xa", status=LandStatus.NONE)
        assert not parcel.exists

    @pytest.mark.parametrize("field, value", [("certificate", 0), ("size", 0), ("size", -3)])
    def test_rejects_non_positive(self, field: str, value: int) -> None:
        data = {"certificate": 1, "size": 10, "owner": "0xa", field: value}
        with pytest.raises(PydanticValidationError):
            Parcel(**data)


class TestValueTypes:
    """Tests for LandView and ExternalViewResult."""

    def test_land_view_unpacks(self) -> None:
        owner, size, status = LandView("0xa", 3, "Pending")
        assert (owner, size, status) == ("0xa", 3, "Pending")

    def test_failed_result(self) -> None:
        result = ExternalViewResult.failed()
        assert result.success is False
        assert result.owner == ZERO_ADDRESS

    def test_zero_address_shape(self) -> None:
        assert ZERO_ADDRESS == "0x" + "0" * 40


class TestExceptions:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize(
        "error, code",
        [
            (NotDeveloperError(), "NotDeveloper"),
            (NotAgentError(), "NotAgent"),
            (AlreadyAgentError(), "AlreadyAgent"),
            (NotOwnerError(), "NotOwner"),
            (NotVerifiedError(), "NotVerified"),
            (AlreadyExistsError(), "AlreadyExists"),
            (InvalidCertificateError(), "InvalidCertificate"),
            (IncorrectFeeError(), "IncorrectFee"),
        ],
    )
    def test_codes(self, error: LandRegistryError, code: str) -> None:
        assert error.code == code
        assert error.to_dict()["code"] == code
        assert isinstance(error, LandRegistryError)

    def test_access_errors_share_base(self) -> None:
        for cls in (NotDeveloperError, NotAgentError, NotOwnerError):
            assert issubclass(cls, AccessDeniedError)
        for cls in (AlreadyAgentError, AlreadyExistsError, InvalidCertificateError, NotVerifiedError):
            assert issubclass(cls, RegistryError)

    def test_details_rendered(self) -> None:
        error = AlreadyExistsError(certificate=42)
        assert "entity_id=42" in str(error)
        assert error.details["operation"] == "register"

    def test_fee_details(self) -> None:
        error = IncorrectFeeError(expected=10, tendered=9)
        assert error.to_dict()["details"] == {"expected": 10, "tendered": 9}

    def test_format_exception(self) -> None:
        assert format_exception(NotOwnerError(caller="0xa")).startswith("NotOwner: ")
        assert format_exception(ValueError("x")) == "ValueError: x"
