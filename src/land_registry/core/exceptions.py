"""
Land Registry Exception Hierarchy.

Defines every failure kind surfaced by registry operations. Each concrete
class carries a ``code`` naming the failure as published to callers.
"""

from typing import Any


class LandRegistryError(Exception):
    """
    Base exception for all Land Registry errors.

    All custom exceptions inherit from this class, allowing
    generic catch blocks and consistent error handling.
    """

    code = "LandRegistryError"

    def __init__(self, message: str, *, details: dict[str, Any] | None = None):
        """
        Initialize a LandRegistryError.

        Args:
            message: Human-readable error message
            details: Optional structured data for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation with details."""
        base = self.message
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{base} ({details_str})"
        return base

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class AccessDeniedError(LandRegistryError):
    """
    Caller identity failed a role check.

    Raised before any state is touched, so a denied call never
    leaves a partial change behind.
    """

    code = "AccessDenied"

    def __init__(
        self,
        message: str,
        *,
        caller: str | None = None,
        role: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if caller:
            details["caller"] = caller
        if role:
            details["role"] = role

        super().__init__(message, details=details)
        self.caller = caller
        self.role = role


class NotDeveloperError(AccessDeniedError):
    """Raised when a non-administrator calls an administrator-only operation."""

    code = "NotDeveloper"

    def __init__(self, message: str = "Caller is not the administrator", *, caller: str | None = None):
        super().__init__(message, caller=caller, role="administrator")


class NotAgentError(AccessDeniedError):
    """
    Raised when an address is not an authorized agent.

    Covers both an agent-only check failing and an attempt to
    revoke an address that is not currently on the roster.
    """

    code = "NotAgent"

    def __init__(self, message: str = "Address is not an authorized agent", *, caller: str | None = None):
        super().__init__(message, caller=caller, role="agent")


class NotOwnerError(AccessDeniedError):
    """Raised when the caller is not the current owner of a parcel."""

    code = "NotOwner"

    def __init__(
        self,
        message: str = "Caller is not the parcel owner",
        *,
        caller: str | None = None,
        certificate: int | None = None,
    ):
        details = {}
        if certificate is not None:
            details["certificate"] = certificate
        super().__init__(message, caller=caller, role="owner", details=details)
        self.certificate = certificate


class RegistryError(LandRegistryError):
    """
    Errors in registry record operations.

    Raised when a parcel or roster operation conflicts with the
    current registry contents.
    """

    code = "RegistryError"

    def __init__(
        self,
        message: str,
        *,
        entity_type: str | None = None,
        entity_id: str | int | None = None,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize a RegistryError.

        Args:
            message: Human-readable error message
            entity_type: Type of entity involved ("parcel" or "agent")
            entity_id: Certificate or address involved
            operation: Operation being performed
            details: Optional structured data for debugging
        """
        details = details or {}
        if entity_type:
            details["entity_type"] = entity_type
        if entity_id is not None:
            details["entity_id"] = entity_id
        if operation:
            details["operation"] = operation

        super().__init__(message, details=details)
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.operation = operation


class AlreadyAgentError(RegistryError):
    """Raised when adding an address that is already an authorized agent."""

    code = "AlreadyAgent"

    def __init__(self, message: str = "Address is already an agent", *, agent: str | None = None):
        super().__init__(message, entity_type="agent", entity_id=agent, operation="add")


class AlreadyExistsError(RegistryError):
    """Raised when registering a certificate that is already in use."""

    code = "AlreadyExists"

    def __init__(self, message: str = "Land already registered", *, certificate: int | None = None):
        super().__init__(message, entity_type="parcel", entity_id=certificate, operation="register")
        self.certificate = certificate


class InvalidCertificateError(RegistryError):
    """Raised when an operation targets a certificate that does not exist."""

    code = "InvalidCertificate"

    def __init__(
        self,
        message: str = "Invalid certificate",
        *,
        certificate: int | None = None,
        operation: str | None = None,
    ):
        super().__init__(message, entity_type="parcel", entity_id=certificate, operation=operation)
        self.certificate = certificate


class NotVerifiedError(RegistryError):
    """Raised when transferring a parcel that has not been verified by an agent."""

    code = "NotVerified"

    def __init__(self, message: str = "Land is not verified", *, certificate: int | None = None):
        super().__init__(message, entity_type="parcel", entity_id=certificate, operation="transfer")
        self.certificate = certificate


class IncorrectFeeError(LandRegistryError):
    """Raised when the tendered amount differs from the registration fee."""

    code = "IncorrectFee"

    def __init__(
        self,
        message: str = "Incorrect registration fee",
        *,
        expected: int | None = None,
        tendered: int | None = None,
    ):
        super().__init__(message, details={"expected": expected, "tendered": tendered})
        self.expected = expected
        self.tendered = tendered


class SettlementError(LandRegistryError):
    """
    Raised when the fee could not be forwarded to the administrator.

    A registration whose fee forwarding fails is rolled back in full.
    """

    code = "SettlementFailed"

    def __init__(
        self,
        message: str = "Fee forwarding failed",
        *,
        payer: str | None = None,
        payee: str | None = None,
        amount: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if payer:
            details["payer"] = payer
        if payee:
            details["payee"] = payee
        if amount is not None:
            details["amount"] = amount

        super().__init__(message, details=details)
        self.payer = payer
        self.payee = payee
        self.amount = amount


class RemoteQueryError(LandRegistryError):
    """
    A query against a peer registry failed.

    Only raised inside the query bridge, which converts it into a
    failed result before it can reach the caller.
    """

    code = "RemoteQueryFailed"

    def __init__(self, message: str, *, target: str | None = None, reason: str | None = None):
        details = {}
        if target:
            details["target"] = target
        if reason:
            details["reason"] = reason
        super().__init__(message, details=details)
        self.target = target
        self.reason = reason


class ConfigurationError(LandRegistryError):
    """
    Errors in configuration loading or validation.

    Raised when:
    - Configuration files are missing or malformed
    - Environment variables hold invalid values
    - Snapshot files cannot be read back
    """

    code = "ConfigurationError"

    def __init__(
        self,
        message: str,
        *,
        config_file: str | None = None,
        env_var: str | None = None,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize a ConfigurationError.

        Args:
            message: Human-readable error message
            config_file: Path to configuration file if applicable
            env_var: Environment variable name if applicable
            config_key: Configuration key if applicable
            details: Optional structured data for debugging
        """
        details = details or {}
        if config_file:
            details["config_file"] = config_file
        if env_var:
            details["env_var"] = env_var
        if config_key:
            details["config_key"] = config_key

        super().__init__(message, details=details)
        self.config_file = config_file
        self.env_var = env_var
        self.config_key = config_key


class ValidationError(LandRegistryError):
    """Raised when operation input is malformed, such as a non-positive parcel size."""

    code = "ValidationError"

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        validation_errors: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if field:
            details["field"] = field
        if validation_errors:
            details["validation_errors"] = validation_errors

        super().__init__(message, details=details)
        self.field = field
        self.validation_errors = validation_errors or []


def format_exception(error: Exception) -> str:
    """
    Format an exception for user-friendly display.

    Args:
        error: The exception to format

    Returns:
        Formatted error message string
    """
    if isinstance(error, LandRegistryError):
        return f"{error.code}: {error}"
    return f"{error.__class__.__name__}: {error}"
