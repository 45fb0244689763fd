"""
Land Registry Core Module.

Provides foundational types, configuration and the exception hierarchy.
"""

__all__ = [
    "LandStatus",
    "Parcel",
    "LandView",
    "ExternalViewResult",
    "ZERO_ADDRESS",
    "REGISTRATION_FEE",
    "is_empty_address",
    "RegistryConfig",
    # Exceptions
    "LandRegistryError",
    "AccessDeniedError",
    "NotDeveloperError",
    "NotAgentError",
    "NotOwnerError",
    "RegistryError",
    "AlreadyAgentError",
    "AlreadyExistsError",
    "InvalidCertificateError",
    "NotVerifiedError",
    "IncorrectFeeError",
    "SettlementError",
    "RemoteQueryError",
    "ConfigurationError",
    "ValidationError",
]

from land_registry.core.config import RegistryConfig
from land_registry.core.exceptions import (
    AccessDeniedError,
    AlreadyAgentError,
    AlreadyExistsError,
    ConfigurationError,
    IncorrectFeeError,
    InvalidCertificateError,
    LandRegistryError,
    NotAgentError,
    NotDeveloperError,
    NotOwnerError,
    NotVerifiedError,
    RegistryError,
    RemoteQueryError,
    SettlementError,
    ValidationError,
)
from land_registry.core.models import (
    REGISTRATION_FEE,
    ZERO_ADDRESS,
    ExternalViewResult,
    LandStatus,
    LandView,
    Parcel,
    is_empty_address,
)
