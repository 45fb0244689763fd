"""
Registry configuration.

Values are read once, optionally from a YAML file, then overridden by
LR_* environment variables. The resulting config is injected into the
service at construction and never mutated afterwards.

Environment variables:
- LR_CONFIG_FILE: YAML file to load before applying overrides
- LR_ADMIN: Administrator address
- LR_REGISTRATION_FEE: Registration fee in the smallest currency unit
- LR_STATE_DIR: Directory for snapshots and the audit log
- LR_QUERY_TIMEOUT: Seconds to wait on a peer registry query
- LR_AUDIT_LOG: Write the audit log to disk (true|false)
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from land_registry.core.exceptions import ConfigurationError
from land_registry.core.models import REGISTRATION_FEE

_ENV_OVERRIDES = {
    "LR_ADMIN": "admin",
    "LR_REGISTRATION_FEE": "registration_fee",
    "LR_STATE_DIR": "state_dir",
    "LR_QUERY_TIMEOUT": "query_timeout_seconds",
    "LR_AUDIT_LOG": "audit_log",
}


class RegistryConfig(BaseModel):
    """Configuration for a registry instance."""

    admin: str = ""
    registration_fee: int = Field(default=REGISTRATION_FEE, gt=0)
    state_dir: Path = Path("var/land_registry")
    query_timeout_seconds: float = Field(default=5.0, gt=0)
    audit_log: bool = True

    model_config = {"frozen": True}

    @property
    def snapshot_path(self) -> Path:
        return self.state_dir / "registry.json"

    @property
    def audit_path(self) -> Path:
        return self.state_dir / "events.jsonl"

    @property
    def lock_path(self) -> Path:
        return self.state_dir / "registry.lock"

    @classmethod
    def load(cls, config_file: Path | None = None, **overrides: Any) -> "RegistryConfig":
        """
        Load configuration from file and environment.

        Args:
            config_file: Optional YAML file; defaults to $LR_CONFIG_FILE
            **overrides: Explicit values that win over file and environment

        Raises:
            ConfigurationError: If the file or any value is invalid
        """
        values: dict[str, Any] = {}

        path = config_file or os.getenv("LR_CONFIG_FILE")
        if path:
            values.update(_read_yaml(Path(path)))

        for env_var, key in _ENV_OVERRIDES.items():
            raw = os.getenv(env_var)
            if raw:
                values[key] = raw

        values.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return cls(**values)
        except PydanticValidationError as e:
            raise ConfigurationError(
                "Invalid registry configuration",
                config_file=str(path) if path else None,
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e


def _read_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML mapping from disk."""
    if not path.exists():
        raise ConfigurationError("Configuration file not found", config_file=str(path))

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Malformed configuration file: {e}", config_file=str(path)
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            "Configuration file must contain a mapping", config_file=str(path)
        )
    return data
