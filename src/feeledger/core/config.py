"""
Configuration management for feeledger.

Handles loading deployment parameters from environment variables.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation, localcontext
from typing import Any

from feeledger.core.exceptions import ConfigurationError
from feeledger.core.types import TOKEN_DECIMALS

STORAGE_BACKENDS = ("memory", "redis")


def _get_env_var(name: str, default: str | None = None, required: bool = False) -> str | None:
    """Get environment variable with optional default."""
    value = os.environ.get(name, default)
    if required and not value:
        raise ConfigurationError(f"Required environment variable {name} is not set")
    return value


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigurationError(
            f"Environment variable {name} must be an integer", details={name: raw}
        ) from None


def _parse_token_amount(name: str, raw: str) -> int:
    """
    Convert a decimal amount of whole tokens ("500", "0.5", "1e3") to base units.

    Raises:
        ConfigurationError: If the value is not a finite number, is negative,
            or has precision below one base unit
    """
    try:
        amount = Decimal(raw.strip())
    except InvalidOperation:
        raise ConfigurationError(
            f"Environment variable {name} must be a decimal number", details={name: raw}
        ) from None
    if not amount.is_finite() or amount < 0:
        raise ConfigurationError(
            f"Environment variable {name} must be a non-negative number", details={name: raw}
        )

    # uint256 needs 78 digits; the default context keeps 28
    with localcontext() as ctx:
        ctx.prec = 80
        base_units = amount.scaleb(TOKEN_DECIMALS)
    if base_units != base_units.to_integral_value():
        raise ConfigurationError(
            f"Environment variable {name} has more than {TOKEN_DECIMALS} decimal places",
            details={name: raw},
        )
    return int(base_units)


@dataclass(frozen=True)
class Config:
    """Deployment and runtime configuration."""

    fee: int
    fee_beneficiary: str
    fee_threshold: int
    storage_backend: str = "memory"
    redis_url: str | None = None
    log_level: str = "INFO"
    env: str = "development"

    def __post_init__(self) -> None:
        if not self.fee_beneficiary:
            raise ConfigurationError("fee_beneficiary is required")
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ConfigurationError(
                f"Unknown storage backend: '{self.storage_backend}'",
                details={"available": list(STORAGE_BACKENDS)},
            )
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ConfigurationError(
                f"Unknown log level: '{self.log_level}'", details={"log_level": self.log_level}
            )

    @classmethod
    def from_env(cls, **overrides: Any) -> Config:
        """
        Load configuration from environment variables.

        FEELEDGER_FEE_THRESHOLD is given in tokens and may be fractional
        ("0.5"); it is scaled to base units (18 decimals).
        """
        if "fee" in overrides:
            fee = overrides["fee"]
        else:
            fee = _parse_int("FEELEDGER_FEE", _get_env_var("FEELEDGER_FEE", required=True))  # type: ignore

        fee_beneficiary = overrides.get("fee_beneficiary") or _get_env_var(
            "FEELEDGER_FEE_BENEFICIARY", required=True
        )

        if "fee_threshold" in overrides:
            fee_threshold = overrides["fee_threshold"]
        else:
            fee_threshold = _parse_token_amount(
                "FEELEDGER_FEE_THRESHOLD",
                _get_env_var("FEELEDGER_FEE_THRESHOLD", required=True),  # type: ignore
            )

        storage_backend = overrides.get("storage_backend") or _get_env_var(
            "FEELEDGER_STORAGE_BACKEND", default="memory"
        )
        redis_url = overrides.get("redis_url") or _get_env_var("FEELEDGER_REDIS_URL")
        log_level = overrides.get("log_level") or _get_env_var(
            "FEELEDGER_LOG_LEVEL", default="INFO"
        )
        env = overrides.get("env") or _get_env_var("FEELEDGER_ENV", default="development")

        return cls(
            fee=fee,
            fee_beneficiary=fee_beneficiary,  # type: ignore
            fee_threshold=fee_threshold,
            storage_backend=storage_backend,  # type: ignore
            redis_url=redis_url,
            log_level=log_level,  # type: ignore
            env=env,  # type: ignore
        )

    def with_updates(self, **updates: Any) -> Config:
        """Create a new Config with updated values."""
        return replace(self, **updates)
