"""Client configuration loaded from arguments or environment variables."""

import os
import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .credentials import IntegrationKey
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.paynow.co.zw/interface/"
DEFAULT_TIMEOUT = 30.0
ENV_PREFIX = "PAYNOW_INTEGRATION_"


class ClientConfig(BaseModel):
    """Immutable settings shared by every call a client makes."""
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    integration_id: int = Field(..., description="Paynow integration (merchant) ID")
    integration_key: IntegrationKey = Field(..., description="Paynow integration key")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Paynow interface base URL")
    timeout: float = Field(default=DEFAULT_TIMEOUT, description="HTTP timeout in seconds")

    @field_validator("integration_key", mode="before")
    @classmethod
    def _coerce_key(cls, value: Any) -> IntegrationKey:
        return value if isinstance(value, IntegrationKey) else IntegrationKey(value)

    @field_validator("base_url")
    @classmethod
    def _ensure_trailing_slash(cls, value: str) -> str:
        # endpoints are joined relative to the base, so it must name a directory
        return value if value.endswith("/") else value + "/"

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX) -> "ClientConfig":
        """Build a configuration from environment variables.

        Reads ``<prefix>ID`` and ``<prefix>KEY``, plus the optional
        ``PAYNOW_BASE_URL`` and ``PAYNOW_TIMEOUT``.

        Args:
            prefix: Environment variable prefix for the integration values.

        Returns:
            The loaded ClientConfig.

        Raises:
            ConfigurationError: If a required variable is missing or invalid.
        """
        raw_id = os.getenv(f"{prefix}ID")
        raw_key = os.getenv(f"{prefix}KEY")
        if not raw_id or not raw_key:
            logger.error(f"{prefix}ID and {prefix}KEY environment variables must be set")
            raise ConfigurationError(
                f"{prefix}ID and {prefix}KEY must be provided as environment variables"
            )
        try:
            integration_id = int(raw_id)
        except ValueError as e:
            raise ConfigurationError(f"{prefix}ID must be an integer") from e

        timeout: Optional[str] = os.getenv("PAYNOW_TIMEOUT")
        try:
            timeout_value = float(timeout) if timeout else DEFAULT_TIMEOUT
        except ValueError as e:
            raise ConfigurationError("PAYNOW_TIMEOUT must be a number") from e

        return cls(
            integration_id=integration_id,
            integration_key=IntegrationKey(raw_key),
            base_url=os.getenv("PAYNOW_BASE_URL") or DEFAULT_BASE_URL,
            timeout=timeout_value,
        )
