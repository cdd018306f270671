from __future__ import annotations

import os
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from utility_billing.core.constants import DEFAULT_BASE_URL
from utility_billing.core.exceptions import ConfigurationError


class ClientConfig(BaseModel):
    base_url: str = DEFAULT_BASE_URL
    """Base URL of the Billing API, without the ``/api`` prefix."""
    timeout: int = Field(default=30, ge=1, le=300)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_json: bool = False

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Create a :class:`ClientConfig` from environment variables.

        Reads the following env vars (all optional):

        * ``UTILITY_BILLING_API_URL`` or ``VITE_API_URL`` → ``base_url``
        * ``UTILITY_BILLING_TIMEOUT`` → ``timeout`` (integer seconds, 1–300)
        * ``UTILITY_BILLING_LOG_LEVEL`` → ``log_level``
        * ``UTILITY_BILLING_LOG_JSON`` → ``log_json`` (``1``/``true``/``yes``)

        Any variable that is not set or is empty is left at its default value.
        """
        kwargs: dict[str, Any] = {}

        base_url = os.environ.get("UTILITY_BILLING_API_URL") or os.environ.get(
            "VITE_API_URL"
        )
        if base_url:
            kwargs["base_url"] = base_url

        timeout_str = os.environ.get("UTILITY_BILLING_TIMEOUT")
        if timeout_str:
            try:
                kwargs["timeout"] = int(timeout_str)
            except ValueError as exc:
                raise ConfigurationError(
                    f"UTILITY_BILLING_TIMEOUT must be an integer, got {timeout_str!r}"
                ) from exc

        log_level = os.environ.get("UTILITY_BILLING_LOG_LEVEL")
        if log_level:
            kwargs["log_level"] = log_level.upper()

        log_json = os.environ.get("UTILITY_BILLING_LOG_JSON")
        if log_json:
            kwargs["log_json"] = log_json.strip().lower() in ("1", "true", "yes")

        return cls(**kwargs)
