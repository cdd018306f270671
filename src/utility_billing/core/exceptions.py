from __future__ import annotations

from typing import Any


class UtilityBillingError(Exception):
    """Base exception for all utility billing client errors.

    Attributes:
        code: Optional machine-readable error code (e.g. ``"403"``).
        details: Arbitrary key/value context about the error.  For API
            errors this holds the decoded response body.
        status_code: HTTP status code when the error originates from a
            Billing API response (``None`` when not applicable).
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
        *,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}
        self.status_code = status_code

    @property
    def server_message(self) -> str | None:
        """The ``message`` field of the API error body, if one was returned."""
        message = self.details.get("message")
        if isinstance(message, list):
            # Validation pipes on the API side may return a list of messages.
            message = "; ".join(str(m) for m in message)
        if isinstance(message, str) and message:
            return message
        return None


class ConfigurationError(UtilityBillingError): ...


class ExportError(UtilityBillingError): ...


class OperationInProgressError(UtilityBillingError):
    """A flow action was triggered while the previous one is still in flight."""


# ---------------------------------------------------------------------------
# Local (pre-flight) validation
# ---------------------------------------------------------------------------


class ValidationError(UtilityBillingError):
    """Input rejected locally, before any network call."""


class BillValidationError(ValidationError): ...


class ConfigValidationError(ValidationError):
    """A configuration form field violated its constraint.

    ``field`` names the offending form field (``rate_per_unit``,
    ``vat_percentage`` or ``fixed_service_charge``).
    """

    def __init__(self, message: str, field: str) -> None:
        super().__init__(message, code="invalid_field", details={"field": field})
        self.field = field


# ---------------------------------------------------------------------------
# Billing API errors
# ---------------------------------------------------------------------------


class GatewayError(UtilityBillingError): ...


class APIError(GatewayError):
    """The Billing API answered with an error status or an unreadable body."""


class AuthenticationError(GatewayError):
    """The admin PIN was missing or rejected (HTTP 401/403)."""


class APIConnectionError(GatewayError):
    """A transport-level connection failure (DNS, TCP, TLS)."""


class APITimeoutError(GatewayError):
    """The Billing API did not respond within the configured timeout."""
