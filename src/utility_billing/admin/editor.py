from __future__ import annotations

import structlog

from utility_billing.admin.state import AdminState
from utility_billing.admin.validation import validate_config_form
from utility_billing.config.manager import ConfigManager
from utility_billing.core.exceptions import (
    AuthenticationError,
    OperationInProgressError,
    UtilityBillingError,
    ValidationError,
)
from utility_billing.core.types import Configuration
from utility_billing.gateway.base import GatewayProtocol

logger = structlog.get_logger(__name__)

LOAD_FAILED_MESSAGE = "Failed to load current configuration"
UPDATE_FAILED_MESSAGE = "Failed to update configuration"
UPDATE_SUCCESS_MESSAGE = "Configuration updated successfully!"


class ConfigEditor:
    """Show and edit the active billing configuration.

    The editor never modifies ``state.current_config`` except from a
    successful fetch, so a rejected update leaves the displayed
    configuration exactly as it was.
    """

    def __init__(self, gateway: GatewayProtocol, state: AdminState | None = None) -> None:
        self._configs = ConfigManager(gateway)
        self.state = state if state is not None else AdminState()

    @property
    def busy(self) -> bool:
        return self.state.loading or self.state.config_loading

    async def refresh(self) -> Configuration | None:
        """Fetch the active configuration and repopulate the form from it."""
        self.state.config_loading = True
        try:
            config = await self._configs.get_active()
        except UtilityBillingError as exc:
            logger.error("config_fetch_failed", error=str(exc))
            self.state.error = LOAD_FAILED_MESSAGE
            return None
        finally:
            self.state.config_loading = False

        self.state.current_config = config
        self.state.form.fill_from(config)
        return config

    async def submit(
        self,
        rate_per_unit: str | float | None = None,
        vat_percentage: str | float | None = None,
        fixed_service_charge: str | float | None = None,
    ) -> Configuration | None:
        """Validate the form and push it to the Billing API.

        Arguments left as ``None`` are taken from ``state.form``.

        Returns:
            The refreshed active configuration on success, else ``None``.

        Raises:
            AuthenticationError: If the admin state is not authenticated.
            OperationInProgressError: If an update is already in flight.
        """
        if not self.state.is_authenticated:
            raise AuthenticationError("Admin PIN has not been verified")
        if self.state.loading:
            raise OperationInProgressError("A configuration update is already in progress")

        form = self.state.form
        if rate_per_unit is not None:
            form.rate_per_unit = str(rate_per_unit)
        if vat_percentage is not None:
            form.vat_percentage = str(vat_percentage)
        if fixed_service_charge is not None:
            form.fixed_service_charge = str(fixed_service_charge)

        self.state.error = ""
        self.state.success = ""

        try:
            request = validate_config_form(
                form.rate_per_unit, form.vat_percentage, form.fixed_service_charge
            )
        except ValidationError as exc:
            self.state.error = str(exc)
            return None

        self.state.loading = True
        try:
            try:
                await self._configs.update(request, self.state.admin_pin)
            except UtilityBillingError as exc:
                logger.warning(
                    "config_update_failed", error=str(exc), status_code=exc.status_code
                )
                self.state.error = exc.server_message or UPDATE_FAILED_MESSAGE
                return None

            self.state.success = UPDATE_SUCCESS_MESSAGE
            form.clear()
            return await self.refresh()
        finally:
            self.state.loading = False
