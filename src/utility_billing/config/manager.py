"""ConfigManager — typed wrapper around the gateway ``config.*`` namespace.

The public read (``config.get``) needs no credentials.  The update and
history methods are PIN-gated: the PIN travels as the ``x-admin-pin``
header and is checked by the Billing API, never locally.
"""

from __future__ import annotations

from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError

from utility_billing.core.constants import GatewayMethod
from utility_billing.core.exceptions import APIError
from utility_billing.core.types import Configuration, UpdateConfigRequest
from utility_billing.gateway.base import GatewayProtocol

logger = structlog.get_logger(__name__)


def _parse_configuration(data: Any) -> Configuration:
    try:
        return Configuration.model_validate(data)
    except PydanticValidationError as exc:
        raise APIError("Malformed configuration response from Billing API") from exc


class ConfigManager:
    """Read and update the billing configuration through the gateway.

    Usage::

        async with await BillingClient.connect() as client:
            active = await client.configs.get_active()
            await client.configs.update(
                UpdateConfigRequest(rate_per_unit=0.6, vat_percentage=15,
                                    fixed_service_charge=5),
                admin_pin="1234",
            )
    """

    def __init__(self, gateway: GatewayProtocol) -> None:
        self._gateway = gateway

    async def get_active(self) -> Configuration:
        """Fetch the active configuration.

        Gateway method: ``config.get``
        """
        data = await self._gateway.call(GatewayMethod.CONFIG_GET)
        config = _parse_configuration(data)
        logger.debug("config_fetched", config_id=config.id)
        return config

    async def update(self, request: UpdateConfigRequest, admin_pin: str) -> Configuration:
        """Replace the active configuration.

        Gateway method: ``config.update``.  The previous record is
        deactivated server-side and kept in the history.
        """
        data = await self._gateway.call(
            GatewayMethod.CONFIG_UPDATE,
            request.model_dump(by_alias=True),
            admin_pin=admin_pin,
        )
        config = _parse_configuration(data)
        logger.info("config_updated", config_id=config.id)
        return config

    async def history(self, admin_pin: str) -> list[Configuration]:
        """Fetch past configurations in the order the API returns them.

        Gateway method: ``config.history``
        """
        data = await self._gateway.call(GatewayMethod.CONFIG_HISTORY, admin_pin=admin_pin)
        if not isinstance(data, list):
            raise APIError("Configuration history response is not a list")
        return [_parse_configuration(item) for item in data]
