from __future__ import annotations

from typing import Any

from utility_billing.billing.manager import BillManager
from utility_billing.config.manager import ConfigManager
from utility_billing.core.config import ClientConfig
from utility_billing.core.exceptions import ConfigurationError
from utility_billing.gateway.base import Gateway


class BillingClient:
    """Top-level client for the Billing API.

    Create via the :meth:`connect` factory method::

        client = await BillingClient.connect(base_url="http://billing:3000")
        bill = await client.bills.calculate(100)
        print(bill.total_amount)

    Or use as an async context manager::

        async with await BillingClient.connect() as client:
            config = await client.configs.get_active()
    """

    def __init__(self, *, config: ClientConfig, gateway: Gateway) -> None:
        self._config = config
        self._gateway = gateway

        # Lazy-initialised manager instances
        self._configs: ConfigManager | None = None
        self._bills: BillManager | None = None

    # ------------------------------------------------------------------ #
    # Factory
    # ------------------------------------------------------------------ #

    @classmethod
    async def connect(cls, config: ClientConfig | None = None, **kwargs: Any) -> BillingClient:
        """Build an :class:`HttpGateway` from *config* and connect it.

        When *config* is omitted it is read from the environment
        (:meth:`ClientConfig.from_env`), then any ``ClientConfig`` field
        passed as a keyword argument overrides it.

        Returns:
            A connected :class:`BillingClient`.
        """
        base = config or ClientConfig.from_env()
        config_fields = set(ClientConfig.model_fields)
        overrides = {k: v for k, v in kwargs.items() if k in config_fields}
        if overrides:
            base = ClientConfig(**{**base.model_dump(), **overrides})

        gateway = cls._build_gateway(base)
        await gateway.connect()
        return cls(config=base, gateway=gateway)

    @staticmethod
    def _build_gateway(config: ClientConfig) -> Gateway:
        """Instantiate the HTTP gateway for *config*."""
        if not config.base_url.startswith(("http://", "https://")):
            raise ConfigurationError(
                f"Billing API URL must start with http:// or https://, got {config.base_url!r}"
            )
        from utility_billing.gateway.http import HttpGateway  # noqa: PLC0415

        return HttpGateway(config.base_url, timeout=config.timeout)

    # ------------------------------------------------------------------ #
    # Properties
    # ------------------------------------------------------------------ #

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def gateway(self) -> Gateway:
        """The underlying :class:`~utility_billing.gateway.base.Gateway`."""
        return self._gateway

    @property
    def configs(self) -> ConfigManager:
        """Manager for the billing configuration (``config.*`` methods)."""
        if self._configs is None:
            self._configs = ConfigManager(self._gateway)
        return self._configs

    @property
    def bills(self) -> BillManager:
        """Manager for bill calculation (``bill.*`` methods)."""
        if self._bills is None:
            self._bills = BillManager(self._gateway)
        return self._bills

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    async def close(self) -> None:
        """Close the gateway connection."""
        await self._gateway.close()

    async def __aenter__(self) -> BillingClient:
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.close()
