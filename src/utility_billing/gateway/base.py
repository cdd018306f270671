from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class GatewayProtocol(Protocol):
    """Structural type for any Gateway implementation.

    Managers and flows accept this Protocol so they work with any backend
    (HttpGateway, MockGateway, ...) without importing concrete classes.
    """

    async def call(
        self,
        method: str,
        params: dict[str, Any] | None = None,
        *,
        admin_pin: str | None = None,
    ) -> Any: ...


class Gateway(ABC):
    """Abstract base for all Billing API gateways.

    A gateway translates method names (see
    :class:`~utility_billing.core.constants.GatewayMethod`) into requests
    against the Billing API and returns the decoded JSON body.  Typed
    wrappers live in the managers, not here.
    """

    # ------------------------------------------------------------------ #
    # Connection lifecycle
    # ------------------------------------------------------------------ #

    @abstractmethod
    async def connect(self) -> None: ...

    @abstractmethod
    async def close(self) -> None: ...

    # ------------------------------------------------------------------ #
    # Protocol primitive
    # ------------------------------------------------------------------ #

    @abstractmethod
    async def call(
        self,
        method: str,
        params: dict[str, Any] | None = None,
        *,
        admin_pin: str | None = None,
    ) -> Any:
        """Invoke *method* with *params*.

        Args:
            method: Gateway method name, e.g. ``"bill.calculate"``.
            params: JSON body (or query parameters for reads).
            admin_pin: Admin PIN for privileged methods.

        Returns:
            The decoded JSON response (a dict, or a list for history reads).
        """

    async def __aenter__(self) -> Gateway:
        await self.connect()
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.close()
