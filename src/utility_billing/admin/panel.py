from __future__ import annotations

from utility_billing.admin.editor import ConfigEditor
from utility_billing.admin.gate import AdminGate
from utility_billing.admin.state import AdminState
from utility_billing.core.types import Configuration
from utility_billing.gateway.base import GatewayProtocol


class AdminPanel:
    """The admin page: a PIN gate in front of the configuration editor.

    Both halves share one :class:`AdminState`, so logging out through the
    gate also wipes everything the editor cached.

    Usage::

        panel = AdminPanel(client.gateway)
        if await panel.unlock("1234"):
            await panel.submit("0.60", "15", "5.00")
        panel.logout()
    """

    def __init__(self, gateway: GatewayProtocol, state: AdminState | None = None) -> None:
        self.state = state if state is not None else AdminState()
        self.gate = AdminGate(gateway, self.state)
        self.editor = ConfigEditor(gateway, self.state)

    @property
    def is_authenticated(self) -> bool:
        return self.state.is_authenticated

    async def unlock(self, pin: str | None = None) -> bool:
        """Verify the PIN and, once through, load the active configuration."""
        if not await self.gate.verify(pin):
            return False
        await self.editor.refresh()
        return True

    async def refresh(self) -> Configuration | None:
        return await self.editor.refresh()

    async def submit(
        self,
        rate_per_unit: str | float | None = None,
        vat_percentage: str | float | None = None,
        fixed_service_charge: str | float | None = None,
    ) -> Configuration | None:
        return await self.editor.submit(rate_per_unit, vat_percentage, fixed_service_charge)

    def logout(self) -> None:
        self.gate.logout()
