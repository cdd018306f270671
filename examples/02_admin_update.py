# RUN: python examples/02_admin_update.py
"""Admin configuration — PIN gate, form validation, update and refetch.

Demonstrates: AdminPanel.unlock(), a rejected PIN, a locally rejected
form, a successful update followed by the refetch, and logout().
"""

import asyncio

from utility_billing import AdminPanel, AuthenticationError, MockGateway
from utility_billing.core.types import Configuration

ADMIN_PIN = "1234"

active = {
    "id": "cfg-1",
    "ratePerUnit": 0.5,
    "vatPercentage": 15,
    "fixedServiceCharge": 5,
    "isActive": True,
    "createdAt": "2026-10-01T09:30:00.000Z",
    "updatedAt": "2026-10-01T09:30:00.000Z",
}


class PinCheckingGateway(MockGateway):
    """MockGateway that rejects admin calls made with the wrong PIN."""

    async def call(self, method, params=None, *, admin_pin=None):
        if method.startswith("config.") and method != "config.get" and admin_pin != ADMIN_PIN:
            raise AuthenticationError("HTTP 401", status_code=401,
                                      details={"message": "Invalid admin PIN"})
        return await super().call(method, params, admin_pin=admin_pin)


def _update(params: dict) -> dict:
    active.update(params, id="cfg-2", updatedAt="2026-10-19T12:00:00.000Z")
    return active


async def main() -> None:
    # 1. Mock the config endpoints
    mock = PinCheckingGateway()
    mock.register("config.get", lambda _: active)
    mock.register("config.history", lambda _: [active])
    mock.register("config.update", _update)
    await mock.connect()

    panel = AdminPanel(mock)

    # 2. Wrong PIN
    ok = await panel.unlock("0000")
    print(f"Unlocked with 0000: {ok} ({panel.state.error})")

    # 3. Right PIN loads the active configuration
    ok = await panel.unlock(ADMIN_PIN)
    print(f"Unlocked with {ADMIN_PIN}: {ok}")
    print(f"Form    : {panel.state.form.model_dump()}")

    # 4. Local validation blocks the request
    await panel.submit("0.60", "120", "5")
    print(f"\nRejected: {panel.state.error}")

    # 5. A valid update is followed by a refetch
    config: Configuration | None = await panel.submit("0.60", "12.5", "4.75")
    print(f"Updated : {panel.state.success}")
    print(f"Active  : {config.model_dump(by_alias=True, include={'id', 'rate_per_unit', 'vat_percentage', 'fixed_service_charge'})}")

    # 6. Logout drops the PIN and the cached configuration
    panel.logout()
    print(f"\nAfter logout: authenticated={panel.is_authenticated}, pin={panel.state.admin_pin!r}")

    await mock.close()


if __name__ == "__main__":
    asyncio.run(main())
