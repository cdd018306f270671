from __future__ import annotations

from enum import StrEnum

DEFAULT_BASE_URL = "http://localhost:3000"
ADMIN_PIN_HEADER = "x-admin-pin"


class AuthState(StrEnum):
    UNAUTHENTICATED = "unauthenticated"
    VERIFYING = "verifying"
    AUTHENTICATED = "authenticated"


class GatewayMethod(StrEnum):
    CONFIG_GET = "config.get"
    CONFIG_UPDATE = "config.update"
    CONFIG_HISTORY = "config.history"
    BILL_CALCULATE = "bill.calculate"
