from __future__ import annotations

from pydantic import BaseModel, Field

from utility_billing.core.constants import AuthState
from utility_billing.core.types import Configuration


class ConfigForm(BaseModel):
    """Free-text contents of the configuration form."""

    rate_per_unit: str = ""
    vat_percentage: str = ""
    fixed_service_charge: str = ""

    def fill_from(self, config: Configuration) -> None:
        self.rate_per_unit = _format_field(config.rate_per_unit)
        self.vat_percentage = _format_field(config.vat_percentage)
        self.fixed_service_charge = _format_field(config.fixed_service_charge)

    def clear(self) -> None:
        self.rate_per_unit = ""
        self.vat_percentage = ""
        self.fixed_service_charge = ""


def _format_field(value: float) -> str:
    # 15.0 -> "15", 0.5 -> "0.5"
    return repr(value).removesuffix(".0")


class AdminState(BaseModel):
    """In-memory state of the admin page.

    Nothing here is persisted; a new page load starts from a fresh
    instance, i.e. unauthenticated.
    """

    auth_state: AuthState = AuthState.UNAUTHENTICATED
    admin_pin: str = ""
    current_config: Configuration | None = None
    form: ConfigForm = Field(default_factory=ConfigForm)
    error: str = ""
    success: str = ""
    loading: bool = False
    config_loading: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.auth_state == AuthState.AUTHENTICATED

    def clear(self) -> None:
        """Drop everything, returning to the unauthenticated state."""
        self.auth_state = AuthState.UNAUTHENTICATED
        self.admin_pin = ""
        self.current_config = None
        self.form.clear()
        self.error = ""
        self.success = ""
        self.loading = False
        self.config_loading = False
