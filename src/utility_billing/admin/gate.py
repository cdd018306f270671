"""PIN-based admin gate.

There is no login endpoint: a PIN is considered valid when the PIN-gated
configuration history read succeeds with it.  Any failure of that probe,
whatever its cause, is reported as an invalid PIN.  The resulting flag is
held in memory only and has no server-side counterpart.
"""

from __future__ import annotations

import structlog

from utility_billing.admin.state import AdminState
from utility_billing.config.manager import ConfigManager
from utility_billing.core.constants import AuthState
from utility_billing.core.exceptions import OperationInProgressError, UtilityBillingError
from utility_billing.gateway.base import GatewayProtocol

logger = structlog.get_logger(__name__)

PIN_REQUIRED_MESSAGE = "Admin PIN is required"
INVALID_PIN_MESSAGE = "Invalid Admin PIN"


class AdminGate:
    """Drive the ``UNAUTHENTICATED → VERIFYING → AUTHENTICATED`` state machine."""

    def __init__(self, gateway: GatewayProtocol, state: AdminState | None = None) -> None:
        self._configs = ConfigManager(gateway)
        self.state = state if state is not None else AdminState()

    @property
    def is_authenticated(self) -> bool:
        return self.state.is_authenticated

    async def verify(self, pin: str | None = None) -> bool:
        """Verify *pin* (or the PIN already in state) against the API.

        Returns:
            ``True`` when the state is now AUTHENTICATED.

        Raises:
            OperationInProgressError: If a verification is already running.
        """
        if self.state.auth_state == AuthState.VERIFYING:
            raise OperationInProgressError("PIN verification already in progress")

        if pin is not None:
            self.state.admin_pin = pin
        self.state.error = ""

        if not self.state.admin_pin:
            self.state.error = PIN_REQUIRED_MESSAGE
            return False

        self.state.auth_state = AuthState.VERIFYING
        self.state.loading = True
        try:
            await self._configs.history(self.state.admin_pin)
        except UtilityBillingError as exc:
            logger.info("pin_verification_failed", error=str(exc), status_code=exc.status_code)
            return False
        except Exception as exc:
            # e.g. a PIN httpx cannot encode as a header value
            logger.warning("pin_verification_failed", error=repr(exc))
            return False
        else:
            self.state.auth_state = AuthState.AUTHENTICATED
            logger.info("pin_verified")
            return True
        finally:
            self.state.loading = False
            # also reached on cancellation
            if self.state.auth_state != AuthState.AUTHENTICATED:
                self.state.auth_state = AuthState.UNAUTHENTICATED
                self.state.error = INVALID_PIN_MESSAGE
                self.state.admin_pin = ""

    def logout(self) -> None:
        """Forget the PIN and every piece of cached admin state."""
        self.state.clear()
        logger.info("admin_logged_out")
