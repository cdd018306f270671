"""Bill calculation flow.

Holds the state of the calculator page (units input, busy flag, last
result, error message) and drives one calculation at a time through the
Billing API.
"""

from __future__ import annotations

import structlog
from pydantic import BaseModel

from utility_billing.billing.formula import parse_units
from utility_billing.billing.manager import BillManager
from utility_billing.core.exceptions import (
    OperationInProgressError,
    UtilityBillingError,
    ValidationError,
)
from utility_billing.core.types import BillResponse
from utility_billing.gateway.base import GatewayProtocol

logger = structlog.get_logger(__name__)

CALCULATION_FAILED_MESSAGE = "Failed to calculate bill. Please try again."


class CalculatorState(BaseModel):
    """In-memory state of the calculator page."""

    units_input: str = ""
    result: BillResponse | None = None
    error: str = ""
    loading: bool = False

    def clear(self) -> None:
        self.units_input = ""
        self.result = None
        self.error = ""


class BillCalculator:
    """Validate units input, request a bill, and keep the outcome in state.

    Args:
        gateway: Gateway used for the ``bill.calculate`` call.
        state: Existing page state to operate on; a fresh one is created
            when omitted.
    """

    def __init__(self, gateway: GatewayProtocol, state: CalculatorState | None = None) -> None:
        self._bills = BillManager(gateway)
        self.state = state if state is not None else CalculatorState()

    @property
    def busy(self) -> bool:
        return self.state.loading

    async def calculate(self, units_input: str | float | None = None) -> BillResponse | None:
        """Run one calculation.

        Invalid input sets ``state.error`` and makes no network call.  API
        failures set ``state.error`` to the server's message, or a generic
        fallback, and are not retried.

        Returns:
            The server's :class:`BillResponse`, or ``None`` on failure.

        Raises:
            OperationInProgressError: If a calculation is already in flight.
        """
        if self.state.loading:
            raise OperationInProgressError("A calculation is already in progress")

        if units_input is not None:
            self.state.units_input = str(units_input)
        self.state.error = ""
        self.state.result = None

        try:
            units = parse_units(self.state.units_input)
        except ValidationError as exc:
            self.state.error = str(exc)
            return None

        self.state.loading = True
        try:
            bill = await self._bills.calculate(units)
        except UtilityBillingError as exc:
            logger.warning("bill_calculation_failed", error=str(exc), status_code=exc.status_code)
            self.state.error = exc.server_message or CALCULATION_FAILED_MESSAGE
            return None
        finally:
            self.state.loading = False

        self.state.result = bill
        return bill

    def reset(self) -> None:
        """Clear the units input, the result and any error."""
        self.state.clear()
