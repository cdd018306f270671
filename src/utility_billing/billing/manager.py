from __future__ import annotations

import structlog
from pydantic import ValidationError as PydanticValidationError

from utility_billing.billing.formula import check_bill
from utility_billing.core.constants import GatewayMethod
from utility_billing.core.exceptions import APIError
from utility_billing.core.types import BillResponse, CalculateBillRequest
from utility_billing.gateway.base import GatewayProtocol

logger = structlog.get_logger(__name__)


class BillManager:
    """Typed wrapper around the gateway ``bill.*`` namespace."""

    def __init__(self, gateway: GatewayProtocol) -> None:
        self._gateway = gateway

    async def calculate(self, units_consumed: float) -> BillResponse:
        """Ask the Billing API to calculate a bill.

        Gateway method: ``bill.calculate``

        The server's figures are returned as-is.  If they do not satisfy
        the bill formula a warning is logged, but the response is not
        altered or recomputed.
        """
        request = CalculateBillRequest(units_consumed=units_consumed)
        data = await self._gateway.call(
            GatewayMethod.BILL_CALCULATE, request.model_dump(by_alias=True)
        )
        try:
            bill = BillResponse.model_validate(data)
        except PydanticValidationError as exc:
            raise APIError("Malformed bill response from Billing API") from exc

        problems = check_bill(bill)
        if problems:
            logger.warning("bill_invariant_mismatch", problems=problems)

        logger.info(
            "bill_calculated",
            units_consumed=bill.units_consumed,
            total_amount=bill.total_amount,
        )
        return bill
