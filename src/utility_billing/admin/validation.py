from __future__ import annotations

import math

from utility_billing.billing.formula import parse_decimal
from utility_billing.core.exceptions import ConfigValidationError
from utility_billing.core.types import UpdateConfigRequest

RATE_ERROR_MESSAGE = "Rate per unit must be a positive number"
VAT_ERROR_MESSAGE = "VAT percentage must be between 0 and 100"
SERVICE_CHARGE_ERROR_MESSAGE = "Fixed service charge must be a non-negative number"


def validate_config_form(
    rate_per_unit: str | float | None,
    vat_percentage: str | float | None,
    fixed_service_charge: str | float | None,
) -> UpdateConfigRequest:
    """Validate the three configuration form fields.

    Fields are checked in form order and the first violation wins.

    Raises:
        ConfigValidationError: With ``field`` set to the offending field.
    """
    rate = parse_decimal(rate_per_unit)
    if not math.isfinite(rate) or rate <= 0:
        raise ConfigValidationError(RATE_ERROR_MESSAGE, field="rate_per_unit")

    vat = parse_decimal(vat_percentage)
    if not math.isfinite(vat) or vat < 0 or vat > 100:
        raise ConfigValidationError(VAT_ERROR_MESSAGE, field="vat_percentage")

    charge = parse_decimal(fixed_service_charge)
    if not math.isfinite(charge) or charge < 0:
        raise ConfigValidationError(SERVICE_CHARGE_ERROR_MESSAGE, field="fixed_service_charge")

    return UpdateConfigRequest(
        rate_per_unit=rate,
        vat_percentage=vat,
        fixed_service_charge=charge,
    )
