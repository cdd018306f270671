"""Bill formula and units validation.

The Billing API performs the authoritative calculation.  This module holds
the same linear formula so results can be previewed and server responses
sanity-checked, plus the pre-flight validation of the units input.
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timezone

from utility_billing.core.exceptions import BillValidationError
from utility_billing.core.types import BillResponse, Configuration

UNITS_ERROR_MESSAGE = "Please enter a valid positive number for units consumed"

# A whole decimal literal, as an HTML number input would accept it.
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_decimal(raw: str | float | int | None) -> float:
    """Parse free-text numeric input.

    Surrounding whitespace is ignored; anything else that is not part of a
    single decimal literal (``"12abc"``, ``"1,5"``) yields ``nan``, as does
    empty input, so callers only need one range check.
    """
    if raw is None or isinstance(raw, bool):
        return math.nan
    if isinstance(raw, (int, float)):
        return float(raw)
    match = _DECIMAL.fullmatch(raw.strip())
    if match is None:
        return math.nan
    return float(match.group(0))


def parse_units(raw: str | float | int | None) -> float:
    """Validate a units-consumed input and return it as a float.

    Raises:
        BillValidationError: If the input is missing, non-numeric,
            non-finite, or not strictly positive.
    """
    units = parse_decimal(raw)
    if not math.isfinite(units) or units <= 0:
        raise BillValidationError(UNITS_ERROR_MESSAGE, code="invalid_units")
    return units


def compute_bill(
    units_consumed: float,
    configuration: Configuration,
    *,
    calculated_at: datetime | None = None,
) -> BillResponse:
    """Compute a bill for *units_consumed* under *configuration*.

    ``subtotal = units * rate``, ``vat = subtotal * vat% / 100`` and
    ``total = subtotal + vat + fixed charge``.  No rounding is applied.
    """
    if not math.isfinite(units_consumed) or units_consumed <= 0:
        raise BillValidationError(UNITS_ERROR_MESSAGE, code="invalid_units")

    subtotal = units_consumed * configuration.rate_per_unit
    vat_amount = subtotal * configuration.vat_percentage / 100
    total_amount = subtotal + vat_amount + configuration.fixed_service_charge

    return BillResponse(
        units_consumed=units_consumed,
        rate_per_unit=configuration.rate_per_unit,
        subtotal=subtotal,
        vat_percentage=configuration.vat_percentage,
        vat_amount=vat_amount,
        fixed_service_charge=configuration.fixed_service_charge,
        total_amount=total_amount,
        calculated_at=calculated_at or datetime.now(timezone.utc),
    )


def check_bill(bill: BillResponse, tolerance: float = 1e-6) -> list[str]:
    """Return the invariant violations found in *bill*.

    An empty list means the bill is internally consistent.  Comparisons use
    a relative *tolerance* so float noise from the API is not flagged.
    """
    problems: list[str] = []

    def _close(actual: float, expected: float) -> bool:
        return math.isclose(actual, expected, rel_tol=tolerance, abs_tol=tolerance)

    if bill.units_consumed <= 0:
        problems.append("unitsConsumed must be positive")
    for name in ("rate_per_unit", "subtotal", "vat_amount", "fixed_service_charge", "total_amount"):
        if getattr(bill, name) < 0:
            problems.append(f"{name} is negative")

    expected_subtotal = bill.units_consumed * bill.rate_per_unit
    if not _close(bill.subtotal, expected_subtotal):
        problems.append(f"subtotal {bill.subtotal} != {expected_subtotal}")

    expected_vat = bill.subtotal * bill.vat_percentage / 100
    if not _close(bill.vat_amount, expected_vat):
        problems.append(f"vatAmount {bill.vat_amount} != {expected_vat}")

    expected_total = bill.subtotal + bill.vat_amount + bill.fixed_service_charge
    if not _close(bill.total_amount, expected_total):
        problems.append(f"totalAmount {bill.total_amount} != {expected_total}")

    return problems
