"""Tests for billing/formula.py — units validation, bill formula, invariant check."""
from __future__ import annotations

import math
import random
from datetime import datetime, timezone
from typing import Any

import pytest

from utility_billing.billing.formula import (
    UNITS_ERROR_MESSAGE,
    check_bill,
    compute_bill,
    parse_decimal,
    parse_units,
)
from utility_billing.core.exceptions import BillValidationError, ValidationError
from utility_billing.core.types import BillResponse, Configuration


def _config(rate: float = 0.5, vat: float = 15.0, charge: float = 5.0) -> Configuration:
    now = datetime.now(timezone.utc)
    return Configuration(
        id="cfg-1",
        rate_per_unit=rate,
        vat_percentage=vat,
        fixed_service_charge=charge,
        created_at=now,
        updated_at=now,
    )


# ---------------------------------------------------------------------------
# parse_decimal / parse_units
# ---------------------------------------------------------------------------


def test_parse_decimal_plain_number() -> None:
    assert parse_decimal("42.5") == 42.5


def test_parse_decimal_ignores_whitespace() -> None:
    assert parse_decimal("  7 ") == 7.0


@pytest.mark.parametrize("raw", ["12abc", "1,5", "15,5", "1 000", "0x10", "1.2.3"])
def test_parse_decimal_rejects_partial_numbers(raw: str) -> None:
    assert math.isnan(parse_decimal(raw))


def test_parse_decimal_exponent() -> None:
    assert parse_decimal("1.5e2") == 150.0


def test_parse_decimal_passes_numbers_through() -> None:
    assert parse_decimal(3) == 3.0
    assert parse_decimal(0.25) == 0.25


@pytest.mark.parametrize("raw", ["", "   ", "abc", "--1", ".", None, True])
def test_parse_decimal_unreadable_is_nan(raw: Any) -> None:
    assert math.isnan(parse_decimal(raw))


def test_parse_units_accepts_positive() -> None:
    assert parse_units("100") == 100.0


@pytest.mark.parametrize(
    "raw", ["0", "-5", "abc", "", None, "1e400", "1,5", "12abc", float("inf"), float("nan")]
)
def test_parse_units_rejects_invalid(raw: Any) -> None:
    with pytest.raises(BillValidationError, match=UNITS_ERROR_MESSAGE):
        parse_units(raw)


def test_bill_validation_error_is_validation_error() -> None:
    with pytest.raises(ValidationError):
        parse_units("0")


# ---------------------------------------------------------------------------
# compute_bill
# ---------------------------------------------------------------------------


def test_compute_bill_reference_example() -> None:
    bill = compute_bill(100, _config(rate=0.5, vat=15, charge=5.0))
    assert bill.subtotal == pytest.approx(50.0)
    assert bill.vat_amount == pytest.approx(7.5)
    assert bill.total_amount == pytest.approx(62.5)


def test_compute_bill_copies_configuration() -> None:
    bill = compute_bill(10, _config(rate=0.2, vat=5, charge=1.0))
    assert bill.units_consumed == 10
    assert bill.rate_per_unit == 0.2
    assert bill.vat_percentage == 5
    assert bill.fixed_service_charge == 1.0


def test_compute_bill_does_not_round() -> None:
    bill = compute_bill(1 / 3, _config(rate=0.1, vat=0, charge=0))
    assert bill.subtotal == (1 / 3) * 0.1


def test_compute_bill_uses_given_timestamp() -> None:
    ts = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    bill = compute_bill(1, _config(), calculated_at=ts)
    assert bill.calculated_at == ts


def test_compute_bill_rejects_non_positive_units() -> None:
    with pytest.raises(BillValidationError):
        compute_bill(0, _config())


def test_compute_bill_total_matches_formula_for_random_inputs() -> None:
    rng = random.Random(1234)
    for _ in range(200):
        units = rng.uniform(0.01, 10_000)
        rate = rng.uniform(0.001, 5)
        vat = rng.uniform(0, 100)
        charge = rng.uniform(0, 50)
        bill = compute_bill(units, _config(rate=rate, vat=vat, charge=charge))
        expected = units * rate + units * rate * vat / 100 + charge
        assert bill.total_amount == pytest.approx(expected, rel=1e-9)
        assert bill.total_amount >= 0
        assert check_bill(bill) == []


# ---------------------------------------------------------------------------
# check_bill
# ---------------------------------------------------------------------------


def _bill(**overrides: Any) -> BillResponse:
    data: dict[str, Any] = {
        "units_consumed": 100,
        "rate_per_unit": 0.5,
        "subtotal": 50.0,
        "vat_percentage": 15,
        "vat_amount": 7.5,
        "fixed_service_charge": 5.0,
        "total_amount": 62.5,
    }
    data.update(overrides)
    return BillResponse(**data)


def test_check_bill_consistent() -> None:
    assert check_bill(_bill()) == []


def test_check_bill_flags_wrong_subtotal() -> None:
    problems = check_bill(_bill(subtotal=51.0, total_amount=63.5, vat_amount=7.65))
    assert any(p.startswith("subtotal") for p in problems)


def test_check_bill_flags_wrong_total() -> None:
    problems = check_bill(_bill(total_amount=60.0))
    assert len(problems) == 1
    assert problems[0].startswith("totalAmount")


def test_check_bill_flags_negative_values() -> None:
    problems = check_bill(_bill(fixed_service_charge=-5.0, total_amount=52.5))
    assert "fixed_service_charge is negative" in problems


def test_check_bill_tolerates_float_noise() -> None:
    assert check_bill(_bill(total_amount=62.5 + 1e-12)) == []
