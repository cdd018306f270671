"""Tests for admin/validation.py — configuration form checks."""
from __future__ import annotations

from typing import Any

import pytest

from utility_billing.admin.validation import (
    RATE_ERROR_MESSAGE,
    SERVICE_CHARGE_ERROR_MESSAGE,
    VAT_ERROR_MESSAGE,
    validate_config_form,
)
from utility_billing.core.exceptions import ConfigValidationError


def test_valid_form_builds_request() -> None:
    req = validate_config_form("0.50", "15", "5.00")
    assert req.rate_per_unit == 0.5
    assert req.vat_percentage == 15.0
    assert req.fixed_service_charge == 5.0


@pytest.mark.parametrize("vat", ["0", "100", "0.0", "99.99"])
def test_vat_bounds_are_inclusive(vat: str) -> None:
    assert validate_config_form("1", vat, "0").vat_percentage == float(vat)


def test_zero_service_charge_is_allowed() -> None:
    assert validate_config_form("1", "10", "0").fixed_service_charge == 0.0


@pytest.mark.parametrize("rate", ["0", "-0.5", "", "abc", None])
def test_rate_must_be_positive(rate: Any) -> None:
    with pytest.raises(ConfigValidationError, match=RATE_ERROR_MESSAGE) as exc_info:
        validate_config_form(rate, "15", "5")
    assert exc_info.value.field == "rate_per_unit"


@pytest.mark.parametrize("vat", ["-0.01", "100.01", "", "x"])
def test_vat_must_be_in_range(vat: str) -> None:
    with pytest.raises(ConfigValidationError, match=VAT_ERROR_MESSAGE) as exc_info:
        validate_config_form("0.5", vat, "5")
    assert exc_info.value.field == "vat_percentage"


@pytest.mark.parametrize("charge", ["-1", "", "n/a"])
def test_service_charge_must_be_non_negative(charge: str) -> None:
    with pytest.raises(ConfigValidationError, match=SERVICE_CHARGE_ERROR_MESSAGE) as exc_info:
        validate_config_form("0.5", "15", charge)
    assert exc_info.value.field == "fixed_service_charge"


def test_first_violation_wins() -> None:
    with pytest.raises(ConfigValidationError) as exc_info:
        validate_config_form("0", "200", "-1")
    assert exc_info.value.field == "rate_per_unit"
    assert exc_info.value.details == {"field": "rate_per_unit"}


@pytest.mark.parametrize(
    ("fields", "field"),
    [
        (("0,5", "15", "5"), "rate_per_unit"),
        (("0.5", "15,5", "5"), "vat_percentage"),
        (("0.5", "15", "5 USD"), "fixed_service_charge"),
    ],
)
def test_partially_numeric_fields_are_rejected(fields: tuple[str, str, str], field: str) -> None:
    with pytest.raises(ConfigValidationError) as exc_info:
        validate_config_form(*fields)
    assert exc_info.value.field == field
