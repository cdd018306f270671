"""Tests for utils/formatting.py — display-time rounding."""
from __future__ import annotations

from datetime import datetime

import pytest

from utility_billing.utils.formatting import (
    format_amount,
    format_currency,
    format_percentage,
    format_percentage_fixed,
    format_rate,
    format_timestamp,
    format_units,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(62.5, "62.50"), (0, "0.00"), (1.005, "1.00"), (12.345678, "12.35"), (1000, "1000.00")],
)
def test_format_amount_two_decimals(value: float, expected: str) -> None:
    assert format_amount(value) == expected


def test_format_currency() -> None:
    assert format_currency(62.5) == "$62.50"


def test_format_units() -> None:
    assert format_units(100) == "100.00 kWh"
    assert format_units(12.5) == "12.50 kWh"


def test_format_rate() -> None:
    assert format_rate(0.5) == "$0.50/kWh"


@pytest.mark.parametrize(("value", "expected"), [(15, "15%"), (15.0, "15%"), (12.5, "12.5%"), (0, "0%")])
def test_format_percentage_keeps_raw_number(value: float, expected: str) -> None:
    assert format_percentage(value) == expected


@pytest.mark.parametrize(
    ("moment", "expected"),
    [
        (datetime(2026, 10, 19, 15, 4, 5), "10/19/2026, 3:04:05 PM"),
        (datetime(2026, 1, 2, 0, 0, 0), "1/2/2026, 12:00:00 AM"),
        (datetime(2026, 1, 2, 12, 30, 0), "1/2/2026, 12:30:00 PM"),
        (datetime(2026, 1, 2, 9, 7, 59), "1/2/2026, 9:07:59 AM"),
    ],
)
def test_format_timestamp_naive(moment: datetime, expected: str) -> None:
    assert format_timestamp(moment) == expected


@pytest.mark.parametrize(("value", "expected"), [(15, "15.00%"), (12.5, "12.50%"), (0, "0.00%"), (7.126, "7.13%")])
def test_format_percentage_fixed_two_decimals(value: float, expected: str) -> None:
    assert format_percentage_fixed(value) == expected
