"""Display formatting.

All rounding to two decimal places happens here, at display time.  Models
and request bodies always carry unrounded values.
"""

from __future__ import annotations

from datetime import datetime

CURRENCY_SYMBOL = "$"


def format_amount(value: float) -> str:
    """``62.5`` → ``"62.50"``"""
    return f"{value:.2f}"


def format_currency(value: float) -> str:
    """``62.5`` → ``"$62.50"``"""
    return f"{CURRENCY_SYMBOL}{value:.2f}"


def format_units(value: float) -> str:
    return f"{value:.2f} kWh"


def format_rate(value: float) -> str:
    return f"{format_currency(value)}/kWh"


def format_percentage(value: float) -> str:
    """Render a VAT percentage as given by the API, e.g. ``15`` or ``12.5``.

    Matches how the statement labels the VAT line (``VAT (15%)``): the raw
    number, without forced decimals.
    """
    return f"{value:g}%"


def format_percentage_fixed(value: float) -> str:
    """``15`` → ``"15.00%"``, as on the configuration cards."""
    return f"{format_amount(value)}%"


def format_timestamp(value: datetime) -> str:
    """Render *value* in local time, e.g. ``"10/19/2026, 3:04:05 PM"``."""
    local = value.astimezone() if value.tzinfo is not None else value
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return (
        f"{local.month}/{local.day}/{local.year}, "
        f"{hour}:{local.minute:02d}:{local.second:02d} {meridiem}"
    )
