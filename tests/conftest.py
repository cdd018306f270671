"""Shared test fixtures."""
from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, Iterator
from typing import Any

import pytest
import structlog

from utility_billing.gateway.mock import MockGateway


def make_config_payload(
    rate: float = 0.5,
    vat: float = 15.0,
    charge: float = 5.0,
    *,
    config_id: str = "cfg-1",
    updated_at: str = "2026-10-01T09:30:00.000Z",
) -> dict[str, Any]:
    """A Configuration body as the Billing API serialises it."""
    return {
        "id": config_id,
        "ratePerUnit": rate,
        "vatPercentage": vat,
        "fixedServiceCharge": charge,
        "isActive": True,
        "createdAt": "2026-10-01T09:30:00.000Z",
        "updatedAt": updated_at,
    }


def make_bill_payload(units: float = 100.0, rate: float = 0.5, vat: float = 15.0,
                      charge: float = 5.0) -> dict[str, Any]:
    """A BillResponse body computed the way the Billing API does."""
    subtotal = units * rate
    vat_amount = subtotal * vat / 100
    return {
        "unitsConsumed": units,
        "ratePerUnit": rate,
        "subtotal": subtotal,
        "vatPercentage": vat,
        "vatAmount": vat_amount,
        "fixedServiceCharge": charge,
        "totalAmount": subtotal + vat_amount + charge,
        "calculatedAt": "2026-10-19T12:00:00.000Z",
    }


@pytest.fixture
def mock_gateway() -> MockGateway:
    return MockGateway()


@pytest.fixture
async def connected_mock_gateway() -> AsyncGenerator[MockGateway, None]:
    gw = MockGateway()
    await gw.connect()
    yield gw
    await gw.close()


@pytest.fixture
def config_payload() -> Any:
    """Factory for Configuration response bodies."""
    return make_config_payload


@pytest.fixture
def bill_payload() -> Any:
    """Factory for BillResponse bodies."""
    return make_bill_payload


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo configure_logging() so later tests can capture log output."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)
