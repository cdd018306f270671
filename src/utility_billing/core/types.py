from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for Billing API payloads.

    The API speaks camelCase JSON; attributes stay snake_case in Python.
    Use ``model_dump(by_alias=True)`` to build request bodies.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Configuration(ApiModel):
    """A billing configuration record as stored by the Billing API.

    Only one record is active at a time; superseded records remain in the
    history endpoint.  Decimal columns may be serialised as strings by the
    API, pydantic coerces them to ``float``.
    """

    id: str
    rate_per_unit: float = Field(gt=0)
    vat_percentage: float = Field(ge=0, le=100)
    fixed_service_charge: float = Field(ge=0)
    is_active: bool = True
    created_at: datetime
    updated_at: datetime


class UpdateConfigRequest(ApiModel):
    rate_per_unit: float
    vat_percentage: float
    fixed_service_charge: float


class CalculateBillRequest(ApiModel):
    units_consumed: float


class BillResponse(ApiModel):
    """Immutable snapshot of a computed bill.

    Values are kept exactly as computed; rounding to two decimals only
    happens when the bill is displayed or exported.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    units_consumed: float
    rate_per_unit: float
    subtotal: float
    vat_percentage: float
    vat_amount: float
    fixed_service_charge: float
    total_amount: float
    calculated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
