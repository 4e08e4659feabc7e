"""Portfolio domain models for RentLedger.

Estates own their tenants; each tenant owns an ordered payment ledger.
"""

import datetime
import enum
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, Field, field_validator

from ...core.formatting import parse_lease_date


class TenantStatus(str, enum.Enum):
    """Tenant lease status."""

    ACTIVE = "Active"
    OVERDUE = "Overdue"
    VACANT = "Vacant"


def _optional_date(value):
    if value is None or value == "":
        return None
    return parse_lease_date(value)


LeaseDate = Annotated[datetime.date, BeforeValidator(parse_lease_date)]
OptionalLeaseDate = Annotated[datetime.date | None, BeforeValidator(_optional_date)]


class PaymentRecord(BaseModel):
    """A single payment in a tenant's ledger."""

    id: str
    date: LeaseDate
    amount: float = Field(..., ge=0)
    description: str = "Rent Payment"
    period_start: OptionalLeaseDate = None
    period_end: OptionalLeaseDate = None


class Tenant(BaseModel):
    """A lease record within an estate."""

    id: str
    serial_number: int = 0
    name: str
    email: str = ""
    phone_number: str = ""
    landlord: str = ""
    flat_type: str = ""
    block: str = ""
    phase: str | None = None
    flat_number: str | None = None
    tenor: str | None = None
    rent_expected: float = 0
    rent_paid: float = 0
    outstanding_balance: float = 0
    rent_start_date: LeaseDate
    rent_due_date: LeaseDate
    last_payment_date: OptionalLeaseDate = None
    days_left: int = 0
    status: TenantStatus = TenantStatus.ACTIVE
    custom_fields: dict[str, str] = Field(default_factory=dict)
    payment_history: list[PaymentRecord] = Field(default_factory=list)

    @field_validator("phase", "flat_number", "tenor", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ColumnSetting(BaseModel):
    """Column display preference for an estate's tenant table."""

    id: str
    label: str
    visible: bool = True
    order: int = 0
    is_custom: bool = False


class Estate(BaseModel):
    """A managed property site with its tenants and rent rollups."""

    id: str
    name: str
    image_url: str = ""
    manager: str = ""
    tenants: list[Tenant] = Field(default_factory=list)
    total_expected: float = 0
    total_actual: float = 0
    total_outstanding: float = 0
    occupancy_rate: float = 0
    phases: list[str] | None = None
    column_preferences: list[ColumnSetting] | None = None

    def find_tenant(self, tenant_id: str) -> Tenant | None:
        return next((t for t in self.tenants if t.id == tenant_id), None)
