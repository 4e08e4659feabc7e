"""Portfolio request schemas for RentLedger."""

from pydantic import BaseModel, Field, field_validator, model_validator

from .models import ColumnSetting, LeaseDate, OptionalLeaseDate, TenantStatus

# ----- Estate Schemas -----


class EstateCreate(BaseModel):
    """Schema for creating an estate."""

    name: str = Field(..., min_length=1, max_length=255)
    manager: str = Field(default="", max_length=255)
    image_url: str = ""
    occupancy_rate: float = Field(default=0, ge=0, le=100)
    phases: list[str] = Field(default_factory=list)
    column_preferences: list[ColumnSetting] | None = None


class EstateUpdate(BaseModel):
    """Schema for updating estate metadata."""

    name: str | None = Field(None, min_length=1, max_length=255)
    manager: str | None = Field(None, max_length=255)
    image_url: str | None = None
    occupancy_rate: float | None = Field(None, ge=0, le=100)
    column_preferences: list[ColumnSetting] | None = None


# ----- Phase Schemas -----


class PhaseCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)


class PhaseRename(BaseModel):
    new_name: str = Field(..., min_length=1, max_length=120)


# ----- Payment Schemas -----


class PaymentCreate(BaseModel):
    """Schema for recording a payment."""

    date: LeaseDate
    amount: float = Field(..., gt=0)
    description: str = Field(default="Rent Payment", max_length=255)
    period_start: OptionalLeaseDate = None
    period_end: OptionalLeaseDate = None

    @model_validator(mode="after")
    def check_period(self) -> "PaymentCreate":
        if self.period_start and self.period_end and self.period_end < self.period_start:
            raise ValueError("period_end must not be before period_start")
        if not self.description.strip():
            self.description = "Rent Payment"
        return self


# ----- Tenant Schemas -----


class TenantBase(BaseModel):
    """Fields shared by tenant creation and update."""

    email: str = Field(default="", max_length=255)
    phone_number: str = Field(default="", max_length=50)
    landlord: str = Field(default="", max_length=255)
    flat_type: str = Field(default="", max_length=120)
    block: str = Field(default="", max_length=50)
    phase: str | None = Field(None, max_length=120)
    flat_number: str | None = Field(None, max_length=20)
    tenor: str | None = Field(None, max_length=50)
    custom_fields: dict[str, str] = Field(default_factory=dict)


class TenantCreate(TenantBase):
    """Schema for adding a tenant to an estate."""

    name: str = Field(..., min_length=1, max_length=255)
    rent_expected: float = Field(..., ge=0)
    rent_paid: float = Field(default=0, ge=0)
    rent_start_date: LeaseDate
    rent_due_date: LeaseDate
    last_payment_date: OptionalLeaseDate = None
    status: TenantStatus | None = None
    payment_history: list[PaymentCreate] = Field(default_factory=list)


class TenantUpdate(BaseModel):
    """Schema for updating a tenant. Payments have their own endpoints."""

    name: str | None = Field(None, min_length=1, max_length=255)
    email: str | None = Field(None, max_length=255)
    phone_number: str | None = Field(None, max_length=50)
    landlord: str | None = Field(None, max_length=255)
    flat_type: str | None = Field(None, max_length=120)
    block: str | None = Field(None, max_length=50)
    phase: str | None = Field(None, max_length=120)
    flat_number: str | None = Field(None, max_length=20)
    tenor: str | None = Field(None, max_length=50)
    rent_expected: float | None = Field(None, ge=0)
    rent_paid: float | None = Field(None, ge=0)
    rent_start_date: OptionalLeaseDate = None
    rent_due_date: OptionalLeaseDate = None
    last_payment_date: OptionalLeaseDate = None
    status: TenantStatus | None = None
    custom_fields: dict[str, str] | None = None

    @field_validator("rent_start_date", "rent_due_date", mode="before")
    @classmethod
    def lease_dates_not_cleared(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("Lease start and due dates cannot be cleared")
        return value


# ----- Landlord & Property Type Schemas -----


class LandlordCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class LandlordRename(BaseModel):
    new_name: str = Field(..., min_length=1, max_length=255)


class PropertyTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
