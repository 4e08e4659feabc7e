"""Report request schemas."""

from pydantic import BaseModel, Field

from .builders import ReportKind


class ReportRequest(BaseModel):
    """ESTATE takes an estate id, LANDLORD a landlord name, TIME a start and end date."""

    kind: ReportKind
    value: str = Field(..., min_length=1)
    secondary_value: str = ""
    # Required from VIEW_ONLY users
    access_key: str | None = None


class TenantReportRequest(BaseModel):
    estate_id: str
    tenant_id: str
    access_key: str | None = None


class ExpiryReport(BaseModel):
    # None when nothing is due to be sent today
    body: str | None = None
