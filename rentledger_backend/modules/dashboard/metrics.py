"""Portfolio-wide totals."""

from pydantic import BaseModel

from ..portfolio.models import Estate


class DashboardMetrics(BaseModel):
    total_properties: int = 0
    total_expected_rent: float = 0
    total_rent_paid: float = 0
    total_outstanding: float = 0


def calculate_metrics(estates: list[Estate]) -> DashboardMetrics:
    """Sum the per-estate rollups; property count is the number of tenants."""
    return DashboardMetrics(
        total_properties=sum(len(e.tenants) for e in estates),
        total_expected_rent=sum(e.total_expected for e in estates),
        total_rent_paid=sum(e.total_actual for e in estates),
        total_outstanding=sum(e.total_outstanding for e in estates),
    )
