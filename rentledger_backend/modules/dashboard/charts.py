"""Chart series for the dashboard."""

from pydantic import BaseModel, Field

from ..portfolio.models import Estate


class EstateRevenueBar(BaseModel):
    estate_id: str
    label: str
    expected: float
    paid: float


class RevenueSlice(BaseModel):
    name: str
    value: float


class RevenueChart(BaseModel):
    bars: list[EstateRevenueBar] = Field(default_factory=list)
    split: list[RevenueSlice] = Field(default_factory=list)


def short_estate_label(name: str) -> str:
    return name.replace(" Estate", "").replace(" Gardens", "")


def revenue_chart(estates: list[Estate]) -> RevenueChart:
    """Expected vs paid per estate, plus the portfolio paid/outstanding split."""
    return RevenueChart(
        bars=[
            EstateRevenueBar(
                estate_id=e.id,
                label=short_estate_label(e.name),
                expected=e.total_expected,
                paid=e.total_actual,
            )
            for e in estates
        ],
        split=[
            RevenueSlice(name="Paid", value=sum(e.total_actual for e in estates)),
            RevenueSlice(
                name="Outstanding", value=sum(e.total_outstanding for e in estates)
            ),
        ],
    )
