"""Read-only projections used by the estate, landlord and property-type pages."""

from typing import Literal

from pydantic import BaseModel, Field

from .ledger import tenant_totals
from .models import Estate, Tenant, TenantStatus

StatusFilter = Literal["All", "Active", "Overdue"]


class PhaseSummary(BaseModel):
    phase: str
    tenant_count: int = 0
    total_expected: float = 0
    total_paid: float = 0
    total_outstanding: float = 0


class LocatedTenant(BaseModel):
    """A tenant together with the estate that holds it."""

    estate_id: str
    estate_name: str
    tenant: Tenant


class LandlordPortfolio(BaseModel):
    landlord: str
    tenants: list[LocatedTenant] = Field(default_factory=list)
    property_count: int = 0
    total_expected: float = 0
    total_paid: float = 0
    total_outstanding: float = 0
    overdue: list[LocatedTenant] = Field(default_factory=list)


def estate_tenants(
    estate: Estate,
    search: str | None = None,
    status: StatusFilter = "All",
    flat_type: str | None = None,
) -> list[Tenant]:
    """Filter an estate's tenants.

    ``search`` matches name, flat type or landlord, case-insensitively.
    ``flat_type`` must match exactly; ``None`` or ``"All"`` disables it.
    """
    term = (search or "").strip().lower()
    results = []
    for tenant in estate.tenants:
        if term and not (
            term in tenant.name.lower()
            or term in tenant.flat_type.lower()
            or term in tenant.landlord.lower()
        ):
            continue
        if status != "All" and tenant.status.value != status:
            continue
        if flat_type and flat_type != "All" and tenant.flat_type != flat_type:
            continue
        results.append(tenant)
    return results


def phase_summaries(estate: Estate) -> list[PhaseSummary]:
    """Per declared phase totals, in declaration order."""
    summaries = []
    for phase in estate.phases or []:
        tenants = [t for t in estate.tenants if t.phase == phase]
        expected, paid, outstanding = tenant_totals(tenants)
        summaries.append(
            PhaseSummary(
                phase=phase,
                tenant_count=len(tenants),
                total_expected=expected,
                total_paid=paid,
                total_outstanding=outstanding,
            )
        )
    return summaries


def landlord_portfolio(estates: list[Estate], landlord: str) -> LandlordPortfolio:
    """Everything one landlord owns across ``estates``."""
    located = [
        LocatedTenant(estate_id=e.id, estate_name=e.name, tenant=t)
        for e in estates
        for t in e.tenants
        if t.landlord == landlord
    ]
    expected, paid, outstanding = tenant_totals(item.tenant for item in located)
    return LandlordPortfolio(
        landlord=landlord,
        tenants=located,
        property_count=len(located),
        total_expected=expected,
        total_paid=paid,
        total_outstanding=outstanding,
        overdue=[i for i in located if i.tenant.status == TenantStatus.OVERDUE],
    )


def property_type_listing(estates: list[Estate], property_type: str) -> list[LocatedTenant]:
    """Tenants whose flat type contains ``property_type``.

    "2 Bedroom" therefore also lists "2 Bedroom Basic" and "2 Bedroom Maxi".
    """
    return [
        LocatedTenant(estate_id=e.id, estate_name=e.name, tenant=t)
        for e in estates
        for t in e.tenants
        if property_type in t.flat_type
    ]
