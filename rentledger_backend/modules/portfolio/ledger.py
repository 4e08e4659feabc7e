"""Derived tenant fields and estate rollups.

All helpers return new model instances and leave their inputs untouched.
"""

from collections.abc import Iterable
from datetime import date

from .models import Estate, Tenant, TenantStatus


def compute_days_left(due_date: date, today: date) -> int:
    """Signed day count from ``today`` to ``due_date``; negative means overdue."""
    return (due_date - today).days


def derive_status(days_left: int, current: TenantStatus = TenantStatus.ACTIVE) -> TenantStatus:
    """Overdue when the due date has passed; a vacant unit stays vacant otherwise."""
    if days_left < 0:
        return TenantStatus.OVERDUE
    if current == TenantStatus.VACANT:
        return TenantStatus.VACANT
    return TenantStatus.ACTIVE


def settle_tenant(tenant: Tenant) -> Tenant:
    """Recompute rent paid and outstanding balance from the ledger."""
    rent_paid = tenant.rent_paid
    last_payment_date = tenant.last_payment_date or tenant.rent_start_date
    if tenant.payment_history:
        rent_paid = sum(p.amount for p in tenant.payment_history)
        last_payment_date = max(p.date for p in tenant.payment_history)
    return tenant.model_copy(
        update={
            "rent_paid": rent_paid,
            "outstanding_balance": tenant.rent_expected - rent_paid,
            "last_payment_date": last_payment_date,
        }
    )


def refresh_tenant(tenant: Tenant, today: date) -> Tenant:
    """Settle the ledger and recompute ``days_left`` and ``status`` against ``today``."""
    settled = settle_tenant(tenant)
    days_left = compute_days_left(settled.rent_due_date, today)
    return settled.model_copy(
        update={
            "days_left": days_left,
            "status": derive_status(days_left, settled.status),
        }
    )


def tenant_totals(tenants: Iterable[Tenant]) -> tuple[float, float, float]:
    """Return ``(expected, paid, outstanding)`` summed over ``tenants``."""
    expected = 0.0
    paid = 0.0
    for tenant in tenants:
        expected += tenant.rent_expected
        paid += tenant.rent_paid
    return expected, paid, expected - paid


def with_rollups(estate: Estate, tenants: list[Tenant] | None = None) -> Estate:
    """Return a copy of ``estate`` holding ``tenants`` with totals summed over them."""
    tenants = list(estate.tenants if tenants is None else tenants)
    expected, paid, outstanding = tenant_totals(tenants)
    return estate.model_copy(
        update={
            "tenants": tenants,
            "total_expected": expected,
            "total_actual": paid,
            "total_outstanding": outstanding,
        }
    )


def refresh_estate(estate: Estate, today: date) -> Estate:
    return with_rollups(estate, [refresh_tenant(t, today) for t in estate.tenants])
