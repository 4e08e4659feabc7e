"""Derived tenant fields: days left, status, settlement and rollups."""

from datetime import date

import pytest

from rentledger_backend.modules.portfolio.ledger import (
    compute_days_left,
    derive_status,
    refresh_tenant,
    settle_tenant,
    with_rollups,
)
from rentledger_backend.modules.portfolio.models import PaymentRecord, TenantStatus

from .factories import TODAY, make_estate, make_tenant


def test_days_left_is_signed():
    assert compute_days_left(date(2025, 6, 11), TODAY) == 10
    assert compute_days_left(date(2025, 5, 31), TODAY) == -1
    assert compute_days_left(TODAY, TODAY) == 0


@pytest.mark.parametrize("days_left", [-365, -1, 0, 1, 90, 400])
def test_overdue_iff_negative_days(days_left):
    for current in TenantStatus:
        status = derive_status(days_left, current)
        assert (status == TenantStatus.OVERDUE) == (days_left < 0)


def test_vacant_unit_stays_vacant_until_overdue():
    assert derive_status(10, TenantStatus.VACANT) == TenantStatus.VACANT
    assert derive_status(-1, TenantStatus.VACANT) == TenantStatus.OVERDUE


def test_overdue_tenant_recovers_when_renewed():
    tenant = make_tenant("t1", status=TenantStatus.OVERDUE, rent_due_date=date(2026, 6, 1))
    assert refresh_tenant(tenant, TODAY).status == TenantStatus.ACTIVE


def test_settle_uses_payment_history():
    tenant = make_tenant(
        "t1",
        rent_expected=1000,
        rent_paid=5,
        payment_history=[
            PaymentRecord(id="p1", date=date(2025, 1, 10), amount=300),
            PaymentRecord(id="p2", date=date(2025, 3, 2), amount=200),
        ],
    )

    settled = settle_tenant(tenant)

    assert settled.rent_paid == 500
    assert settled.outstanding_balance == 500
    assert settled.last_payment_date == date(2025, 3, 2)


def test_settle_without_history_keeps_rent_paid():
    tenant = make_tenant("t1", rent_expected=1000, rent_paid=250)
    settled = settle_tenant(tenant)
    assert settled.rent_paid == 250
    assert settled.outstanding_balance == 750
    assert settled.last_payment_date == tenant.rent_start_date


def test_refresh_leaves_input_untouched():
    tenant = make_tenant("t1", rent_due_date=date(2025, 5, 1))
    refreshed = refresh_tenant(tenant, TODAY)
    assert refreshed.days_left == -31
    assert tenant.days_left == 0


def test_rollups_over_given_tenants():
    estate = make_estate(
        "e1",
        [
            make_tenant("a", rent_expected=100, rent_paid=40),
            make_tenant("b", rent_expected=50, rent_paid=50),
        ],
    )
    rolled = with_rollups(estate)
    assert (rolled.total_expected, rolled.total_actual, rolled.total_outstanding) == (
        150,
        90,
        60,
    )

    subset = with_rollups(estate, estate.tenants[:1])
    assert subset.total_outstanding == 60
    assert [t.id for t in subset.tenants] == ["a"]
