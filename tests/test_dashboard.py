"""Metrics, notification ranking and chart series."""

from rentledger_backend.modules.dashboard.charts import revenue_chart, short_estate_label
from rentledger_backend.modules.dashboard.metrics import calculate_metrics
from rentledger_backend.modules.dashboard.notifications import (
    NotificationType,
    rank_notifications,
)
from rentledger_backend.modules.portfolio.ledger import with_rollups

from .factories import make_estate, make_tenant


def tenants_with_days(*days_left):
    return [
        make_tenant(f"t{i}", days_left=d, outstanding_balance=10 * i)
        for i, d in enumerate(days_left)
    ]


class TestMetrics:
    def test_sums_estate_rollups(self):
        first = make_estate(
            "e1",
            [
                make_tenant("a", rent_expected=60, rent_paid=30),
                make_tenant("b", rent_expected=40, rent_paid=30),
            ],
        )
        second = make_estate("e2", [make_tenant("c", rent_expected=50, rent_paid=50)])

        metrics = calculate_metrics([with_rollups(first), with_rollups(second)])

        assert metrics.total_expected_rent == 150
        assert metrics.total_rent_paid == 110
        assert metrics.total_outstanding == 40
        assert metrics.total_properties == 3

    def test_empty_portfolio(self):
        metrics = calculate_metrics([])
        assert metrics.total_properties == 0
        assert metrics.total_outstanding == 0


class TestNotifications:
    def test_partition_is_disjoint_and_complete(self):
        estate = make_estate("e1", tenants_with_days(-3, 0, 45, 90, 91, -1, 365))

        feed = rank_notifications([estate])

        overdue = {n.tenant_id for n in feed.overdue}
        upcoming = {n.tenant_id for n in feed.upcoming}
        assert overdue.isdisjoint(upcoming)
        assert overdue == {"t0", "t5"}
        assert upcoming == {"t1", "t2", "t3"}
        assert all(n.type == NotificationType.OVERDUE for n in feed.overdue)
        assert all(n.type == NotificationType.UPCOMING for n in feed.upcoming)

    def test_upcoming_soonest_first(self):
        estate = make_estate("e1", tenants_with_days(60, 2, 30))
        feed = rank_notifications([estate])
        assert [n.days_left for n in feed.upcoming] == [2, 30, 60]

    def test_days_versus_amount_ranking(self):
        estate = make_estate(
            "e1",
            [
                make_tenant("recent", days_left=-1, outstanding_balance=500),
                make_tenant("stale", days_left=-10, outstanding_balance=100),
            ],
        )

        by_days = rank_notifications([estate], overdue_sort="days")
        by_amount = rank_notifications([estate], overdue_sort="amount")

        assert [n.tenant_id for n in by_days.overdue] == ["stale", "recent"]
        assert [n.tenant_id for n in by_amount.overdue] == ["recent", "stale"]

    def test_sorting_is_idempotent(self):
        estate = make_estate("e1", tenants_with_days(-4, -30, -1, -30))
        once = rank_notifications([estate]).overdue
        resorted = sorted(once, key=lambda n: n.days_left)
        assert resorted == once

    def test_configurable_window(self):
        estate = make_estate("e1", tenants_with_days(10, 45))
        feed = rank_notifications([estate], upcoming_window_days=30)
        assert [n.days_left for n in feed.upcoming] == [10]

    def test_entries_carry_estate(self):
        estate = make_estate("e7", tenants_with_days(-2), name="Oak Ridge")
        entry = rank_notifications([estate]).overdue[0]
        assert entry.estate_id == "e7"
        assert entry.estate_name == "Oak Ridge"


class TestCharts:
    def test_short_label(self):
        assert short_estate_label("Palm Grove Estate") == "Palm Grove"
        assert short_estate_label("Lekki Gardens") == "Lekki"

    def test_revenue_chart(self):
        estate = with_rollups(
            make_estate("e1", [make_tenant("a", rent_expected=100, rent_paid=70)])
        )
        chart = revenue_chart([estate])
        assert chart.bars[0].expected == 100
        assert chart.bars[0].paid == 70
        assert [(s.name, s.value) for s in chart.split] == [
            ("Paid", 70),
            ("Outstanding", 30),
        ]
