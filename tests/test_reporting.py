"""Report builders, CSV export and the monthly expiry report."""

from datetime import date

import pytest

from rentledger_backend.core.exceptions import ResourceNotFoundError, ValidationError
from rentledger_backend.modules.auth.models import ReportingSettings
from rentledger_backend.modules.portfolio.ledger import refresh_estate
from rentledger_backend.modules.portfolio.models import PaymentRecord
from rentledger_backend.modules.reporting.builders import (
    ReportKind,
    build_report,
    build_tenant_report,
    render_report_csv,
    report_filename,
)
from rentledger_backend.modules.reporting.expiry import (
    NO_MATCH_MESSAGE,
    build_expiry_report,
)

from .factories import TODAY, make_estate, make_tenant


def reporting_settings(**overrides) -> ReportingSettings:
    fields = {"enabled": True, "recipient_email": "ops@gabinas.com", "send_day": 1}
    fields.update(overrides)
    return ReportingSettings(**fields)


class TestBuildReport:
    def test_estate_report(self, state):
        report = build_report(state.estates, ReportKind.ESTATE, "e1", today=TODAY)

        assert report.subtitle == "Estate Report: Palm Grove Estate"
        assert report.details == "Manager: Kunle Bello"
        assert [r.tenant_name for r in report.rows] == ["Ada Obi", "Bola Ade"]
        assert [r.location for r in report.rows] == ["A / Phase 1", "A"]
        assert report.property_count == 2
        assert report.totals.expected == 1_500_000
        assert report.totals.paid == 1_100_000
        assert report.totals.outstanding == 400_000

    def test_unknown_estate(self, state):
        with pytest.raises(ResourceNotFoundError):
            build_report(state.estates, ReportKind.ESTATE, "missing", today=TODAY)

    def test_landlord_report_sorted_by_estate_then_tenant(self, state):
        report = build_report(state.estates, ReportKind.LANDLORD, "Yemi Idowu", today=TODAY)

        assert [(r.estate_name, r.tenant_name) for r in report.rows] == [
            ("Cedar Court", "Chidi Eze"),
            ("Palm Grove Estate", "Bola Ade"),
        ]
        assert [r.index for r in report.rows] == [1, 2]
        assert report.details == "Consolidated Property Portfolio"

    def test_time_report_lists_overlapping_leases(self, state):
        report = build_report(
            state.estates, ReportKind.TIME, "2025-06-15", "01/08/2025", today=TODAY
        )

        assert [r.tenant_id for r in report.rows] == ["t3", "t2"]
        assert report.end_date == date(2025, 8, 1)
        assert report.details == "From: 15 June 2025 To: 1 August 2025"

    def test_time_report_needs_readable_bounds(self, state):
        with pytest.raises(ValidationError):
            build_report(state.estates, ReportKind.TIME, "2025-01-01", "", today=TODAY)

    def test_tenant_report_numbers_payments(self, state):
        tenant = state.get_tenant("e1", "t1").model_copy(
            update={
                "payment_history": [
                    PaymentRecord(id="p1", date=date(2025, 1, 5), amount=400_000),
                    PaymentRecord(id="p2", date=date(2025, 3, 5), amount=200_000),
                ]
            }
        )

        report = build_tenant_report(tenant, state.get_estate("e1"), today=TODAY)

        assert report.estate_name == "Palm Grove Estate"
        assert [line.index for line in report.payments] == [1, 2]
        assert report.payments[1].payment.id == "p2"


class TestCsv:
    def test_rows_and_total(self, state):
        report = build_report(state.estates, ReportKind.ESTATE, "e1", today=TODAY)

        lines = render_report_csv(report).splitlines()

        assert lines[0] == "#,Block/Phase,Tenant,Type,Expected,Paid,Owed,Status"
        assert lines[1].startswith("1,A / Phase 1,Ada Obi,2 Bedroom,1000000.00,600000.00")
        assert lines[-1] == ",TOTAL,2 properties,,1500000.00,1100000.00,400000.00,"

    def test_landlord_csv_uses_estate_column(self, state):
        report = build_report(state.estates, ReportKind.LANDLORD, "Yemi Idowu", today=TODAY)
        assert render_report_csv(report).splitlines()[0].startswith("#,Estate,")

    def test_filename(self, state):
        report = build_report(state.estates, ReportKind.LANDLORD, "Yemi Idowu", today=TODAY)
        assert report_filename(report, "Mr. Yemi") == "Report_LANDLORD_Mr__Yemi.csv"


class TestExpiryReport:
    def test_lists_urgent_leases(self, state):
        body = build_expiry_report(state.estates, reporting_settings(), TODAY)

        assert "TO: ops@gabinas.com" in body
        assert "SUBJECT: Monthly Property Expiry Report - Sun Jun 01 2025" in body
        urgent = body.split("URGENT: LEASE EXPIRING IN < 3 MONTHS")[1]
        urgent = urgent.split("NOTICE:")[0]
        assert "- Ada Obi" in urgent
        assert "- Bola Ade" in urgent
        assert "Outstanding: ₦400,000" in urgent
        assert "Chidi Eze" not in body

    def test_six_month_bucket(self):
        estate = refresh_estate(
            make_estate(
                "e1", [make_tenant("t1", name="Dayo", rent_due_date=date(2025, 10, 1))]
            ),
            TODAY,
        )
        body = build_expiry_report([estate], reporting_settings(), TODAY)
        notice = body.split("NOTICE: LEASE EXPIRING IN < 6 MONTHS")[1]
        assert "- Dayo" in notice
        assert "(122 days left)" in notice

    def test_landlord_scope(self, state):
        settings = reporting_settings(scope="LANDLORD", target_id="Yemi Idowu")
        body = build_expiry_report(state.estates, settings, TODAY)
        assert "Bola Ade" in body
        assert "Ada Obi" not in body

    def test_no_match(self, state):
        settings = reporting_settings(scope="ESTATE", target_id="e2")
        assert build_expiry_report(state.estates, settings, TODAY) == NO_MATCH_MESSAGE

    def test_not_due_today(self, state):
        settings = reporting_settings(send_day=15)
        assert build_expiry_report(state.estates, settings, TODAY) is None

    def test_disabled(self, state):
        settings = reporting_settings(enabled=False)
        assert build_expiry_report(state.estates, settings, TODAY) is None

    def test_missing_recipient(self, state):
        settings = reporting_settings(recipient_email="")
        assert build_expiry_report(state.estates, settings, TODAY) is None
