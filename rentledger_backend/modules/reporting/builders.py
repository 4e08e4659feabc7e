"""Report projections and CSV export.

Reports are plain data; rendering them to a document is left to the client.
"""

import csv
import datetime
import enum
import io

from pydantic import BaseModel, Field

from ...core.exceptions import ResourceNotFoundError, ValidationError
from ...core.formatting import format_long_date, parse_lease_date
from ..portfolio.ledger import tenant_totals
from ..portfolio.models import Estate, PaymentRecord, Tenant

DEFAULT_REPORT_TITLE = "Gabinas Properties Limited"


class ReportKind(str, enum.Enum):
    ESTATE = "ESTATE"
    LANDLORD = "LANDLORD"
    TIME = "TIME"


class ReportRow(BaseModel):
    index: int
    # Block/phase for estate reports, estate name otherwise
    location: str
    estate_name: str
    tenant_id: str
    tenant_name: str
    flat_type: str
    expected: float
    paid: float
    outstanding: float
    status: str


class ReportTotals(BaseModel):
    expected: float = 0
    paid: float = 0
    outstanding: float = 0


class Report(BaseModel):
    kind: ReportKind
    title: str
    subtitle: str
    details: str
    generated_on: datetime.date
    end_date: datetime.date
    property_count: int = 0
    totals: ReportTotals = Field(default_factory=ReportTotals)
    rows: list[ReportRow] = Field(default_factory=list)


class TenantPaymentLine(BaseModel):
    index: int
    payment: PaymentRecord


class TenantReport(BaseModel):
    title: str
    generated_on: datetime.date
    estate_id: str
    estate_name: str
    tenant: Tenant
    payments: list[TenantPaymentLine] = Field(default_factory=list)


def _block_and_phase(tenant: Tenant) -> str:
    if tenant.phase:
        return f"{tenant.block} / {tenant.phase}"
    return tenant.block


def _parse_bound(value: str, field: str) -> datetime.date:
    try:
        return parse_lease_date(value)
    except ValueError as e:
        raise ValidationError(str(e), field=field, value=value) from e


def build_report(
    estates: list[Estate],
    kind: ReportKind,
    value: str,
    secondary_value: str = "",
    today: datetime.date | None = None,
    title: str = DEFAULT_REPORT_TITLE,
) -> Report:
    """Build an estate, landlord or time-interval report.

    ESTATE takes an estate id, LANDLORD a landlord name, and TIME a start
    date in ``value`` with an end date in ``secondary_value``; it lists
    every lease overlapping that interval.

    Raises:
        ResourceNotFoundError: If the estate does not exist
        ValidationError: If a TIME bound is missing or unreadable
    """
    today = today or datetime.date.today()
    end_date = today
    selected: list[tuple[Estate, Tenant]] = []

    if kind == ReportKind.ESTATE:
        estate = next((e for e in estates if e.id == value), None)
        if estate is None:
            raise ResourceNotFoundError("Estate", value)
        selected = [(estate, t) for t in estate.tenants]
        subtitle = f"Estate Report: {estate.name}"
        details = f"Manager: {estate.manager}"
    elif kind == ReportKind.LANDLORD:
        selected = [(e, t) for e in estates for t in e.tenants if t.landlord == value]
        subtitle = f"Landlord Report: {value}"
        details = "Consolidated Property Portfolio"
    else:
        start = _parse_bound(value, "value")
        end_date = _parse_bound(secondary_value, "secondary_value")
        selected = [
            (e, t)
            for e in estates
            for t in e.tenants
            if t.rent_start_date <= end_date and t.rent_due_date >= start
        ]
        subtitle = "Time Interval Report"
        details = f"From: {format_long_date(start)} To: {format_long_date(end_date)}"

    selected.sort(key=lambda pair: (pair[0].name.casefold(), pair[1].name.casefold()))
    expected, paid, _ = tenant_totals(t for _, t in selected)
    rows = [
        ReportRow(
            index=i,
            location=_block_and_phase(t) if kind == ReportKind.ESTATE else e.name,
            estate_name=e.name,
            tenant_id=t.id,
            tenant_name=t.name,
            flat_type=t.flat_type,
            expected=t.rent_expected,
            paid=t.rent_paid,
            outstanding=t.outstanding_balance,
            status=t.status.value,
        )
        for i, (e, t) in enumerate(selected, start=1)
    ]
    return Report(
        kind=kind,
        title=title,
        subtitle=subtitle,
        details=details,
        generated_on=today,
        end_date=end_date,
        property_count=len(rows),
        totals=ReportTotals(
            expected=expected,
            paid=paid,
            outstanding=sum(t.outstanding_balance for _, t in selected),
        ),
        rows=rows,
    )


def build_tenant_report(
    tenant: Tenant,
    estate: Estate,
    today: datetime.date | None = None,
    title: str = DEFAULT_REPORT_TITLE,
) -> TenantReport:
    """Individual tenant statement with the numbered payment history."""
    return TenantReport(
        title=title,
        generated_on=today or datetime.date.today(),
        estate_id=estate.id,
        estate_name=estate.name,
        tenant=tenant,
        payments=[
            TenantPaymentLine(index=i, payment=p)
            for i, p in enumerate(tenant.payment_history, start=1)
        ],
    )


def render_report_csv(report: Report) -> str:
    """Render a report's rows and totals as CSV text."""
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    location_header = "Block/Phase" if report.kind == ReportKind.ESTATE else "Estate"
    writer.writerow(
        ["#", location_header, "Tenant", "Type", "Expected", "Paid", "Owed", "Status"]
    )
    for row in report.rows:
        writer.writerow(
            [
                row.index,
                row.location,
                row.tenant_name,
                row.flat_type,
                f"{row.expected:.2f}",
                f"{row.paid:.2f}",
                f"{row.outstanding:.2f}",
                row.status,
            ]
        )
    writer.writerow(
        [
            "",
            "TOTAL",
            f"{report.property_count} properties",
            "",
            f"{report.totals.expected:.2f}",
            f"{report.totals.paid:.2f}",
            f"{report.totals.outstanding:.2f}",
            "",
        ]
    )
    return buffer.getvalue()


def report_filename(report: Report, value: str) -> str:
    safe = "".join(ch if ch.isalnum() else "_" for ch in value)
    return f"Report_{report.kind.value}_{safe}.csv"
