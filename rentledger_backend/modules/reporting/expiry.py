"""Monthly lease-expiry report body."""

import datetime

from ...core.formatting import format_naira
from ..auth.models import ReportingSettings
from ..portfolio.models import Estate, Tenant

NO_MATCH_MESSAGE = "No properties matched criteria for today's report."
EMPTY_SECTION = "No tenants in this category."

SHORT_HORIZON_DAYS = 90
LONG_HORIZON_DAYS = 180


def _select_tenants(
    estates: list[Estate], settings: ReportingSettings
) -> list[tuple[Estate, Tenant]]:
    if settings.scope == "ESTATE" and settings.target_id:
        estates = [e for e in estates if e.id == settings.target_id]
    selected = []
    for estate in estates:
        for tenant in estate.tenants:
            if (
                settings.scope == "LANDLORD"
                and settings.target_id
                and tenant.landlord != settings.target_id
            ):
                continue
            selected.append((estate, tenant))
    return selected


def _entry(estate: Estate, tenant: Tenant, with_balance: bool) -> str:
    unit = " ".join(part for part in (tenant.block, tenant.flat_number or "") if part)
    lines = [
        f"- {tenant.name}",
        f"  Estate: {estate.name}",
        f"  Unit: {unit} ({tenant.flat_type})",
        f"  Due Date: {tenant.rent_due_date.isoformat()} ({tenant.days_left} days left)",
        f"  Landlord: {tenant.landlord}",
    ]
    if with_balance:
        lines.append(f"  Outstanding: {format_naira(tenant.outstanding_balance)}")
    return "\n".join(lines)


def _section(heading: str, entries: list[str]) -> str:
    rule = "=" * 40
    body = "\n\n".join(entries) if entries else EMPTY_SECTION
    return f"{rule}\n{heading}\n{rule}\n{body}"


def build_expiry_report(
    estates: list[Estate],
    settings: ReportingSettings,
    today: datetime.date,
    sender: str = "no-reply@rentledger.local",
) -> str | None:
    """Compose the scheduled expiry report for ``today``.

    Returns None when reporting is disabled, has no recipient, or today is
    not the configured send day. Leases due within 90 days (including
    overdue ones) go in the urgent section; leases due in more than 90 and
    at most 180 days go in the notice section.
    """
    if not settings.enabled or not settings.recipient_email:
        return None
    if today.day != settings.send_day:
        return None

    urgent: list[str] = []
    notice: list[str] = []
    for estate, tenant in _select_tenants(estates, settings):
        days_left = tenant.days_left
        if (
            settings.include_expiring_6_months
            and SHORT_HORIZON_DAYS < days_left <= LONG_HORIZON_DAYS
        ):
            notice.append(_entry(estate, tenant, with_balance=False))
        if settings.include_expiring_3_months and days_left <= SHORT_HORIZON_DAYS:
            urgent.append(_entry(estate, tenant, with_balance=True))

    if not urgent and not notice:
        return NO_MATCH_MESSAGE

    return "\n\n".join(
        [
            f"FROM: {sender}\n"
            f"TO: {settings.recipient_email}\n"
            f"SUBJECT: Monthly Property Expiry Report - {today.strftime('%a %b %d %Y')}",
            "Dear Admin,",
            "Here is your automated monthly report for properties approaching lease expiry.",
            _section("URGENT: LEASE EXPIRING IN < 3 MONTHS", urgent),
            _section("NOTICE: LEASE EXPIRING IN < 6 MONTHS", notice),
            "Best Regards,\nRentLedger Automated System",
        ]
    )
