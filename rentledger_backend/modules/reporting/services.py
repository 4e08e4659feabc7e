"""Reporting business logic: access checks and report assembly."""

import datetime
import logging

from ...config import settings
from ...core.exceptions import PermissionError
from ..auth.models import UserProfile, UserRole
from ..portfolio.services import get_visible_estate, get_visible_tenant, visible_estates
from ..portfolio.state import PortfolioState
from .builders import Report, TenantReport, build_report, build_tenant_report
from .expiry import build_expiry_report
from .schemas import ReportRequest, TenantReportRequest

logger = logging.getLogger(__name__)


def check_report_access(user: UserProfile, access_key: str | None) -> None:
    """View-only users must present the report access key.

    Raises:
        PermissionError: If the key is missing or wrong
    """
    if user.role != UserRole.VIEW_ONLY:
        return
    if access_key != settings.report_access_key:
        logger.warning(f"Report access key rejected for {user.email}")
        raise PermissionError("generate", "report")


def generate_report(
    state: PortfolioState, user: UserProfile, request: ReportRequest, today: datetime.date
) -> Report:
    check_report_access(user, request.access_key)
    report = build_report(
        visible_estates(state, user),
        request.kind,
        request.value,
        request.secondary_value,
        today=today,
        title=settings.company_name,
    )
    logger.info(
        f"Generated {request.kind.value} report '{request.value}' "
        f"with {report.property_count} rows for {user.email}"
    )
    return report


def generate_tenant_report(
    state: PortfolioState,
    user: UserProfile,
    request: TenantReportRequest,
    today: datetime.date,
) -> TenantReport:
    check_report_access(user, request.access_key)
    estate = get_visible_estate(state, user, request.estate_id)
    tenant = get_visible_tenant(state, user, request.estate_id, request.tenant_id)
    return build_tenant_report(tenant, estate, today=today, title=settings.company_name)


def expiry_report_for(
    state: PortfolioState, user: UserProfile, today: datetime.date
) -> str | None:
    """Today's expiry report for the user's reporting settings, if one is due."""
    if user.reporting_settings is None:
        return None
    return build_expiry_report(
        visible_estates(state, user),
        user.reporting_settings,
        today,
        sender=settings.report_sender,
    )
