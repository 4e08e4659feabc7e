"""Reporting API routes."""

from fastapi import APIRouter
from fastapi.responses import Response

from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse
from ..sync.dependencies import State, Today
from . import services
from .builders import Report, TenantReport, render_report_csv, report_filename
from .schemas import ExpiryReport, ReportRequest, TenantReportRequest

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.post("", response_model=BaseResponse[Report])
async def create_report(
    data: ReportRequest, current_user: CurrentUser, state: State, today: Today
):
    """Build an estate, landlord or time-interval report."""
    report = services.generate_report(state, current_user, data, today)
    return BaseResponse(success=True, data=report)


@router.post("/csv")
async def download_report_csv(
    data: ReportRequest, current_user: CurrentUser, state: State, today: Today
):
    """Build a report and return it as a CSV download."""
    report = services.generate_report(state, current_user, data, today)
    filename = report_filename(report, data.value)
    return Response(
        content=render_report_csv(report),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/tenant", response_model=BaseResponse[TenantReport])
async def create_tenant_report(
    data: TenantReportRequest, current_user: CurrentUser, state: State, today: Today
):
    """Build an individual tenant statement."""
    report = services.generate_tenant_report(state, current_user, data, today)
    return BaseResponse(success=True, data=report)


@router.get("/expiry", response_model=BaseResponse[ExpiryReport])
async def get_expiry_report(current_user: CurrentUser, state: State, today: Today):
    """Get today's automated expiry report for the current user's settings."""
    body = services.expiry_report_for(state, current_user, today)
    return BaseResponse(success=True, data=ExpiryReport(body=body))
