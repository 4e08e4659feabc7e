"""Dashboard API routes."""

from fastapi import APIRouter, Query

from ...config import settings
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse
from ..portfolio.services import visible_estates
from ..sync.dependencies import State
from .charts import RevenueChart, revenue_chart
from .metrics import DashboardMetrics, calculate_metrics
from .notifications import NotificationFeed, OverdueSort, rank_notifications

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/metrics", response_model=BaseResponse[DashboardMetrics])
async def get_metrics(current_user: CurrentUser, state: State):
    """Get portfolio totals over the estates visible to the current user."""
    estates = visible_estates(state, current_user)
    return BaseResponse(success=True, data=calculate_metrics(estates))


@router.get("/notifications", response_model=BaseResponse[NotificationFeed])
async def get_notifications(
    current_user: CurrentUser,
    state: State,
    overdue_sort: OverdueSort = Query("days"),
):
    """Get overdue and upcoming lease alerts, most urgent first."""
    feed = rank_notifications(
        visible_estates(state, current_user),
        overdue_sort=overdue_sort,
        upcoming_window_days=settings.upcoming_window_days,
    )
    return BaseResponse(success=True, data=feed)


@router.get("/charts", response_model=BaseResponse[RevenueChart])
async def get_charts(current_user: CurrentUser, state: State):
    """Get per-estate revenue bars and the collected/outstanding split."""
    estates = visible_estates(state, current_user)
    return BaseResponse(success=True, data=revenue_chart(estates))
