"""Overdue and upcoming-expiry alerts ranked by urgency."""

import datetime
import enum
from typing import Literal

from pydantic import BaseModel, Field

from ..portfolio.models import Estate

DEFAULT_UPCOMING_WINDOW_DAYS = 90


class NotificationType(str, enum.Enum):
    OVERDUE = "OVERDUE"
    UPCOMING = "UPCOMING"


class NotificationEntry(BaseModel):
    type: NotificationType
    tenant_id: str
    tenant_name: str
    estate_id: str
    estate_name: str
    days_left: int
    outstanding_balance: float
    rent_start_date: datetime.date


class NotificationFeed(BaseModel):
    overdue: list[NotificationEntry] = Field(default_factory=list)
    upcoming: list[NotificationEntry] = Field(default_factory=list)


OverdueSort = Literal["days", "amount"]


def rank_notifications(
    estates: list[Estate],
    overdue_sort: OverdueSort = "days",
    upcoming_window_days: int = DEFAULT_UPCOMING_WINDOW_DAYS,
) -> NotificationFeed:
    """Partition tenants into overdue and upcoming alerts.

    Overdue tenants (``days_left < 0``) come most overdue first, or with
    ``overdue_sort="amount"`` largest outstanding balance first. Upcoming
    tenants (``0 <= days_left <= upcoming_window_days``) come soonest
    first. Later leases appear in neither list. Both sorts are stable.
    """
    overdue: list[NotificationEntry] = []
    upcoming: list[NotificationEntry] = []
    for estate in estates:
        for tenant in estate.tenants:
            if tenant.days_left < 0:
                bucket, kind = overdue, NotificationType.OVERDUE
            elif tenant.days_left <= upcoming_window_days:
                bucket, kind = upcoming, NotificationType.UPCOMING
            else:
                continue
            bucket.append(
                NotificationEntry(
                    type=kind,
                    tenant_id=tenant.id,
                    tenant_name=tenant.name,
                    estate_id=estate.id,
                    estate_name=estate.name,
                    days_left=tenant.days_left,
                    outstanding_balance=tenant.outstanding_balance,
                    rent_start_date=tenant.rent_start_date,
                )
            )

    if overdue_sort == "amount":
        overdue.sort(key=lambda n: n.outstanding_balance, reverse=True)
    else:
        overdue.sort(key=lambda n: n.days_left)
    upcoming.sort(key=lambda n: n.days_left)
    return NotificationFeed(overdue=overdue, upcoming=upcoming)
