"""Dashboard aggregates: metrics, notifications and charts."""

from .charts import RevenueChart
from .metrics import DashboardMetrics
from .notifications import NotificationEntry, NotificationFeed, NotificationType

__all__ = [
    "DashboardMetrics",
    "NotificationEntry",
    "NotificationFeed",
    "NotificationType",
    "RevenueChart",
]
