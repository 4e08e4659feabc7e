"""Authentication and user management module for RentLedger.

Routers and dependencies are imported from their submodules; they depend
on the portfolio state, which itself depends on these models.
"""

from .models import (
    EDIT_ROLES,
    NotificationSettings,
    ReportingSettings,
    UserProfile,
    UserRole,
)

__all__ = [
    "EDIT_ROLES",
    "UserProfile",
    "UserRole",
    "NotificationSettings",
    "ReportingSettings",
]
