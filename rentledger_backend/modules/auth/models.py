"""User profile models for RentLedger.

Role decides edit privilege; the access scope decides data visibility.
"""

import enum
from typing import Literal

from pydantic import BaseModel, Field

from ..access_control.models import AccessScope, GlobalScope


class UserRole(str, enum.Enum):
    """User roles, from most to least privileged."""

    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    VIEW_EDIT = "VIEW_EDIT"
    VIEW_ONLY = "VIEW_ONLY"


EDIT_ROLES = frozenset({UserRole.SUPER_ADMIN, UserRole.ADMIN, UserRole.VIEW_EDIT})


class NotificationSettings(BaseModel):
    rent_due_alerts: bool = True
    outstanding_payment_alerts: bool = True
    days_threshold: int = Field(default=30, ge=0)
    email_notifications: bool = False
    in_app_notifications: bool = True


class ReportingSettings(BaseModel):
    """Monthly expiry-report automation."""

    enabled: bool = False
    recipient_email: str = ""
    send_day: int = Field(default=1, ge=1, le=31)
    include_expiring_6_months: bool = True
    include_expiring_3_months: bool = True
    scope: Literal["ALL", "ESTATE", "LANDLORD"] = "ALL"
    # Estate id or landlord name, depending on scope
    target_id: str | None = None


class UserProfile(BaseModel):
    """A registered console user. Credentials live with the identity provider."""

    name: str
    username: str
    email: str
    phone: str = ""
    role: UserRole = UserRole.VIEW_ONLY
    is_verified: bool = False
    notification_settings: NotificationSettings = Field(
        default_factory=NotificationSettings
    )
    reporting_settings: ReportingSettings | None = None
    access_scope: AccessScope = Field(default_factory=GlobalScope)

    @property
    def can_edit(self) -> bool:
        return self.role in EDIT_ROLES
