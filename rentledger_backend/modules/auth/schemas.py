"""User management schemas for RentLedger."""

from pydantic import BaseModel, Field

from ..access_control.models import AccessScope
from .models import NotificationSettings, ReportingSettings, UserRole


class UserCreate(BaseModel):
    """Schema for registering a user profile."""

    name: str = Field(..., min_length=1, max_length=255)
    username: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    phone: str = ""
    role: UserRole = UserRole.VIEW_ONLY
    is_verified: bool = False
    notification_settings: NotificationSettings = Field(
        default_factory=NotificationSettings
    )
    reporting_settings: ReportingSettings | None = None
    access_scope: AccessScope | None = None


class UserUpdate(BaseModel):
    """Schema for updating a user profile. The e-mail cannot change."""

    name: str | None = Field(None, min_length=1, max_length=255)
    username: str | None = Field(None, min_length=1, max_length=255)
    phone: str | None = None
    role: UserRole | None = None
    is_verified: bool | None = None
    notification_settings: NotificationSettings | None = None
    reporting_settings: ReportingSettings | None = None
    access_scope: AccessScope | None = None
