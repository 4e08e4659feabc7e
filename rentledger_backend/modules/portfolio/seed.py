"""Seed data for the portfolio collections.

Used when the document store holds no copy of a collection yet.
"""

from ..access_control.models import GlobalScope, RestrictedScope
from ..auth.models import NotificationSettings, UserProfile, UserRole

DEFAULT_LANDLORDS = [
    "Yemi Idowu",
    "Mr. Muyiwa Abiodun",
    "Mr. Seun Olufeko",
    "Ezebunwo Wigwe",
    "Edward Okonofua",
    "Matthias Osayi-Mennon",
    "SMHJ Investment Limited",
    "Alhaji Abuja",
    "Mr. Femi Osibajo",
    "STB Leasing Limited",
]

# Broad categories listed in the navigation
PROPERTY_CATEGORIES = [
    "1 Bedroom",
    "2 Bedroom",
    "3 Bedroom",
    "4 Bedroom",
]

# Options offered when a tenant's house type is entered
TENANT_FLAT_TYPES = [
    "1 Bedroom",
    "2 Bedroom",
    "2 Bedroom Basic",
    "2 Bedroom Maxi",
    "3 Bedroom",
    "4 Bedroom",
    "Standard Flat",
]


def initial_users() -> list[UserProfile]:
    """The accounts every fresh installation starts with."""
    return [
        UserProfile(
            name="Super Administrator",
            username="superadmin",
            email="superadmin@gabinas.com",
            role=UserRole.SUPER_ADMIN,
            is_verified=True,
            notification_settings=NotificationSettings(email_notifications=True),
            access_scope=GlobalScope(),
        ),
        UserProfile(
            name="Mr. Muyiwa Abiodun",
            username="boriswole@gmail.com",
            email="boriswole@gmail.com",
            role=UserRole.VIEW_ONLY,
            is_verified=True,
            notification_settings=NotificationSettings(email_notifications=False),
            access_scope=RestrictedScope(allowed_landlords=["Mr. Muyiwa Abiodun"]),
        ),
    ]
