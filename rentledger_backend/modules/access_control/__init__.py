"""Access scopes and scope-based data visibility."""

from .models import (
    AccessScope,
    GlobalScope,
    RestrictedScope,
    landlord_estate_key,
    phase_key,
)
from .visibility import accessible_landlords, filter_estates_by_scope, visible_estate

__all__ = [
    "AccessScope",
    "GlobalScope",
    "RestrictedScope",
    "landlord_estate_key",
    "phase_key",
    "accessible_landlords",
    "filter_estates_by_scope",
    "visible_estate",
]
