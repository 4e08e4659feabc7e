"""Archive of deleted estates, tenants, phases and landlords."""

from .models import ArchivedItem, ArchiveType

__all__ = ["ArchivedItem", "ArchiveType"]
