"""Archive models for RentLedger."""

import enum
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ArchiveType(str, enum.Enum):
    """Kinds of entity that can be archived."""

    ESTATE = "ESTATE"
    TENANT = "TENANT"
    PHASE = "PHASE"
    LANDLORD = "LANDLORD"


class ArchivedItem(BaseModel):
    """A deleted entity kept for restore or permanent deletion.

    ``data`` holds the serialized entity. A PHASE entry stores
    ``{"phase_name": ..., "tenants": [...]}``. TENANT and PHASE entries
    remember their parent estate by id and name, since the parent may be
    archived later.
    """

    id: str
    original_id: str
    type: ArchiveType
    name: str
    deleted_at: datetime
    data: dict[str, Any] = Field(default_factory=dict)
    parent_estate_id: str | None = None
    parent_estate_name: str | None = None
