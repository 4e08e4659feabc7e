"""Loading, saving and backing up the portfolio state."""

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel

from ..archive.models import ArchivedItem
from ..auth.models import UserProfile
from ..portfolio.models import Estate
from ..portfolio.seed import DEFAULT_LANDLORDS, PROPERTY_CATEGORIES, initial_users
from ..portfolio.state import PortfolioState
from .store import DocumentStore

logger = logging.getLogger(__name__)

# State field -> document name
COLLECTIONS = {
    "estates": "estates",
    "landlords": "landlords",
    "property_types": "propertyTypes",
    "archived_items": "archivedItems",
    "registered_users": "registeredUsers",
}


class BackupPayload(BaseModel):
    """A full or partial backup. Absent collections are left alone on restore."""

    estates: list[Estate] | None = None
    landlords: list[str] | None = None
    property_types: list[str] | None = None
    archived_items: list[ArchivedItem] | None = None
    registered_users: list[UserProfile] | None = None


def _seed(field: str) -> Any:
    if field == "landlords":
        return list(DEFAULT_LANDLORDS)
    if field == "property_types":
        return list(PROPERTY_CATEGORIES)
    if field == "registered_users":
        return [u.model_dump(mode="json") for u in initial_users()]
    return []


async def load_state(store: DocumentStore) -> PortfolioState:
    """Read every collection, seeding and persisting any that is missing."""
    raw: dict[str, Any] = {}
    for field, name in COLLECTIONS.items():
        data = await store.load(name)
        if data is None:
            data = _seed(field)
            await store.save(name, data)
            logger.info(f"Seeded missing collection '{name}'")
        raw[field] = data
    return PortfolioState.model_validate(raw)


async def save_state(
    store: DocumentStore, state: PortfolioState, fields: Iterable[str]
) -> None:
    """Overwrite only the named collections of ``state``."""
    dumped = state.model_dump(mode="json")
    for field in fields:
        await store.save(COLLECTIONS[field], dumped[field])


def export_backup(state: PortfolioState) -> dict[str, Any]:
    """Every collection, keyed by state field name."""
    return state.model_dump(mode="json")


async def restore_backup(store: DocumentStore, payload: BackupPayload) -> PortfolioState:
    """Overwrite every collection present in ``payload`` and reload the state."""
    present = [f for f in COLLECTIONS if getattr(payload, f) is not None]
    dumped = payload.model_dump(mode="json")
    for field in present:
        await store.save(COLLECTIONS[field], dumped[field])
    logger.info(f"Restored backup collections: {', '.join(present) or 'none'}")
    return await load_state(store)
