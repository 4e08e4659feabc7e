"""Archive restore and permanent deletion."""

import logging

from ..portfolio.state import PortfolioState
from ..sync.snapshot import save_state
from ..sync.store import DocumentStore
from .models import ArchivedItem

logger = logging.getLogger(__name__)

ARCHIVE_FIELDS = ["estates", "landlords", "archived_items"]


def list_archived_items(state: PortfolioState) -> list[ArchivedItem]:
    """Newest deletions first."""
    return sorted(state.archived_items, key=lambda i: i.deleted_at, reverse=True)


async def restore_item(
    store: DocumentStore, state: PortfolioState, item_id: str
) -> PortfolioState:
    item = state.get_archived_item(item_id)
    new_state = state.restore_archived_item(item_id)
    await save_state(store, new_state, ARCHIVE_FIELDS)
    logger.info(f"Restored archived {item.type.value.lower()} '{item.name}' ({item_id})")
    return new_state


async def delete_item(store: DocumentStore, state: PortfolioState, item_id: str) -> None:
    item = state.get_archived_item(item_id)
    new_state = state.permanently_delete_archived_item(item_id)
    await save_state(store, new_state, ["archived_items"])
    logger.info(f"Permanently deleted archived {item.type.value.lower()} '{item.name}'")
