"""Archive API routes."""

from fastapi import APIRouter

from ..auth.dependencies import EditorUser, SuperAdminUser
from ..commons import BaseResponse
from ..sync.dependencies import State, Store
from . import services
from .models import ArchivedItem

router = APIRouter(prefix="/archive", tags=["Archive"])


@router.get("", response_model=BaseResponse[list[ArchivedItem]])
async def list_archive(current_user: EditorUser, state: State):
    """Get archived items, newest first."""
    return BaseResponse(success=True, data=services.list_archived_items(state))


@router.post("/{item_id}/restore", response_model=BaseResponse[list[ArchivedItem]])
async def restore_archived_item(
    item_id: str, current_user: SuperAdminUser, state: State, store: Store
):
    """Restore an archived estate, tenant, phase or landlord."""
    new_state = await services.restore_item(store, state, item_id)
    return BaseResponse(
        success=True,
        message="Item restored successfully",
        data=services.list_archived_items(new_state),
    )


@router.delete("/{item_id}", response_model=BaseResponse[None])
async def delete_archived_item(
    item_id: str, current_user: SuperAdminUser, state: State, store: Store
):
    """Permanently delete an archived item."""
    await services.delete_item(store, state, item_id)
    return BaseResponse(success=True, message="Item permanently deleted")
