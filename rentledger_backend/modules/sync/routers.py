"""Backup export and restore routes."""

import logging
from typing import Any

from fastapi import APIRouter

from ..auth.dependencies import SuperAdminUser
from ..commons import BaseResponse
from .dependencies import State, Store
from .snapshot import BackupPayload, export_backup, restore_backup

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/backup", tags=["Backup"])


@router.get("", response_model=BaseResponse[dict[str, Any]])
async def get_backup(current_user: SuperAdminUser, state: State):
    """Export every collection."""
    logger.info(f"Backup exported by {current_user.email}")
    return BaseResponse(success=True, data=export_backup(state))


@router.post("/restore", response_model=BaseResponse[dict[str, Any]])
async def post_restore(
    payload: BackupPayload, current_user: SuperAdminUser, store: Store
):
    """Overwrite the collections present in the payload."""
    restored = await restore_backup(store, payload)
    return BaseResponse(
        success=True,
        message="Backup restored successfully",
        data=export_backup(restored),
    )
