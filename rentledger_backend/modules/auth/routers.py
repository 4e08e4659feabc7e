"""Identity and user management API routes."""

from fastapi import APIRouter

from ..commons import BaseResponse
from ..sync.dependencies import State, Store
from . import services
from .dependencies import CurrentUser, SuperAdminUser
from .models import UserProfile
from .schemas import UserCreate, UserUpdate

router = APIRouter(prefix="/auth", tags=["Authentication"])
users_router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=BaseResponse[UserProfile])
async def get_me(current_user: CurrentUser):
    """Get the profile resolved from the bearer token."""
    return BaseResponse(success=True, data=current_user)


@users_router.get("", response_model=BaseResponse[list[UserProfile]])
async def list_users(current_user: SuperAdminUser, state: State):
    """Get all registered users."""
    return BaseResponse(success=True, data=state.registered_users)


@users_router.post("", response_model=BaseResponse[UserProfile])
async def create_user(
    data: UserCreate, current_user: SuperAdminUser, state: State, store: Store
):
    """Register a user profile."""
    profile = await services.create_user(store, state, data)
    return BaseResponse(
        success=True,
        message="User profile added. Ensure a matching login exists.",
        data=profile,
    )


@users_router.put("/{email}", response_model=BaseResponse[UserProfile])
async def update_user(
    email: str,
    data: UserUpdate,
    current_user: SuperAdminUser,
    state: State,
    store: Store,
):
    """Update a user's role, settings or access scope."""
    profile = await services.update_user(store, state, email, data)
    return BaseResponse(
        success=True, message="User updated successfully", data=profile
    )
