"""User management business logic."""

import logging

from ..portfolio.state import PortfolioState
from ..sync.snapshot import save_state
from ..sync.store import DocumentStore
from .models import UserProfile
from .schemas import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


async def create_user(
    store: DocumentStore, state: PortfolioState, data: UserCreate
) -> UserProfile:
    """Register a profile; the matching login must exist with the identity provider."""
    profile_data = data.model_dump(exclude_none=True)
    profile = UserProfile.model_validate(
        {**profile_data, "email": data.email.strip().lower()}
    )
    new_state = state.add_user(profile)
    await save_state(store, new_state, ["registered_users"])
    logger.info(f"Registered user {profile.email} as {profile.role.value}")
    return profile


async def update_user(
    store: DocumentStore, state: PortfolioState, email: str, data: UserUpdate
) -> UserProfile:
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    new_state = state.update_user(email, changes)
    await save_state(store, new_state, ["registered_users"])
    logger.info(f"Updated user {email}: {', '.join(sorted(changes)) or 'no changes'}")
    return new_state.find_user(email)
