"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..portfolio.state import PortfolioState
from ..sync.dependencies import get_state
from .jwt_service import decode_access_token
from .models import UserProfile, UserRole

security = HTTPBearer()


def fallback_profile(email: str) -> UserProfile:
    """Profile for an authenticated e-mail with no registered user: read-only, unrestricted."""
    return UserProfile(
        name=email.split("@")[0],
        username=email,
        email=email,
        role=UserRole.VIEW_ONLY,
        is_verified=False,
    )


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    state: Annotated[PortfolioState, Depends(get_state)],
) -> UserProfile:
    """Resolve the bearer token's e-mail against the registered users."""
    payload = decode_access_token(credentials.credentials)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    email = payload["email"]
    return state.find_user(email) or fallback_profile(email)


def require_role(*allowed_roles: UserRole):
    """Dependency factory for role-based access control.

    Usage:
        @router.post("/landlords")
        async def add_landlord(
            current_user: UserProfile = Depends(require_role(UserRole.SUPER_ADMIN))
        ):
            ...
    """
    roles = set(allowed_roles)

    async def role_checker(
        current_user: Annotated[UserProfile, Depends(get_current_user)],
    ) -> UserProfile:
        if current_user.role not in roles:
            required = ", ".join(sorted(r.value for r in roles))
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required roles: {required}",
            )
        return current_user

    return role_checker


# Type aliases for dependency injection
CurrentUser = Annotated[UserProfile, Depends(get_current_user)]
EditorUser = Annotated[
    UserProfile,
    Depends(require_role(UserRole.SUPER_ADMIN, UserRole.ADMIN, UserRole.VIEW_EDIT)),
]
SuperAdminUser = Annotated[UserProfile, Depends(require_role(UserRole.SUPER_ADMIN))]
