"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import PermissionError
from ...database import get_db
from . import crud
from .jwt_service import decode_access_token
from .models import ROLE_LEVELS, RoleSlug
from .schemas import AuthenticatedUser

security = HTTPBearer()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthenticatedUser:
    """Decode the bearer token and load the user it names.

    Role and status come from the database, so a role change or a
    deactivation takes effect on the next request.
    """
    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise _unauthorized("Invalid or expired token")

    try:
        user_id = int(payload["sub"])
    except (KeyError, ValueError) as e:
        raise _unauthorized(f"Invalid token payload: {e}") from e

    user = await crud.get_user_by_id(db, user_id)
    if user is None or not user.is_active:
        raise _unauthorized("User not found or inactive")

    return AuthenticatedUser(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        role_slug=user.role,
        status=user.status,
    )


def has_role(user: AuthenticatedUser, minimum: RoleSlug) -> bool:
    """Whether ``user`` holds ``minimum`` or any role above it."""
    return ROLE_LEVELS[user.role_slug.value] >= ROLE_LEVELS[minimum.value]


def require_role(minimum: RoleSlug):
    """Dependency factory for hierarchical role checks.

    Usage:
        @router.delete("/{user_id}")
        async def delete_user(
            current_user: Annotated[
                AuthenticatedUser, Depends(require_role(RoleSlug.SUPER_ADMIN))
            ],
        ):
            ...
    """

    async def role_checker(
        current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    ) -> AuthenticatedUser:
        if not has_role(current_user, minimum):
            raise PermissionError(
                "access",
                f"resources reserved for {minimum.value} or higher",
                details={"required_role": minimum.value},
            )
        return current_user

    return role_checker


# Type aliases for dependency injection
CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
ReadUser = Annotated[AuthenticatedUser, Depends(require_role(RoleSlug.READ_ONLY))]
WriteUser = Annotated[AuthenticatedUser, Depends(require_role(RoleSlug.STANDARD))]
AdminUser = Annotated[AuthenticatedUser, Depends(require_role(RoleSlug.ADMIN))]
SuperAdminUser = Annotated[
    AuthenticatedUser, Depends(require_role(RoleSlug.SUPER_ADMIN))
]
