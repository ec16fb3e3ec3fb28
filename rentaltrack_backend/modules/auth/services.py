"""Authentication and user-management business logic."""

from sqlalchemy.ext.asyncio import AsyncSession

from ...config import settings
from ...core.exceptions import (
    AuthenticationError,
    NotFoundError,
    ResourceAlreadyExistsError,
    ValidationError,
)
from ...core.logging import get_logger
from . import crud
from .jwt_service import create_access_token, get_token_expiry_seconds
from .models import AuditAction, RoleSlug, User, UserStatus
from .password_service import verify_password
from .schemas import (
    AuthenticatedUser,
    TokenResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
)

logger = get_logger(__name__)


async def authenticate_user(db: AsyncSession, email: str, password: str) -> TokenResponse:
    """Authenticate a user and issue an access token.

    Raises:
        AuthenticationError: If the credentials are wrong or the account is
            not active
    """
    user = await crud.get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        logger.info("Failed login attempt", extra={"email": email})
        raise AuthenticationError("Invalid email or password")

    if user.status == UserStatus.PENDING:
        raise AuthenticationError("Account is pending approval")
    if user.status != UserStatus.ACTIVE:
        raise AuthenticationError("Account is disabled")

    await crud.update_user_last_login(db, user)
    await crud.create_audit_log(
        db, AuditAction.LOGIN.value, target_user_id=user.id, performed_by=user.id
    )
    await db.commit()

    access_token = create_access_token(
        user_id=user.id, email=user.email, role_slug=user.role.value
    )
    logger.info("User logged in", extra={"user_id": user.id})

    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        expires_in=get_token_expiry_seconds(),
        user=UserResponse.model_validate(user),
    )


async def _get_user_or_404(db: AsyncSession, user_id: int) -> User:
    user = await crud.get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError(f"User with ID {user_id} not found")
    return user


async def create_user(
    db: AsyncSession, data: UserCreate, performed_by: AuthenticatedUser
) -> User:
    """Create a user on behalf of a super admin.

    Raises:
        ResourceAlreadyExistsError: If the email is already registered
    """
    if await crud.get_user_by_email(db, data.email):
        raise ResourceAlreadyExistsError("User", data.email)

    user = await crud.create_user(
        db,
        email=data.email,
        password=data.password,
        first_name=data.first_name,
        last_name=data.last_name,
        role=data.role,
        status=data.status,
        created_by=performed_by.id,
    )
    await crud.create_audit_log(
        db,
        AuditAction.USER_CREATED.value,
        target_user_id=user.id,
        performed_by=performed_by.id,
        details={"email": user.email, "role": user.role.value},
    )
    await db.commit()
    logger.info("User created", extra={"user_id": user.id, "role": user.role.value})
    return user


async def update_user(
    db: AsyncSession, user_id: int, data: UserUpdate, performed_by: AuthenticatedUser
) -> User:
    user = await _get_user_or_404(db, user_id)
    changes = data.model_dump(exclude_unset=True, mode="json")
    await crud.update_user(db, user, **data.model_dump(exclude_unset=True))
    await crud.create_audit_log(
        db,
        AuditAction.USER_UPDATED.value,
        target_user_id=user.id,
        performed_by=performed_by.id,
        details=changes,
    )
    await db.commit()
    return user


async def change_role(
    db: AsyncSession, user_id: int, role: RoleSlug, performed_by: AuthenticatedUser
) -> User:
    """Change a user's role.

    Raises:
        ValidationError: If a user tries to change their own role
    """
    if user_id == performed_by.id:
        raise ValidationError("You cannot change your own role")

    user = await _get_user_or_404(db, user_id)
    previous = user.role
    user.role = role
    await crud.create_audit_log(
        db,
        AuditAction.ROLE_CHANGED.value,
        target_user_id=user.id,
        performed_by=performed_by.id,
        details={"from": previous.value, "to": role.value},
    )
    await db.commit()
    logger.info(
        "User role changed",
        extra={"user_id": user.id, "from_role": previous.value, "to_role": role.value},
    )
    return user


async def set_user_status(
    db: AsyncSession,
    user_id: int,
    status: UserStatus,
    performed_by: AuthenticatedUser,
) -> User:
    """Approve (``ACTIVE``) or reject (``INACTIVE``) a user account."""
    user = await _get_user_or_404(db, user_id)
    user.status = status
    action = (
        AuditAction.USER_APPROVED
        if status == UserStatus.ACTIVE
        else AuditAction.USER_REJECTED
    )
    await crud.create_audit_log(
        db, action.value, target_user_id=user.id, performed_by=performed_by.id
    )
    await db.commit()
    return user


async def delete_user(
    db: AsyncSession, user_id: int, performed_by: AuthenticatedUser
) -> None:
    """Delete a user.

    Raises:
        ValidationError: If a user tries to delete their own account
    """
    if user_id == performed_by.id:
        raise ValidationError("You cannot delete your own account")

    user = await _get_user_or_404(db, user_id)
    email = user.email
    await crud.delete_user(db, user)
    await crud.create_audit_log(
        db,
        AuditAction.USER_DELETED.value,
        target_user_id=user_id,
        performed_by=performed_by.id,
        details={"email": email},
    )
    await db.commit()


async def change_password(
    db: AsyncSession, user_id: int, current_password: str, new_password: str
) -> None:
    """Change a user's own password.

    Raises:
        ValidationError: If current password is incorrect
    """
    user = await _get_user_or_404(db, user_id)

    if not verify_password(current_password, user.password_hash):
        raise ValidationError("Current password is incorrect")

    await crud.update_user_password(db, user, new_password)
    await crud.create_audit_log(
        db,
        AuditAction.PASSWORD_CHANGED.value,
        target_user_id=user.id,
        performed_by=user.id,
    )
    await db.commit()


async def ensure_initial_admin(db: AsyncSession) -> User | None:
    """Create the configured super admin if it does not exist yet.

    Does nothing unless ``init_admin_email`` and ``init_admin_password`` are
    both configured.
    """
    if not settings.init_admin_email or not settings.init_admin_password:
        return None

    existing = await crud.get_user_by_email(db, settings.init_admin_email)
    if existing:
        return existing

    user = await crud.create_user(
        db,
        email=settings.init_admin_email,
        password=settings.init_admin_password,
        first_name=settings.init_admin_first_name,
        last_name=settings.init_admin_last_name,
        role=RoleSlug.SUPER_ADMIN,
        status=UserStatus.ACTIVE,
    )
    await crud.create_audit_log(
        db,
        AuditAction.USER_CREATED.value,
        target_user_id=user.id,
        details={"email": user.email, "role": user.role.value, "bootstrap": True},
    )
    await db.commit()
    logger.info("Initial super admin created", extra={"user_id": user.id})
    return user
