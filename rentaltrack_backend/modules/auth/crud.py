"""CRUD operations for authentication module."""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.utils import utc_now
from .models import RoleSlug, User, UserAuditLog, UserStatus
from .password_service import hash_password

# ----- User CRUD -----


async def get_user_by_id(db: AsyncSession, user_id: int) -> User | None:
    """Get a user by ID."""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Get a user by email, case-insensitively."""
    result = await db.execute(
        select(User).where(func.lower(User.email) == email.lower())
    )
    return result.scalar_one_or_none()


async def get_users(
    db: AsyncSession,
    status: UserStatus | None = None,
    role: RoleSlug | None = None,
) -> list[User]:
    query = select(User)
    if status is not None:
        query = query.where(User.status == status)
    if role is not None:
        query = query.where(User.role == role)
    result = await db.execute(query.order_by(User.created_at.desc(), User.id.desc()))
    return list(result.scalars().all())


async def create_user(
    db: AsyncSession,
    email: str,
    password: str,
    first_name: str,
    last_name: str | None = None,
    role: RoleSlug = RoleSlug.READ_ONLY,
    status: UserStatus = UserStatus.ACTIVE,
    created_by: int | None = None,
) -> User:
    """Create a new user."""
    user = User(
        email=email.lower(),
        password_hash=hash_password(password),
        first_name=first_name,
        last_name=last_name,
        role=role,
        status=status,
        created_by=created_by,
    )
    db.add(user)
    await db.flush()
    return user


async def update_user(db: AsyncSession, user: User, **kwargs) -> User:
    """Update a user."""
    for key, value in kwargs.items():
        if value is not None and hasattr(user, key):
            setattr(user, key, value)
    await db.flush()
    return user


async def update_user_last_login(db: AsyncSession, user: User) -> None:
    user.last_login_at = utc_now()
    await db.flush()


async def update_user_password(db: AsyncSession, user: User, new_password: str) -> None:
    user.password_hash = hash_password(new_password)
    await db.flush()


async def delete_user(db: AsyncSession, user: User) -> None:
    await db.delete(user)
    await db.flush()


# ----- Audit Log CRUD -----


async def create_audit_log(
    db: AsyncSession,
    action_type: str,
    target_user_id: int | None = None,
    performed_by: int | None = None,
    details: dict[str, Any] | None = None,
) -> UserAuditLog:
    """Append an audit log entry."""
    entry = UserAuditLog(
        action_type=action_type,
        target_user_id=target_user_id,
        performed_by=performed_by,
        details=details,
    )
    db.add(entry)
    await db.flush()
    return entry


async def get_audit_logs(
    db: AsyncSession,
    user_id: int | None = None,
    skip: int = 0,
    limit: int = 50,
) -> tuple[list[UserAuditLog], int]:
    """Get audit log entries, newest first.

    When ``user_id`` is given, only entries targeting that user are returned.

    Returns:
        Tuple of (list of entries, total count)
    """
    filters = []
    if user_id is not None:
        filters.append(UserAuditLog.target_user_id == user_id)

    count_result = await db.execute(
        select(func.count(UserAuditLog.id)).where(*filters)
    )
    total = count_result.scalar_one()

    result = await db.execute(
        select(UserAuditLog)
        .where(*filters)
        .order_by(UserAuditLog.created_at.desc(), UserAuditLog.id.desc())
        .offset(skip)
        .limit(limit)
    )
    return list(result.scalars().all()), total
