"""Authentication models for RentalTrack.

Single-organisation user store with a four-level role hierarchy and an
audit trail of user-management actions.
"""

import enum
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Enum, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from ...core.utils import utc_now
from ...database import Base, TimestampMixin


class RoleSlug(str, enum.Enum):
    """Available user roles, lowest privilege last."""

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    STANDARD = "standard"
    READ_ONLY = "read_only"


# Higher level includes every permission of the levels below it
ROLE_LEVELS: dict[str, int] = {
    RoleSlug.READ_ONLY.value: 1,
    RoleSlug.STANDARD.value: 2,
    RoleSlug.ADMIN.value: 3,
    RoleSlug.SUPER_ADMIN.value: 4,
}


class UserStatus(str, enum.Enum):
    """Account approval status."""

    PENDING = "pending"
    ACTIVE = "active"
    INACTIVE = "inactive"


class AuditAction(str, enum.Enum):
    """User-management events written to the audit log."""

    LOGIN = "login"
    USER_CREATED = "user_created"
    USER_UPDATED = "user_updated"
    ROLE_CHANGED = "role_changed"
    USER_APPROVED = "user_approved"
    USER_REJECTED = "user_rejected"
    USER_DELETED = "user_deleted"
    PASSWORD_CHANGED = "password_changed"


class User(TimestampMixin, Base):
    """Application user."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(120), nullable=False)
    last_name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    role: Mapped[RoleSlug] = mapped_column(
        Enum(RoleSlug), nullable=False, default=RoleSlug.READ_ONLY
    )
    status: Mapped[UserStatus] = mapped_column(
        Enum(UserStatus), nullable=False, default=UserStatus.PENDING
    )
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_by: Mapped[int | None] = mapped_column(Integer, nullable=True)

    @property
    def full_name(self) -> str:
        """Get user's full name."""
        if self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.first_name

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"


class UserAuditLog(Base):
    """Append-only record of who did what to which user."""

    __tablename__ = "user_audit_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    action_type: Mapped[str] = mapped_column(String(50), nullable=False)
    target_user_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    performed_by: Mapped[int | None] = mapped_column(Integer, nullable=True)
    details: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )

    __table_args__ = (
        Index("ix_user_audit_log_target", "target_user_id"),
        Index("ix_user_audit_log_performed_by", "performed_by"),
    )

    def __repr__(self) -> str:
        return f"<UserAuditLog(id={self.id}, action={self.action_type})>"
