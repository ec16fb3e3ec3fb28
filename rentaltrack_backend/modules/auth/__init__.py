"""Authentication and user management for RentalTrack."""

from .dependencies import (
    AdminUser,
    CurrentUser,
    ReadUser,
    SuperAdminUser,
    WriteUser,
    get_current_user,
    require_role,
)
from .models import RoleSlug, User, UserAuditLog, UserStatus
from .routers import audit_router, router, users_router
from .schemas import AuthenticatedUser

__all__ = [
    # Models
    "User",
    "UserAuditLog",
    "RoleSlug",
    "UserStatus",
    # Routers
    "router",
    "users_router",
    "audit_router",
    # Dependencies
    "get_current_user",
    "require_role",
    "CurrentUser",
    "ReadUser",
    "WriteUser",
    "AdminUser",
    "SuperAdminUser",
    # Schemas
    "AuthenticatedUser",
]
