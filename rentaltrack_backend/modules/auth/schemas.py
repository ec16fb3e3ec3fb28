"""Authentication schemas for RentalTrack."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, EmailStr, Field

from .models import RoleSlug, UserStatus

# ----- User Schemas -----


class UserBase(BaseModel):
    """Base user schema."""

    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=120)
    last_name: str | None = Field(None, max_length=120)


class UserCreate(UserBase):
    """Schema for creating a user (super admin only)."""

    password: str = Field(..., min_length=8, max_length=128)
    role: RoleSlug = RoleSlug.READ_ONLY
    status: UserStatus = UserStatus.ACTIVE


class UserUpdate(BaseModel):
    """Schema for updating a user's profile fields."""

    first_name: str | None = Field(None, min_length=1, max_length=120)
    last_name: str | None = Field(None, max_length=120)
    status: UserStatus | None = None


class RoleChangeRequest(BaseModel):
    role: RoleSlug


class UserResponse(UserBase):
    """Schema for user response."""

    id: int
    role: RoleSlug
    status: UserStatus
    last_login_at: datetime | None = None
    created_by: int | None = None
    created_at: datetime

    class Config:
        from_attributes = True


# ----- Auth Schemas -----


class LoginRequest(BaseModel):
    """Schema for login request."""

    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    """Schema for token response."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    user: UserResponse


class ChangePasswordRequest(BaseModel):
    """Schema for password change request."""

    current_password: str
    new_password: str = Field(..., min_length=8, max_length=128)


class AuthenticatedUser(BaseModel):
    """Authenticated user context for request handling."""

    id: int
    email: str
    first_name: str = ""
    last_name: str | None = None
    role_slug: RoleSlug
    status: UserStatus = UserStatus.ACTIVE

    @property
    def full_name(self) -> str:
        if self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.first_name


# ----- Audit Log Schemas -----


class AuditLogResponse(BaseModel):
    id: int
    action_type: str
    target_user_id: int | None = None
    performed_by: int | None = None
    details: dict[str, Any] | None = None
    created_at: datetime

    class Config:
        from_attributes = True
