"""Authentication, user-management and audit-log API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import NotFoundError
from ...database import get_db
from ..commons import BaseResponse, PaginatedResponse, PaginationParams
from . import crud, services
from .dependencies import AdminUser, CurrentUser, SuperAdminUser
from .models import RoleSlug, UserStatus
from .schemas import (
    AuditLogResponse,
    ChangePasswordRequest,
    LoginRequest,
    RoleChangeRequest,
    TokenResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])
users_router = APIRouter(prefix="/users", tags=["Users"])
audit_router = APIRouter(prefix="/audit-log", tags=["Audit Log"])


# ----- Authentication -----


@router.post("/login", response_model=BaseResponse[TokenResponse])
async def login(
    login_data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Authenticate user and return an access token."""
    tokens = await services.authenticate_user(
        db=db, email=login_data.email, password=login_data.password
    )
    return BaseResponse(
        success=True,
        message=f"Welcome back, {tokens.user.first_name}!",
        data=tokens,
    )


@router.get("/me", response_model=BaseResponse[UserResponse])
async def get_current_user_info(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get current user's profile."""
    user = await crud.get_user_by_id(db, current_user.id)
    if not user:
        raise NotFoundError("User not found")
    return BaseResponse(success=True, data=UserResponse.model_validate(user))


@router.post("/change-password", response_model=BaseResponse[None])
async def change_password(
    current_user: CurrentUser,
    password_data: ChangePasswordRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Change current user's password."""
    await services.change_password(
        db=db,
        user_id=current_user.id,
        current_password=password_data.current_password,
        new_password=password_data.new_password,
    )
    return BaseResponse(success=True, message="Password changed successfully")


# ----- Users -----


@users_router.get("", response_model=BaseResponse[list[UserResponse]])
async def list_users(
    current_user: AdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    status: UserStatus | None = Query(None),
    role: RoleSlug | None = Query(None),
):
    """List users, optionally filtered by status or role."""
    users = await crud.get_users(db, status=status, role=role)
    return BaseResponse(
        success=True, data=[UserResponse.model_validate(u) for u in users]
    )


@users_router.post("", response_model=BaseResponse[UserResponse])
async def create_user(
    data: UserCreate,
    current_user: SuperAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Create a user (super admin only)."""
    user = await services.create_user(db, data, current_user)
    return BaseResponse(
        success=True,
        message="User created successfully",
        data=UserResponse.model_validate(user),
    )


@users_router.put("/{user_id}", response_model=BaseResponse[UserResponse])
async def update_user(
    user_id: int,
    data: UserUpdate,
    current_user: SuperAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    user = await services.update_user(db, user_id, data, current_user)
    return BaseResponse(
        success=True,
        message="User updated successfully",
        data=UserResponse.model_validate(user),
    )


@users_router.put("/{user_id}/role", response_model=BaseResponse[UserResponse])
async def change_user_role(
    user_id: int,
    data: RoleChangeRequest,
    current_user: SuperAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    user = await services.change_role(db, user_id, data.role, current_user)
    return BaseResponse(
        success=True,
        message="User role updated successfully",
        data=UserResponse.model_validate(user),
    )


@users_router.post("/{user_id}/approve", response_model=BaseResponse[UserResponse])
async def approve_user(
    user_id: int,
    current_user: SuperAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    user = await services.set_user_status(db, user_id, UserStatus.ACTIVE, current_user)
    return BaseResponse(
        success=True,
        message="User approved",
        data=UserResponse.model_validate(user),
    )


@users_router.post("/{user_id}/reject", response_model=BaseResponse[UserResponse])
async def reject_user(
    user_id: int,
    current_user: SuperAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    user = await services.set_user_status(
        db, user_id, UserStatus.INACTIVE, current_user
    )
    return BaseResponse(
        success=True,
        message="User rejected",
        data=UserResponse.model_validate(user),
    )


@users_router.delete("/{user_id}", response_model=BaseResponse[None])
async def delete_user(
    user_id: int,
    current_user: SuperAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    await services.delete_user(db, user_id, current_user)
    return BaseResponse(success=True, message="User deleted successfully")


# ----- Audit log -----


@audit_router.get("", response_model=BaseResponse[PaginatedResponse[AuditLogResponse]])
async def list_audit_log(
    current_user: AdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    pagination: Annotated[PaginationParams, Depends()],
    user_id: int | None = Query(None),
):
    """Get user-management audit entries, newest first."""
    entries, total = await crud.get_audit_logs(
        db, user_id=user_id, skip=pagination.offset, limit=pagination.page_size
    )
    return BaseResponse(
        success=True,
        data=PaginatedResponse.from_items(
            items=[AuditLogResponse.model_validate(e) for e in entries],
            total=total,
            page=pagination.page,
            page_size=pagination.page_size,
        ),
    )
