"""Common schemas and utilities shared across modules."""

from .schemas import BaseResponse, PaginatedResponse, PaginationParams

__all__ = [
    "BaseResponse",
    "PaginatedResponse",
    "PaginationParams",
]
