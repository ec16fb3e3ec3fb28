"""Response envelopes shared by every router."""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from ...core.utils import utc_now

T = TypeVar("T")


class BaseResponse(BaseModel, Generic[T]):
    """``{success, message, data}`` wrapper; ``error`` is filled on failures."""

    success: bool = True
    message: str | None = None
    data: T | None = None
    error: Any | None = None
    timestamp: datetime = Field(default_factory=utc_now)


class PaginationParams(BaseModel):
    """``?page=&page_size=`` query parameters."""

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=50, ge=1, le=200)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


class PaginatedResponse(BaseModel, Generic[T]):
    items: list[T] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 50
    total_pages: int = 0

    @classmethod
    def from_items(cls, items: list[T], total: int, page: int, page_size: int):
        return cls(
            items=items,
            total=total,
            page=page,
            page_size=page_size,
            total_pages=-(-total // page_size) if page_size else 0,
        )
