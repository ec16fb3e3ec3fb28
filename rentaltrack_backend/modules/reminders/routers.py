"""Reminder API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import get_db
from ..auth.dependencies import ReadUser
from ..commons import BaseResponse
from . import services
from .schemas import BirthdayReminder, RateIncreaseReminder

router = APIRouter(prefix="/reminders", tags=["Reminders"])


@router.get(
    "/rental-increases", response_model=BaseResponse[list[RateIncreaseReminder]]
)
async def get_rental_increase_reminders(
    current_user: ReadUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    month: int | None = Query(None, ge=1, le=12, description="Reminder month"),
    min_months: int | None = Query(
        None, ge=0, description="Minimum months since the last increase"
    ),
):
    """Get properties due for a rent review, longest since increase first."""
    reminders = await services.get_rate_increase_reminders(
        db, month=month, min_months_since_increase=min_months
    )
    return BaseResponse(success=True, data=reminders)


@router.get("/birthdays", response_model=BaseResponse[list[BirthdayReminder]])
async def get_birthday_reminders(
    current_user: ReadUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    month: int | None = Query(None, ge=1, le=12, description="Defaults to this month"),
):
    """Get landlord and tenant birthdays in a month, ordered by day."""
    reminders = await services.get_birthday_reminders(db, month=month)
    return BaseResponse(success=True, data=reminders)
