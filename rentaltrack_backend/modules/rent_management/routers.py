"""Rental rate API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import get_db
from ..auth.dependencies import AdminUser, ReadUser, WriteUser
from ..commons import BaseResponse
from . import services
from .schemas import (
    InitialRateRequest,
    ProcessIncreaseRequest,
    ProcessIncreaseResponse,
    RateHistoryResponse,
    RateIncreaseResponse,
    RateIncreaseUpdate,
)
from .services import RateRecordMode

router = APIRouter(prefix="/rental-increases", tags=["Rental Increases"])
history_router = APIRouter(prefix="/rental-history", tags=["Rental Increases"])
process_router = APIRouter(prefix="/process-rental-increase", tags=["Rental Increases"])


@router.get("", response_model=BaseResponse[list[RateIncreaseResponse]])
async def list_rate_records(
    current_user: ReadUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get the rate snapshot of every property."""
    records = await services.list_rate_records(db)
    return BaseResponse(
        success=True,
        data=[RateIncreaseResponse.model_validate(r) for r in records],
    )


@router.post(
    "",
    response_model=BaseResponse[RateIncreaseResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_rate_record(
    data: InitialRateRequest,
    current_user: WriteUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Record the first rate of a property; fails if it already has one."""
    record = await services.record_initial_rate(
        db,
        data.property_address,
        data.initial_rental_rate,
        data.start_date,
        mode=RateRecordMode.CREATE,
    )
    return BaseResponse(
        success=True,
        message="Rental rate recorded successfully",
        data=RateIncreaseResponse.model_validate(record),
    )


@router.post(
    "/initial",
    response_model=BaseResponse[RateIncreaseResponse],
    status_code=status.HTTP_201_CREATED,
)
async def set_initial_rate(
    data: InitialRateRequest,
    current_user: WriteUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Record the initial rate of a new tenancy, replacing any existing snapshot."""
    record = await services.record_initial_rate(
        db,
        data.property_address,
        data.initial_rental_rate,
        data.start_date,
        mode=RateRecordMode.OVERWRITE,
    )
    return BaseResponse(
        success=True,
        message="Initial rental rate recorded successfully",
        data=RateIncreaseResponse.model_validate(record),
    )


@router.get(
    "/{property_address:path}", response_model=BaseResponse[RateIncreaseResponse]
)
async def get_rate_record(
    property_address: str,
    current_user: ReadUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    record = await services.get_rate_record(db, property_address)
    return BaseResponse(success=True, data=RateIncreaseResponse.model_validate(record))


@router.put(
    "/{property_address:path}", response_model=BaseResponse[RateIncreaseResponse]
)
async def update_rate_record(
    property_address: str,
    data: RateIncreaseUpdate,
    current_user: AdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Manually correct a rate snapshot (admin only)."""
    record = await services.update_rate_record(db, property_address, data)
    return BaseResponse(
        success=True,
        message="Rental rate updated successfully",
        data=RateIncreaseResponse.model_validate(record),
    )


@history_router.get(
    "/{property_address:path}", response_model=BaseResponse[list[RateHistoryResponse]]
)
async def get_rate_history(
    property_address: str,
    current_user: ReadUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get the rate ledger of a property, latest increase first."""
    entries = await services.list_rate_history(db, property_address)
    return BaseResponse(
        success=True,
        data=[RateHistoryResponse.model_validate(e) for e in entries],
    )


@process_router.post("", response_model=BaseResponse[ProcessIncreaseResponse])
async def process_rental_increase(
    data: ProcessIncreaseRequest,
    current_user: WriteUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Apply a rent increase to a property."""
    record, entry = await services.process_increase(
        db,
        data.property_address,
        data.increase_date,
        data.new_rate,
        data.notes,
    )
    return BaseResponse(
        success=True,
        message="Rental increase processed successfully",
        data=ProcessIncreaseResponse(
            rate_increase=RateIncreaseResponse.model_validate(record),
            history_entry=RateHistoryResponse.model_validate(entry),
        ),
    )
