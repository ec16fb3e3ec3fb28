"""Rental rate schemas for RentalTrack."""

from datetime import date, datetime

from pydantic import BaseModel, Field


class InitialRateRequest(BaseModel):
    """Initial rental rate of a tenancy."""

    property_address: str = Field(..., min_length=1, max_length=255)
    initial_rental_rate: float
    start_date: str = Field(..., description="YYYY-MM-DD")


class ProcessIncreaseRequest(BaseModel):
    """A rent increase taking effect on ``increase_date``."""

    property_address: str = Field(..., min_length=1, max_length=255)
    increase_date: str
    new_rate: float
    notes: str | None = None


class RateIncreaseUpdate(BaseModel):
    """Manual correction of a rate snapshot.

    Unset derived fields are recomputed when the date or rate changes.
    """

    latest_rate_increase_date: str | None = None
    latest_rental_rate: float | None = None
    next_allowable_rental_increase_date: str | None = None
    next_allowable_rental_rate: float | None = None
    reminder_date: str | None = None


class RateIncreaseResponse(BaseModel):
    id: int
    property_address: str
    latest_rate_increase_date: date
    latest_rental_rate: float
    next_allowable_rental_increase_date: date
    next_allowable_rental_rate: float
    reminder_date: date
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class RateHistoryResponse(BaseModel):
    id: int
    property_address: str
    increase_date: date
    previous_rate: float
    new_rate: float
    notes: str | None = None
    percentage_change: str
    created_at: datetime

    class Config:
        from_attributes = True


class ProcessIncreaseResponse(BaseModel):
    """Snapshot after the increase plus the ledger entry it produced."""

    rate_increase: RateIncreaseResponse
    history_entry: RateHistoryResponse
