"""Reminder schemas for RentalTrack."""

from datetime import date

from pydantic import BaseModel


class RateIncreaseReminder(BaseModel):
    """A property whose rent is coming up for review."""

    property_address: str
    service_type: str
    latest_rate_increase_date: date
    latest_rental_rate: float
    next_allowable_rental_increase_date: date
    next_allowable_rental_rate: float
    reminder_date: date
    months_since_increase: int


class BirthdayReminder(BaseModel):
    """A landlord or tenant with a birthday in the requested month.

    ``address`` is the owner's residential address for landlords and the
    rented property for tenants.
    """

    name: str
    role: str
    contact_number: str
    birthday: date
    property_address: str
    address: str
