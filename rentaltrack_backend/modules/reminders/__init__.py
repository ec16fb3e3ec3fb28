"""Reminder lists for RentalTrack: upcoming rent reviews and birthdays."""

from .routers import router

__all__ = ["router"]
