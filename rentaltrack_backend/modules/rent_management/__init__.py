"""Rental rate snapshots, history and the increase engine."""

from .models import RateHistory, RateIncrease
from .routers import history_router, process_router, router
from .services import RateRecordMode

__all__ = [
    # Models
    "RateIncrease",
    "RateHistory",
    # Enums
    "RateRecordMode",
    # Routers
    "router",
    "history_router",
    "process_router",
]
