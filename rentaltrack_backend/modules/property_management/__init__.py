"""Property management module for RentalTrack.

Properties, their landlord owners, and the reconciled property view.
"""

from .models import Owner, Property, ServiceType
from .routers import landlords_router, owners_router, router

__all__ = [
    # Models
    "Property",
    "Owner",
    # Enums
    "ServiceType",
    # Routers
    "router",
    "landlords_router",
    "owners_router",
]
