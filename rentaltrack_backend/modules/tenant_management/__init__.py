"""Tenant management module for RentalTrack.

Tenants are kept per property; moved-out tenants form the tenant history.
"""

from .models import Tenant
from .routers import router
from .tenancy import Tenancy

__all__ = [
    # Models
    "Tenant",
    "Tenancy",
    # Routers
    "router",
]
