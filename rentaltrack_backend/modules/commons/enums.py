"""Enums shared by several modules."""

import enum


class ServiceType(str, enum.Enum):
    """Management service a landlord has signed up for."""

    FULL_SERVICE = "Full-Service Management"
    TENANT_REPLACEMENT = "Tenant Replacement Service"
