"""
Custom exception classes for consistent error handling across all modules.
"""

from typing import Any


class RentalTrackException(Exception):
    """Base exception for all RentalTrack related errors."""

    status_code = 400

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(RentalTrackException):
    """Raised when a resource is not found."""

    status_code = 404

    def __init__(
        self, message: str = "Resource not found", details: dict[str, Any] | None = None
    ):
        super().__init__(message, details)


class ResourceAlreadyExistsError(RentalTrackException):
    """Raised when trying to create a resource that already exists."""

    status_code = 409

    def __init__(
        self,
        resource_type: str,
        identifier: Any,
        details: dict[str, Any] | None = None,
    ):
        message = f"{resource_type} with identifier '{identifier}' already exists"
        super().__init__(message, details)
        self.resource_type = resource_type
        self.identifier = identifier


class ValidationError(RentalTrackException):
    """Raised when data validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        details: dict[str, Any] | None = None,
    ):
        if field:
            full_message = f"Validation error for field '{field}': {message}"
        else:
            full_message = message
        super().__init__(full_message, details)
        self.field = field
        self.value = value


class InvalidInputError(ValidationError):
    """Raised for input the rate engine refuses, e.g. a non-positive rate."""


class InvalidDateError(InvalidInputError):
    """Raised when a date value cannot be parsed."""

    def __init__(self, value: Any, field: str | None = None):
        super().__init__(f"Invalid date value: {value!r}", field=field, value=value)


class NoRateRecordError(NotFoundError):
    """Raised when a rate increase is processed for a property with no rate record."""

    def __init__(self, property_address: str):
        super().__init__(
            f"No rental rate information found for property: {property_address}",
            {"property_address": property_address},
        )
        self.property_address = property_address


class DuplicateRateRecordError(ResourceAlreadyExistsError):
    """Raised when a strict initial rate is recorded for a property that has one."""

    def __init__(self, property_address: str):
        super().__init__("Rental rate record", property_address)
        self.property_address = property_address


class PermissionError(RentalTrackException):
    """Raised when user lacks permission to perform an action."""

    status_code = 403

    def __init__(
        self, action: str, resource_type: str, details: dict[str, Any] | None = None
    ):
        message = f"Permission denied: cannot {action} {resource_type}"
        super().__init__(message, details)
        self.action = action
        self.resource_type = resource_type


class AuthenticationError(RentalTrackException):
    """Raised when authentication fails."""

    status_code = 401

    def __init__(
        self,
        message: str = "Authentication failed",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)


class InconsistentStateWarning(UserWarning):
    """Issued when a rate snapshot no longer matches the newest history entry."""
