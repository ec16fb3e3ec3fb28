"""Core infrastructure for RentalTrack backend."""

from .exceptions import (
    AuthenticationError,
    DuplicateRateRecordError,
    InconsistentStateWarning,
    InvalidDateError,
    InvalidInputError,
    NoRateRecordError,
    NotFoundError,
    PermissionError,
    RentalTrackException,
    ResourceAlreadyExistsError,
    ValidationError,
)

__all__ = [
    "RentalTrackException",
    "NotFoundError",
    "ResourceAlreadyExistsError",
    "ValidationError",
    "InvalidInputError",
    "InvalidDateError",
    "NoRateRecordError",
    "DuplicateRateRecordError",
    "PermissionError",
    "AuthenticationError",
    "InconsistentStateWarning",
]
