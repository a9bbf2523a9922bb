from __future__ import annotations

from typing import Optional

from .enums import CheckInErrorKind


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class CheckInError(DomainError):
    """A check-in attempt failure that maps onto a structured error kind."""

    kind: CheckInErrorKind = CheckInErrorKind.PERSISTENCE_FAILURE


class PositionError(CheckInError):
    """Raised by a position source when the device position cannot be read."""


class PermissionDeniedError(PositionError):
    kind = CheckInErrorKind.PERMISSION_DENIED


class PositionUnavailableError(PositionError):
    kind = CheckInErrorKind.POSITION_UNAVAILABLE


class PositionTimeoutError(PositionError):
    kind = CheckInErrorKind.TIMEOUT


class LocationResolutionError(CheckInError):
    """Base for target location resolution failures."""

    def __init__(self, message: str, *, location_ref: Optional[str] = None):
        super().__init__(message)
        self.location_ref = location_ref


class LocationNotFoundError(LocationResolutionError):
    kind = CheckInErrorKind.LOCATION_NOT_FOUND


class LocationNotConfiguredError(LocationResolutionError):
    """The location exists but its GPS setup is incomplete."""

    kind = CheckInErrorKind.LOCATION_NOT_CONFIGURED


class NetworkError(CheckInError):
    kind = CheckInErrorKind.NETWORK_FAILURE


class StorageError(DomainError):
    """Raised by repositories when the backing store fails."""


class DuplicateRecordError(StorageError):
    """Raised when a record with the same idempotency key already exists."""

    def __init__(self, idempotency_key: str):
        super().__init__(f"Duplicate check-in record: {idempotency_key}")
        self.idempotency_key = idempotency_key
