"""Errors raised by the event pipeline."""
from enum import Enum


class EventShareError(Exception):
    """Base class for event pipeline failures."""


class NotAuthenticated(EventShareError):
    """No user identifier could be resolved for the caller."""

    def __init__(self, message: str = "User not authenticated"):
        super().__init__(message)


class InvalidEventDraft(EventShareError, ValueError):
    """The submitted event is missing required fields or is malformed."""


class AggregationFailed(EventShareError):
    """One of the event discovery lookups failed."""


class StorageFailureReason(str, Enum):
    AUTH_FAILURE = "auth_failure"
    OTHER = "other"


class StorageWriteFailed(EventShareError):
    """An object could not be written to storage.

    Attributes:
        key: Object key that failed.
        reason: Whether the storage rejected our credentials or failed
            for any other reason.
    """

    def __init__(self, key: str, reason: StorageFailureReason = StorageFailureReason.OTHER):
        self.key = key
        self.reason = reason
        super().__init__(f"Failed to write {key} ({reason.value})")

    @property
    def is_auth_failure(self) -> bool:
        return self.reason is StorageFailureReason.AUTH_FAILURE


class RecordWriteFailed(EventShareError):
    """The record store reported a failed write."""


class DeletionFailed(EventShareError):
    """The record store raised while deleting an event."""
