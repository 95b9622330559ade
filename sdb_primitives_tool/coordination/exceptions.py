"""
Custom exceptions for coordination primitives.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from typing import Any


class CoordinationError(Exception):
    """Base exception for coordination operations."""

    pass


class StoreUnavailableError(CoordinationError):
    """Transient SimpleDB or transport failure, safe to retry."""

    pass


class AWSThrottlingError(StoreUnavailableError):
    """SimpleDB throttling occurred."""

    pass


class ConditionFailedError(CoordinationError):
    """Conditional write rejected (expected value no longer current)."""

    pass


class LockHeldError(ConditionFailedError):
    """Lock is held by another client and its lease has not expired."""

    pass


class ItemNotFoundError(CoordinationError):
    """Item does not exist in the domain."""

    pass


class AttributeMissingError(CoordinationError):
    """Item exists but lacks a required attribute."""

    pass


class CorruptRecordError(CoordinationError):
    """Attribute value cannot be parsed."""

    pass


class DomainNotFoundError(CoordinationError):
    """SimpleDB domain does not exist."""

    pass


class AWSPermissionError(CoordinationError):
    """AWS permission denied."""

    pass


class RetriesExhaustedError(CoordinationError):
    """Retry budget used up without a successful attempt."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class OperationFailedError(CoordinationError):
    """
    Terminal failure of a counter or mutex operation.

    Subclasses form a closed set, one per operation family. Each carries a
    human-readable reason and renders as {"error": ..., "reason": ...}.
    """

    error = "Operation failed"

    def __init__(self, reason: str):
        super().__init__(f"{self.error}: {reason}")
        self.reason = reason

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error, "reason": self.reason}


class IncrementFailedError(OperationFailedError):
    """Counter add/increment/decrement failed."""

    error = "Increment failed"


class ReadFailedError(OperationFailedError):
    """Counter read failed."""

    error = "Read failed"


class LockFailedError(OperationFailedError):
    """Mutex acquisition failed."""

    error = "Lock failed"


class UnlockFailedError(OperationFailedError):
    """Mutex release failed."""

    error = "Unlock failed"
