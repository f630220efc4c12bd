"""Error types raised by liststore operations.

Every error aborts the operation that raised it before the record is
touched, so callers can rely on the record being unchanged whenever one
of these propagates.  Nothing is retried internally; retrying is the
caller's decision.
"""
from __future__ import annotations


class ListStoreError(Exception):
    """Base class for all liststore errors."""


class AllocationError(ListStoreError):
    """Raised when a record cannot be created.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    address:
        Hex form of the target address, when one was designated.
    """

    def __init__(self, message: str, address: str | None = None) -> None:
        self.address = address
        if address is not None:
            message = f"{message} (address {address})"
        super().__init__(message)


class AuthorizationError(ListStoreError):
    """Raised when the caller is not a validly authenticated principal."""

    def __init__(self, identity: str, operation: str) -> None:
        self.identity = identity
        self.operation = operation
        super().__init__(
            f"Principal {identity} is not authorized to {operation}: "
            "it did not present a valid signature."
        )


class CapacityExceeded(ListStoreError):
    """Raised when a mutation would grow a record past its reserved capacity.

    Parameters
    ----------
    required:
        Serialized size in bytes the record would have after the mutation.
    capacity:
        The record's fixed capacity in bytes.
    """

    def __init__(self, required: int, capacity: int) -> None:
        self.required = required
        self.capacity = capacity
        super().__init__(
            f"Record would need {required} bytes but its capacity is {capacity} bytes."
        )


class SerializationError(ListStoreError):
    """Raised when content or persisted bytes do not fit the record layout.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    offset:
        Byte offset within the record where decoding failed, if known.
    """

    def __init__(self, message: str, offset: int | None = None) -> None:
        self.offset = offset
        if offset is not None:
            message = f"{message} at offset {offset}"
        super().__init__(message)


class RecordNotFoundError(ListStoreError, KeyError):
    """Raised when no record has been allocated at an address."""

    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(f"No record exists at address {address}.")

    # KeyError.__str__ would repr() the message
    def __str__(self) -> str:
        return str(self.args[0])
