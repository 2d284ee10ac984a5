"""Custom exceptions for the application."""
from typing import Any


class RecordNotFound(Exception):
    """Raised when a record is not found in the store."""

    def __init__(self, entity_name: str, entity_id: Any):
        """
        Initialize the exception.

        Args:
            entity_name: Name of the entity that was not found
            entity_id: ID of the entity that was not found
        """
        super().__init__(f"{entity_name} with ID {entity_id} not found")
        self.entity_name = entity_name
        self.entity_id = entity_id


class InvalidIdentifier(Exception):
    """Raised when a caller-supplied identifier is not a 24-character hex string."""

    def __init__(self, value: Any):
        super().__init__(f"Invalid identifier: {value!r}")
        self.value = value


class StoreQueryFailed(Exception):
    """Raised when the record store rejects or fails to execute an operation."""

    def __init__(self, operation: str, cause: BaseException):
        """
        Initialize the exception.

        Args:
            operation: Short description of the store operation that failed
            cause: The underlying driver error
        """
        super().__init__(f"Store operation '{operation}' failed: {cause}")
        self.operation = operation
        self.cause = cause


class DecodeFailed(Exception):
    """Raised when a stored document cannot be decoded into a domain object."""

    def __init__(self, field: str, kind: str, reason: str = "missing or malformed"):
        """
        Initialize the exception.

        Args:
            field: Name of the first field that failed to decode
            kind: Entity kind being decoded (e.g. "task")
            reason: Human readable description of the failure
        """
        super().__init__(f"Cannot decode {kind}: field '{field}' is {reason}")
        self.field = field
        self.kind = kind
        self.reason = reason
