"""
Typed exceptions for LeaseKeeper services.

Every exception carries a machine-readable ``code`` and an HTTP-equivalent
``status_code``; routes translate them with
``responses.error.error_from_exception``.

    LeaseKeeperError
    +-- ValidationError            (400)
    |   +-- InvalidDurationError
    |   +-- InvalidChannelError
    +-- UnauthorizedError          (401)
    +-- NotFoundError              (404)
    +-- DispatchFailureError       (502, never crosses appeal intake)
    +-- StorageFailureError        (500)
"""

from typing import Optional


class LeaseKeeperError(Exception):
    """Base exception for all LeaseKeeper domain errors."""

    code: str = "LEASEKEEPER_ERROR"
    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(LeaseKeeperError):
    """Input is missing a required field or has the wrong shape."""

    code: str = "VALIDATION_ERROR"
    status_code: int = 400

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class InvalidDurationError(ValidationError):
    code: str = "INVALID_DURATION"

    def __init__(self, duration: object, reason: str = "amount must be positive"):
        self.duration = duration
        super().__init__(f"Invalid rent duration {duration!r}: {reason}", field="rent_duration")


class InvalidChannelError(ValidationError):
    code: str = "INVALID_CHANNEL"

    def __init__(self, channel: object):
        self.channel = channel
        super().__init__(f"Invalid notification type: {channel!r}", field="channel")


class UnauthorizedError(LeaseKeeperError):
    code: str = "UNAUTHORIZED"
    status_code: int = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFoundError(LeaseKeeperError):
    """A referenced entity does not exist."""

    code: str = "NOT_FOUND"
    status_code: int = 404

    def __init__(self, entity: str, entity_id: object = None):
        self.entity = entity
        self.entity_id = entity_id
        if entity_id is None:
            super().__init__(f"{entity} not found")
        else:
            super().__init__(f"{entity} not found: {entity_id}")


class DispatchFailureError(LeaseKeeperError):
    """An outbound notification could not be delivered."""

    code: str = "DISPATCH_FAILURE"
    status_code: int = 502

    def __init__(self, destination: str, reason: str):
        self.destination = destination
        self.reason = reason
        super().__init__(f"Failed to send notification to {destination}: {reason}")


class StorageFailureError(LeaseKeeperError):
    """The store rejected a write; the surrounding operation was rolled back."""

    code: str = "STORAGE_FAILURE"
    status_code: int = 500

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"{operation} failed: {reason}")
