"""Service-layer error hierarchy.

Services raise these; the HTTP layer maps each class to a status code once,
in microblog.api.errors. Messages are for server-side logs only and are never
sent to clients.
"""

from enum import Enum


class ServiceError(Exception):
    """Base class for every failure a service reports."""

    def __init__(self, message: str = ""):
        self.message = message
        super().__init__(message)


class InvalidInputError(ServiceError):
    """Request data failed validation."""

    pass


class AlreadyExistsError(ServiceError):
    """Handle or email is already registered."""

    pass


class NotFoundError(ServiceError):
    """Entity does not exist, or login credentials did not match."""

    pass


class ForbiddenError(ServiceError):
    """Caller is not allowed to perform the operation."""

    pass


class TokenFailure(str, Enum):
    """Why a token was rejected. Logged, never exposed."""

    SIGNATURE = "signature"
    EXPIRED = "expired"
    MALFORMED = "malformed"
    REVOKED = "revoked"


class TokenError(ForbiddenError):
    """A token failed verification."""

    def __init__(self, failure: TokenFailure, message: str = ""):
        self.failure = failure
        super().__init__(message or f"Token rejected: {failure.value}")


class StoreUnavailableError(ServiceError):
    """A backing store failed or missed its deadline."""

    pass


class InternalError(ServiceError):
    """Unexpected internal failure."""

    pass


class HashingError(InternalError):
    """Password hashing or verification failed internally."""

    pass


class SigningError(InternalError):
    """Token signing failed internally."""

    pass
