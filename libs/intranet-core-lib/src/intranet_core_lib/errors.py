"""Error taxonomy shared by every intranet component.

Callers branch on ``IntranetError.kind`` rather than on message text.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Machine readable error categories."""

    NOT_FOUND = "not_found"
    VALIDATION_FAILED = "validation_failed"
    SEAT_LIMIT_EXCEEDED = "seat_limit_exceeded"
    SPACE_LIMIT_EXCEEDED = "space_limit_exceeded"
    FEATURE_UNAVAILABLE = "feature_unavailable"
    INVALID_CREDENTIALS = "invalid_credentials"
    ACCOUNT_INACTIVE = "account_inactive"
    DUPLICATE_EMAIL = "duplicate_email"
    ACCESS_DENIED = "access_denied"


class IntranetError(Exception):
    """Base class for all domain errors."""

    kind: ErrorKind = ErrorKind.VALIDATION_FAILED

    def __init__(self, message: str, kind: ErrorKind | None = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind


class NotFoundError(IntranetError, LookupError):
    """Raised when a record with the requested identifier does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, collection: str, record_id: str):
        super().__init__(f"{collection} record '{record_id}' not found.")
        self.collection = collection
        self.record_id = record_id


class ValidationFailedError(IntranetError, ValueError):
    """Raised when a payload fails a domain rule."""

    kind = ErrorKind.VALIDATION_FAILED


class PlanLimitExceededError(IntranetError):
    """Raised when a plan's user or space allowance is exhausted."""

    def __init__(self, message: str, kind: ErrorKind, limit: int):
        super().__init__(message, kind)
        self.limit = limit

    @property
    def requires_upgrade(self) -> bool:
        """Return whether upgrading the plan lifts the limit."""
        return self.kind in {ErrorKind.SEAT_LIMIT_EXCEEDED, ErrorKind.SPACE_LIMIT_EXCEEDED}


class FeatureUnavailableError(IntranetError):
    """Raised when the company plan does not include a feature."""

    kind = ErrorKind.FEATURE_UNAVAILABLE

    def __init__(self, feature: str):
        super().__init__(f"The '{feature}' feature is not included in the current plan.")
        self.feature = feature


class AuthenticationError(IntranetError):
    """Raised when credentials do not identify an active user."""

    kind = ErrorKind.INVALID_CREDENTIALS


class AccessDeniedError(IntranetError, PermissionError):
    """Raised when a principal attempts a mutation it is not allowed to make."""

    kind = ErrorKind.ACCESS_DENIED
