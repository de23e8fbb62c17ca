"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    PROFILE_REQUIRED = "PROFILE_REQUIRED"

    # Authorization errors (403)
    NOT_A_PARTICIPANT = "NOT_A_PARTICIPANT"

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    MATCH_NOT_FOUND = "MATCH_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_SELF_SWIPE = "INVALID_SELF_SWIPE"
    INVALID_PROFILE = "INVALID_PROFILE"

    # Conflict errors (409)
    PROFILE_ALREADY_EXISTS = "PROFILE_ALREADY_EXISTS"
    MATCH_CONFLICT = "MATCH_CONFLICT"
    MATCH_CLOSED = "MATCH_CLOSED"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500/503)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class ProfileNotFoundError(AppException):
    """Profile not found."""

    def __init__(self, profile_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message=f"Profile not found: {profile_id}",
            status_code=404,
            details={"profile_id": profile_id},
        )


class ProfileAlreadyExistsError(AppException):
    """The authenticated user already owns a profile."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_ALREADY_EXISTS,
            message="A profile already exists for this user",
            status_code=409,
            details={"user_id": user_id},
        )


class InvalidProfileError(AppException):
    """Profile data violates a domain invariant."""

    def __init__(self, message: str, field: str) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_PROFILE,
            message=message,
            status_code=400,
            details={"field": field},
        )


class InvalidSwipeError(AppException):
    """A profile attempted to swipe on itself."""

    def __init__(self, profile_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_SELF_SWIPE,
            message="A profile cannot swipe on itself",
            status_code=400,
            details={"profile_id": profile_id},
        )


class InvalidMessageError(AppException):
    """Message content is empty or malformed."""

    def __init__(self, message: str = "Message content cannot be empty") -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status_code=400,
        )


class MatchNotFoundError(AppException):
    """Match not found."""

    def __init__(self, match_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.MATCH_NOT_FOUND,
            message=f"Match not found: {match_id}",
            status_code=404,
            details={"match_id": match_id},
        )


class NotAMatchParticipantError(AppException):
    """Profile is not one of the two parties of the match."""

    def __init__(self, match_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.NOT_A_PARTICIPANT,
            message="You are not a participant of this match",
            status_code=403,
            details={"match_id": match_id},
        )


class MatchClosedError(AppException):
    """The match is closed and no longer accepts messages."""

    def __init__(self, match_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.MATCH_CLOSED,
            message="This match is closed",
            status_code=409,
            details={"match_id": match_id},
        )


class MatchConflictError(AppException):
    """Concurrent match creation failed and no existing match was found."""

    def __init__(self, profile_a_id: str, profile_b_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.MATCH_CONFLICT,
            message="Match creation conflicted with a concurrent request",
            status_code=409,
            details={"profile_ids": [profile_a_id, profile_b_id]},
        )


class StoreUnavailableError(AppException):
    """The persistence layer is unreachable. Safe to retry."""

    def __init__(self, message: str = "Data store is temporarily unavailable") -> None:
        super().__init__(
            error_code=ErrorCode.STORE_UNAVAILABLE,
            message=message,
            status_code=503,
        )
