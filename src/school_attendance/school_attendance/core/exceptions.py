class DomainError(Exception):
    """Base exception for business rule violations."""

    reason = "error"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    reason = "malformed payload"


class NotFoundError(DomainError):
    """Raised when a student, attendance record or user does not exist."""

    reason = "not found"


class DuplicateError(DomainError):
    """Raised when attendance was already recorded for the student and day."""

    reason = "already marked"


class LowConfidenceError(DomainError):
    """Raised when a face match scores below the accepted threshold."""

    reason = "confidence too low"


class ReportBuildError(DomainError):
    """Raised when report parameters are malformed (never for empty results)."""

    reason = "invalid report request"


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    reason = "invalid credentials"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    reason = "forbidden"
