class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when an employee, actor or attendance record does not exist."""

    status_code = 404


class ConflictError(DomainError):
    """Raised on duplicate identity or a repeated check-in/check-out."""


class InvalidStateError(DomainError):
    """Raised when an operation is not allowed in the record's current state."""


class AuthenticationError(DomainError):
    """Raised when a token or login credentials are invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when an actor lacks permission for an action."""

    status_code = 403


class InvalidCredentialsError(AuthenticationError):
    """Raised when a login attempt fails; answered as a bad request, not 401."""

    status_code = 400


class MissingCheckInError(InvalidStateError):
    """Raised on check-out when the day has no record at all; answered as 404."""

    status_code = 404
