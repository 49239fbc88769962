class DomainError(Exception):
    """Base exception for business rule violations."""

    kind = "domain_error"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "invalid_input"


class AuthenticationError(DomainError):
    """Raised when a request carries no authenticated account."""

    kind = "unauthenticated"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    kind = "access_denied"


class NotFoundError(DomainError):
    """Raised when an employee or attendance record does not exist."""

    kind = "not_found"


class DuplicateRecordError(DomainError):
    """Raised when a record already exists for an (employee, day) pair."""

    kind = "duplicate_record"


class AlreadyCheckedInError(DuplicateRecordError):
    kind = "already_checked_in"


class NoCheckInError(DomainError):
    kind = "no_check_in"


class AlreadyCheckedOutError(DomainError):
    kind = "already_checked_out"
