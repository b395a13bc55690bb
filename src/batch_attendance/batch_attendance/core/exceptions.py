class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidDateFormat(ValidationError):
    """Raised when a civil date is not a valid YYYY-MM-DD string."""


class InvalidSession(ValidationError):
    """Raised when a session is not FN or AN."""


class InvalidStatus(ValidationError):
    """Raised when a submission carries an unrecognized status."""


class NotFound(DomainError):
    """Raised when a lookup has no match."""


class StoreUnavailable(DomainError):
    """Raised when the persistence layer cannot be reached."""
