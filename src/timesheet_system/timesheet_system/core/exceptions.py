class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class DuplicateClockInError(ValidationError):
    """Raised when clocking in while an entry already exists for the day."""


class NotClockedInError(ValidationError):
    """Raised when clocking out without an open entry."""


class InvalidTimeOrderError(ValidationError):
    """Raised when an end timestamp precedes its start timestamp."""


class InvalidDateRangeError(ValidationError):
    """Raised when a report period cannot be resolved to a valid range."""


class NotFoundError(DomainError):
    """Raised when a mutation targets an entry that does not exist."""


class DuplicateKeyError(DomainError):
    """Raised by storage when an (employee, date) entry already exists."""


class PersistenceError(DomainError):
    """Raised when the storage backend fails (connectivity, driver errors)."""
