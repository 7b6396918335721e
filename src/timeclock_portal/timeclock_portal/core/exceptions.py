class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is malformed (field-level, user-correctable)."""


class ConflictError(DomainError):
    """Raised when an action collides with current state, often a race."""


class DuplicateError(ConflictError):
    """Raised when an employee name is already taken (case-insensitive)."""


class AlreadyOpenError(ConflictError):
    """Raised when the employee already has an open attendance session."""


class AlreadyClosedError(ConflictError):
    """Raised when clocking out of a session that already has an end time."""


class NotFoundError(DomainError):
    """Raised when a referenced employee or session does not exist."""


class SchemaError(DomainError):
    """Raised when an import file lacks a mandatory column."""


class EmptyInputError(DomainError):
    """Raised when an import file has no non-blank lines."""


class PersistenceError(DomainError):
    """Raised when the record store is unavailable or rejects a write."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""
