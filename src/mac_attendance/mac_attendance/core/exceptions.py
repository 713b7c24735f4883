class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when the request shape is invalid."""


class NotFoundError(DomainError):
    """Raised when a MAC address belongs to no registered student."""


class StoreFault(DomainError):
    """Raised when the backing store fails (connection, query, ...)."""


class StoreTimeout(StoreFault):
    """Raised when a store operation exceeds its time budget."""


class IntegrityAnomaly(StoreFault):
    """Raised when an insert reports that it affected no rows."""
