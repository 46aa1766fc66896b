class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class StoreError(DomainError):
    """Raised when a backing store (MySQL, CSV files, ...) fails to read or write."""
