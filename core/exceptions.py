# core/exceptions.py

class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when input is invalid (negative mandays, percent outside 0-100, FTE out of range)."""


class NotFoundError(DomainError):
    """Raised when a scope, project, role or team member is not found."""


class BusinessRuleError(DomainError):
    """Raised when business rules are violated (e.g. a calendar without working days)."""


class ConcurrencyError(DomainError):
    """Raised when optimistic locking detects a stale update."""
