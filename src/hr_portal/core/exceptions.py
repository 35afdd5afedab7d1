from __future__ import annotations

from typing import Mapping, Optional


class DomainError(Exception):
    """Base exception for portal errors recovered at the operation boundary."""


class ValidationError(DomainError):
    """Raised when form input is invalid. Carries per-field messages when known."""

    def __init__(self, message: str = "Invalid input", field_errors: Optional[Mapping[str, str]] = None):
        super().__init__(message)
        self.field_errors = dict(field_errors or {})


class AuthenticationError(DomainError):
    """Raised when login credentials are rejected."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class TransportError(DomainError):
    """Raised when the backend cannot be reached or returns a malformed body."""


class BackendError(DomainError):
    """Raised when the backend reports a logical failure (success: false)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(BackendError):
    """Raised on 404 for a single-resource fetch."""
