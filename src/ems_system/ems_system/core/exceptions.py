from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations.

    ``kind`` is the machine-checkable error code surfaced to callers, the message is
    the human-readable reason and ``details`` carries extra structured fields.
    """

    kind = "domain_error"

    def __init__(self, message: str, *, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "reason": self.message, **self.details}


class ValidationError(DomainError):
    """Raised when input data is missing, malformed or violates domain rules."""

    kind = "validation_error"


class NotFoundError(DomainError):
    """Raised when an employee, leave type, leave request or balance row is unknown."""

    kind = "not_found"


class ConflictError(DomainError):
    """Raised when an operation collides with existing state."""

    kind = "conflict"


class AuthorizationError(DomainError):
    """Raised when a principal lacks permission for an action."""

    kind = "authorization_error"


class InternalError(DomainError):
    """Raised for unexpected storage failures."""

    kind = "internal_error"
