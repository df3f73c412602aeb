"""
Domain errors raised by the service layer.

Every error has a kind from the closed ErrorKind enum and a structured
payload (field, value, details). The HTTP layer maps kinds to status codes.
No framework imports allowed.
"""
from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    VALIDATION = "VALIDATION_ERROR"
    MISSING_FIELD = "MISSING_FIELD"
    DUPLICATE = "DUPLICATE"
    REFERENCE = "REFERENCE_ERROR"
    INELIGIBLE_REFERENCE = "INELIGIBLE_REFERENCE"
    INVARIANT = "INVARIANT_VIOLATION"
    NOT_FOUND = "NOT_FOUND"
    STORAGE = "STORAGE_ERROR"


class DomainError(Exception):
    """Base error for all service-layer failures."""

    kind: ErrorKind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        details: dict | None = None,
    ) -> None:
        self.message = message
        self.field = field
        self.value = value
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict:
        payload = {"kind": self.kind.value, "message": self.message}
        if self.field is not None:
            payload["field"] = self.field
            payload["value"] = self.value
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(DomainError):
    """A field fails its own predicate (empty, too long, non-positive, out-of-range date)."""

    kind = ErrorKind.VALIDATION

    @classmethod
    def from_messages(cls, messages: dict) -> "ValidationError":
        """Build from marshmallow's {field: [messages]} mapping."""
        field = next(iter(messages), None) if isinstance(messages, dict) else None
        return cls("Invalid input", field=field, details=messages if isinstance(messages, dict) else None)


class MissingFieldError(DomainError):
    """A conditionally required field is absent."""

    kind = ErrorKind.MISSING_FIELD

    def __init__(self, field: str, reason: str | None = None) -> None:
        super().__init__(reason or f"{field} is required", field=field)


class DuplicateError(DomainError):
    kind = ErrorKind.DUPLICATE

    def __init__(self, entity: str, field: str, value: Any) -> None:
        super().__init__(f"{entity} already exists", field=field, value=value)
        self.entity = entity


class UnresolvedReferenceError(DomainError):
    """A foreign key does not resolve to an existing row."""

    kind = ErrorKind.REFERENCE

    def __init__(self, entity: str, field: str, value: Any) -> None:
        super().__init__(f"{entity} not found", field=field, value=value)
        self.entity = entity


class IneligibleReferenceError(DomainError):
    """The referenced row exists (or not) but has the wrong specialization."""

    kind = ErrorKind.INELIGIBLE_REFERENCE


class InvariantViolation(DomainError):
    """A cross-entity business rule would be broken."""

    kind = ErrorKind.INVARIANT

    def __init__(self, rule: str, message: str, field: str | None = None, value: Any = None) -> None:
        super().__init__(message, field=field, value=value)
        self.rule = rule

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload["rule"] = self.rule
        return payload


class NotFoundError(DomainError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, field: str, value: Any) -> None:
        super().__init__(f"{entity} not found", field=field, value=value)
        self.entity = entity


class StorageError(DomainError):
    """A repository call failed; the original exception is chained."""

    kind = ErrorKind.STORAGE

    def __init__(self, operation: str) -> None:
        super().__init__(f"storage failure during {operation}")
        self.operation = operation
