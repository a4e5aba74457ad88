"""Error Hierarchy: typed exceptions and the uniform failure envelope.

Invariants:
    - Every error carries http_status, name and a field -> FieldViolation map
    - to_response() always yields {message, success: false, error: {name, errors}}
    - Field-scoped errors (validation, domain rules, not-found) use name "ValidationError"
    - Unexpected errors surface as a single "general" violation of kind "internal"

Design Decisions:
    - Single hierarchy with LibraryError base: one FastAPI handler catches all
    - FieldViolation as dataclass: handlers build field maps without dict literals
"""

from dataclasses import dataclass
from typing import Any


VALIDATION_FAILED_MESSAGE = "Validation failed"
VALIDATION_ERROR_NAME = "ValidationError"
VALIDATOR_ERROR_NAME = "ValidatorError"


@dataclass
class FieldViolation:
    """One violated field: message, machine-readable kind and rejected value."""
    message: str
    kind: str
    path: str
    value: Any = None
    min: int | float | None = None
    max: int | float | None = None

    def to_dict(self) -> dict:
        properties: dict[str, Any] = {"message": self.message, "type": self.kind}
        if self.min is not None:
            properties["min"] = self.min
        if self.max is not None:
            properties["max"] = self.max
        return {
            "message": self.message,
            "name": VALIDATOR_ERROR_NAME,
            "properties": properties,
            "kind": self.kind,
            "path": self.path,
            "value": self.value,
        }


def build_error_envelope(
    name: str, violations: dict[str, FieldViolation],
    message: str = VALIDATION_FAILED_MESSAGE,
) -> dict:
    """Build the failure envelope shared by every error response."""
    return {
        "message": message,
        "success": False,
        "error": {
            "name": name,
            "errors": {
                key: violation.to_dict() for key, violation in violations.items()
            },
        },
    }


def internal_error_response(exc: BaseException) -> dict:
    """Envelope for unexpected errors: exception name and message pass through."""
    name = type(exc).__name__ or "ServerError"
    message = str(exc) or "Something went wrong"
    return build_error_envelope(
        name,
        {"general": FieldViolation(message, "internal", "server")},
    )


class LibraryError(Exception):
    """Base exception for all library errors."""

    def __init__(
        self,
        message: str,
        violations: dict[str, FieldViolation],
        http_status: int = 400,
        name: str = VALIDATION_ERROR_NAME,
        code: str = "VALIDATION_ERROR",
    ):
        super().__init__(message)
        self.message = message
        self.violations = violations
        self.http_status = http_status
        self.name = name
        self.code = code

    def to_response(self) -> dict:
        """Convert to the failure envelope."""
        return build_error_envelope(self.name, self.violations)


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationFailedError(LibraryError):
    """Schema validation failed on one or more fields."""
    def __init__(self, violations: dict[str, FieldViolation]):
        super().__init__(
            f"Validation failed on: {', '.join(violations)}", violations,
        )


class DuplicateIsbnError(LibraryError):
    """A book with the same ISBN already exists."""
    def __init__(self, isbn: str):
        message = "Book with this ISBN already exists"
        super().__init__(
            message,
            {"isbn": FieldViolation(message, "unique", "isbn", isbn)},
            code="DUPLICATE_ISBN",
        )
        self.isbn = isbn


class InsufficientCopiesError(LibraryError):
    """Borrow quantity exceeds the copies in stock."""
    def __init__(self, available: int, requested: int):
        message = f"Only {available} copies available"
        super().__init__(
            message,
            {"copies": FieldViolation(message, "min", "copies", requested, min=1)},
            code="INSUFFICIENT_COPIES",
        )
        self.available = available
        self.requested = requested


class BookNotFoundError(LibraryError):
    """Referenced book does not exist."""
    def __init__(self, book_id: str, field: str = "bookId", message: str = "Book not found"):
        super().__init__(
            message,
            {field: FieldViolation(message, "NotFound", field, book_id)},
            http_status=404,
            code="RESOURCE_NOT_FOUND",
        )
        self.book_id = book_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(LibraryError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str):
        full_message = f"Database {operation} failed: {message}"
        super().__init__(
            full_message,
            {"general": FieldViolation(full_message, "internal", "server")},
            http_status=500,
            name="DatabaseError",
            code="DATABASE_ERROR",
        )
        self.operation = operation
