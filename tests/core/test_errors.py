"""Error envelopes: the three failure shapes.

Tests cover:
    - field-mapped domain errors (duplicate ISBN, not found, insufficient copies)
    - internal errors carry exception name and message under "general"
    - min/max only appear in properties when set
"""

from library_api.core.errors import (
    BookNotFoundError, DatabaseError, DuplicateIsbnError,
    FieldViolation, InsufficientCopiesError, ValidationFailedError,
    build_error_envelope, internal_error_response,
)


def test_envelope_shape():
    body = build_error_envelope(
        "ValidationError", {"isbn": FieldViolation("dup", "unique", "isbn", "123")},
    )
    assert body["message"] == "Validation failed"
    assert body["success"] is False
    assert body["error"]["name"] == "ValidationError"
    assert body["error"]["errors"]["isbn"] == {
        "message": "dup",
        "name": "ValidatorError",
        "properties": {"message": "dup", "type": "unique"},
        "kind": "unique",
        "path": "isbn",
        "value": "123",
    }


def test_field_violation_includes_bounds_when_set():
    entry = FieldViolation("too small", "too_small", "copies", -1, min=0).to_dict()
    assert entry["properties"]["min"] == 0
    assert "max" not in entry["properties"]


def test_duplicate_isbn_error():
    exc = DuplicateIsbnError("978-3")
    entry = exc.to_response()["error"]["errors"]["isbn"]
    assert exc.http_status == 400
    assert entry["message"] == "Book with this ISBN already exists"
    assert entry["kind"] == "unique"
    assert entry["value"] == "978-3"


def test_book_not_found_defaults_to_book_id_field():
    exc = BookNotFoundError("a" * 24)
    errors = exc.to_response()["error"]["errors"]
    assert exc.http_status == 404
    assert errors["bookId"]["kind"] == "NotFound"
    assert errors["bookId"]["value"] == "a" * 24


def test_book_not_found_on_borrow_uses_book_field():
    errors = BookNotFoundError("b" * 24, field="book").to_response()["error"]["errors"]
    assert set(errors) == {"book"}
    assert errors["book"]["path"] == "book"


def test_insufficient_copies_reports_min_and_requested():
    entry = InsufficientCopiesError(available=0, requested=1).to_response()["error"]["errors"]["copies"]
    assert entry["message"] == "Only 0 copies available"
    assert entry["kind"] == "min"
    assert entry["properties"]["min"] == 1
    assert entry["value"] == 1


def test_validation_failed_lists_fields_in_message():
    exc = ValidationFailedError({
        "title": FieldViolation("Title is required", "required", "title"),
        "copies": FieldViolation("Copies is required", "required", "copies"),
    })
    assert "title" in exc.message and "copies" in exc.message
    assert set(exc.to_response()["error"]["errors"]) == {"title", "copies"}


def test_internal_error_response_passes_name_and_message():
    body = internal_error_response(RuntimeError("disk on fire"))
    assert body["success"] is False
    assert body["error"]["name"] == "RuntimeError"
    general = body["error"]["errors"]["general"]
    assert general["message"] == "disk on fire"
    assert general["kind"] == "internal"
    assert general["properties"]["type"] == "internal"
    assert general["path"] == "server"
    assert general["value"] is None


def test_internal_error_response_empty_message_fallback():
    body = internal_error_response(ValueError())
    assert body["error"]["errors"]["general"]["message"] == "Something went wrong"


def test_database_error_uses_internal_shape():
    exc = DatabaseError("Connection or operational error", "execute")
    body = exc.to_response()
    assert exc.http_status == 500
    assert body["error"]["name"] == "DatabaseError"
    assert body["error"]["errors"]["general"]["kind"] == "internal"
