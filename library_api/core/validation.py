"""Violation Translation: pydantic error records -> per-field FieldViolations.

Invariants:
    - Every error record yields one FieldViolation; the first one per path is kept
    - Request location prefixes ("body", "path", "query") are stripped from paths
    - Range violations carry the violated bound as min/max
    - Missing fields report value None; all others report the rejected input

Design Decisions:
    - Operates on plain error dicts (ValidationError.errors() and
      RequestValidationError.errors() share the shape): keeps core free of
      pydantic and FastAPI imports
"""

from typing import Any, Iterable

from library_api.core.domain_types import Genre
from library_api.core.errors import FieldViolation


_LOCATION_PREFIXES = frozenset({"body", "path", "query", "header", "cookie"})

KIND_BY_ERROR_TYPE: dict[str, str] = {
    "missing": "required",
    "string_type": "invalid_type",
    "int_type": "invalid_type",
    "int_parsing": "invalid_type",
    "int_from_float": "invalid_type",
    "bool_type": "invalid_type",
    "bool_parsing": "invalid_type",
    "model_type": "invalid_type",
    "model_attributes_type": "invalid_type",
    "dict_type": "invalid_type",
    "enum": "invalid_enum",
    "literal_error": "invalid_enum",
    "greater_than": "too_small",
    "greater_than_equal": "too_small",
    "string_too_short": "too_small",
    "less_than": "too_big",
    "less_than_equal": "too_big",
    "string_too_long": "too_big",
    "string_pattern_mismatch": "invalid_format",
    "json_invalid": "invalid_json",
}

_MIN_CTX_KEYS = ("ge", "gt", "min_length")
_MAX_CTX_KEYS = ("le", "lt", "max_length")

FIELD_MESSAGES: dict[tuple[str, str], str] = {
    ("title", "required"): "Title is required",
    ("author", "required"): "Author is required",
    ("genre", "required"): "Genre is required",
    ("genre", "invalid_enum"): (
        "Genre must be one of: " + ", ".join(g.value for g in Genre)
    ),
    ("isbn", "required"): "ISBN is required",
    ("copies", "required"): "Copies is required",
    ("copies", "invalid_type"): "Copies must be an integer",
    ("copies", "too_small"): "Copies must be a non-negative number",
    ("available", "invalid_type"): "Available must be a boolean",
    ("book", "required"): "Borrowed book ID is required",
    ("quantity", "required"): "Quantity is required",
    ("quantity", "invalid_type"): "Quantity must be a positive integer",
    ("quantity", "too_small"): "Quantity must be a positive integer",
    ("dueDate", "required"): "Due date is required",
    ("limit", "invalid_type"): "Limit must be an integer",
    ("limit", "too_small"): "Limit must be a non-negative integer",
}


def error_path(loc: Iterable[Any]) -> str:
    """Dotted field path without the request-location prefix."""
    parts = [str(p) for p in loc]
    if parts and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(parts) or "body"


def violation_from_error(error: dict) -> FieldViolation:
    """Translate one pydantic error record."""
    error_type = error.get("type", "value_error")
    kind = KIND_BY_ERROR_TYPE.get(error_type, error_type)
    path = error_path(error.get("loc", ()))
    ctx = error.get("ctx") or {}

    violation = FieldViolation(
        message=FIELD_MESSAGES.get((path, kind), error.get("msg", "Invalid value")),
        kind=kind,
        path=path,
        value=None if kind == "required" else error.get("input"),
    )
    for key in _MIN_CTX_KEYS:
        if key in ctx:
            violation.min = ctx[key]
    for key in _MAX_CTX_KEYS:
        if key in ctx:
            violation.max = ctx[key]
    return violation


def violations_from_errors(errors: Iterable[dict]) -> dict[str, FieldViolation]:
    """Translate all error records, keyed by field path."""
    violations: dict[str, FieldViolation] = {}
    for error in errors:
        violation = violation_from_error(error)
        violations.setdefault(violation.path, violation)
    return violations
