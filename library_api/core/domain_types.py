"""Domain Types: identity types, the genre enum and identifier format.

Invariants:
    - Book and borrow identifiers are 24-character hexadecimal strings
    - Generated identifiers are lowercase; parsing accepts either case
    - Genre is a closed set of six values

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enum for Genre: serializes to JSON without a custom encoder
"""

import os
import re
import struct
import time
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

BookId = NewType("BookId", str)
BorrowId = NewType("BorrowId", str)

OBJECT_ID_PATTERN = re.compile(r"^[a-f\d]{24}$", re.IGNORECASE)
OBJECT_ID_LENGTH: int = 24

_counter = int.from_bytes(os.urandom(3), "big")


def new_object_id() -> str:
    """Generate a 24-hex identifier: 4-byte timestamp, 5 random bytes, 3-byte counter.

    Identifiers sort roughly by creation time, the same layout document
    stores use for their native ids.
    """
    global _counter
    _counter = (_counter + 1) % 0xFFFFFF
    return (
        struct.pack(">I", int(time.time()) & 0xFFFFFFFF)
        + os.urandom(5)
        + _counter.to_bytes(3, "big")
    ).hex()


def is_object_id(value: object) -> bool:
    return isinstance(value, str) and OBJECT_ID_PATTERN.match(value) is not None


# ─── Enums ───────────────────────────────────────────────────────

class Genre(str, Enum):
    """Book genres accepted by the catalog."""
    FICTION = "FICTION"
    NON_FICTION = "NON_FICTION"
    SCIENCE = "SCIENCE"
    HISTORY = "HISTORY"
    BIOGRAPHY = "BIOGRAPHY"
    FANTASY = "FANTASY"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


# Public sort keys for GET /api/books mapped to Book column attribute names.
BOOK_SORT_FIELDS: dict[str, str] = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "title": "title",
    "author": "author",
    "genre": "genre",
    "isbn": "isbn",
    "copies": "copies",
    "available": "available",
}
DEFAULT_SORT_FIELD: str = "createdAt"
DEFAULT_LIST_LIMIT: int = 10
FEATURED_BOOKS_LIMIT: int = 6
