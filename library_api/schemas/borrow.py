"""Borrow Schemas: borrow request validation and borrow/summary responses.

Invariants:
    - book is a 24-hex id, quantity a whole number > 0
    - dueDate is any parseable date string (ISO-8601, "2025/01/01",
      "January 1, 2025", RFC 1123); naive values are UTC
"""

from datetime import datetime, timezone
from typing import Annotated, Any

from dateutil import parser as date_parser
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic_core import PydanticCustomError

from library_api.schemas.book import ObjectIdStr, PositiveWhole


def _parse_due_date(value: Any) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = date_parser.parse(value.strip())
        except (ValueError, OverflowError):
            raise PydanticCustomError(
                "invalid_format", "A valid due date is required",
            ) from None
    else:
        raise PydanticCustomError("invalid_format", "A valid due date is required")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


DueDate = Annotated[datetime, BeforeValidator(_parse_due_date)]


class BorrowCreate(BaseModel):
    """Borrow payload: {book, quantity, dueDate}."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    book: ObjectIdStr
    quantity: PositiveWhole
    due_date: DueDate = Field(alias="dueDate")


class BorrowRead(BaseModel):
    """Borrow record as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(serialization_alias="_id")
    book: str = Field(validation_alias="book_id")
    quantity: int
    due_date: datetime = Field(serialization_alias="dueDate")
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")


class SummaryBook(BaseModel):
    title: str
    isbn: str


class BorrowSummaryEntry(BaseModel):
    """Total borrowed quantity for one book."""
    book: SummaryBook
    total_quantity: int = Field(serialization_alias="totalQuantity")
