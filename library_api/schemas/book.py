"""Book Schemas: request validation and response serialization for books.

Invariants:
    - BookCreate requires title, author, genre, isbn, copies; text fields are
      stripped and must be non-empty
    - copies is a whole number >= 0: 2.0 counts as 2; "5" strings, 2.5 and
      booleans are rejected
    - BookUpdate is an allow-list: unknown keys are ignored, null means "keep"
    - Book ids match the 24-hex pattern and are normalized to lowercase

Design Decisions:
    - PydanticCustomError for id format: the error type becomes the violation
      kind ("invalid_format") without a translation entry
    - Response models carry serialization aliases (_id, createdAt, updatedAt)
      so services never hand-build JSON
"""

from datetime import datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic_core import PydanticCustomError

from library_api.core.domain_types import Genre, is_object_id


def _check_object_id(value: str) -> str:
    if not is_object_id(value):
        raise PydanticCustomError("invalid_format", "Invalid book ID format")
    return value.lower()


ObjectIdStr = Annotated[str, AfterValidator(_check_object_id)]


def _require_number(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PydanticCustomError("int_type", "Input should be a valid integer")
    return value


# Lax int after the number check: 2.0 -> 2, 2.5 -> int_from_float
NonNegativeWhole = Annotated[int, Field(ge=0), BeforeValidator(_require_number)]
PositiveWhole = Annotated[int, Field(gt=0), BeforeValidator(_require_number)]


class BookIdParams(BaseModel):
    """Path parameters for /api/books/{bookId}."""
    bookId: ObjectIdStr


class BookCreate(BaseModel):
    """Book creation payload."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    title: str = Field(min_length=1)
    author: str = Field(min_length=1)
    genre: Genre
    isbn: str = Field(min_length=1)
    description: str = ""
    copies: NonNegativeWhole
    available: bool = Field(True, strict=True)


class BookUpdate(BaseModel):
    """Partial book update. Only the fields declared here can change."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    title: str | None = Field(None, min_length=1)
    author: str | None = Field(None, min_length=1)
    genre: Genre | None = None
    isbn: str | None = Field(None, min_length=1)
    description: str | None = None
    copies: NonNegativeWhole | None = None
    available: bool | None = Field(None, strict=True)

    def changes(self) -> dict:
        """Fields the caller supplied with a non-null value."""
        return {
            key: value
            for key, value in self.model_dump(mode="json", exclude_unset=True).items()
            if value is not None
        }


class BookRead(BaseModel):
    """Book as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(serialization_alias="_id")
    title: str
    author: str
    genre: Genre
    isbn: str
    description: str
    copies: int
    available: bool
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")
