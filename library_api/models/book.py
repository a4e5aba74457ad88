"""Book ORM: catalog entries with a lendable copy count.

Invariants:
    - id is a 24-hex string generated on insert
    - isbn is unique (unique index)
    - copies >= 0 (check constraint)
    - copies == 0 implies available is False on every insert and update
      (before_insert/before_update listeners run enforce_availability)

Design Decisions:
    - genre stored as String(20) holding the Genre value: no native enum type,
      so adding a genre needs no migration
    - No relationship to Borrow: borrow records reference books by id only
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean, CheckConstraint, DateTime, Integer, String, Text, event,
)
from sqlalchemy.orm import Mapped, mapped_column

from library_api.core.book_lifecycle import enforce_availability
from library_api.core.domain_types import new_object_id
from library_api.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Book(Base):
    """Book entity."""
    __tablename__ = "books"
    __table_args__ = (
        CheckConstraint("copies >= 0", name="ck_books_copies_non_negative"),
    )

    id: Mapped[str] = mapped_column(
        String(24), primary_key=True, default=new_object_id,
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    author: Mapped[str] = mapped_column(String(300), nullable=False)
    genre: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    isbn: Mapped[str] = mapped_column(
        String(32), nullable=False, unique=True, index=True,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    copies: Mapped[int] = mapped_column(Integer, nullable=False)
    available: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )


@event.listens_for(Book, "before_insert")
@event.listens_for(Book, "before_update")
def _enforce_availability_on_persist(mapper, connection, target: Book) -> None:
    if target.available is None:
        target.available = True
    enforce_availability(target)
