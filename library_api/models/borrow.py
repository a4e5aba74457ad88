"""Borrow ORM: immutable loan records against a book.

Invariants:
    - book_id references a Book by id without a foreign key: deleting the
      book leaves its borrow records in place
    - quantity > 0 (check constraint)
    - Rows are never updated after insert
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from library_api.core.domain_types import new_object_id
from library_api.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Borrow(Base):
    """Borrow record: quantity of one book due back on due_date."""
    __tablename__ = "borrows"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_borrows_quantity_positive"),
    )

    id: Mapped[str] = mapped_column(
        String(24), primary_key=True, default=new_object_id,
    )
    book_id: Mapped[str] = mapped_column(String(24), nullable=False, index=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    due_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )
