"""Borrow Service: lend copies of a book and report totals per book.

Invariants:
    - Sufficiency is checked against the copies read in this request, then
      again by the write itself: copies is decremented only where
      copies >= quantity, so concurrent borrows never oversell
    - A write that matches no row rolls back and reports the current stock
    - The stock UPDATE and the borrow INSERT commit in one transaction
    - Summary never exposes book ids; records of deleted books drop out

Design Decisions:
    - Conditional decrement over row locks: works the same on SQLite and
      PostgreSQL, and a stale read with enough stock left still succeeds
"""

import logging

from sqlalchemy import case, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from library_api.core.book_lifecycle import ensure_sufficient_copies
from library_api.core.errors import BookNotFoundError, InsufficientCopiesError
from library_api.models.book import Book
from library_api.models.borrow import Borrow
from library_api.schemas.borrow import (
    BorrowCreate, BorrowSummaryEntry, SummaryBook,
)

logger = logging.getLogger(__name__)


class BorrowService:
    """Borrow operations bound to one request session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def borrow_book(self, data: BorrowCreate) -> Borrow:
        book_id = data.book
        quantity = data.quantity
        book = await self.db.get(Book, book_id)
        if book is None:
            raise BookNotFoundError(book_id, field="book")

        ensure_sufficient_copies(book.copies, quantity)

        remaining = Book.copies - quantity
        result = await self.db.execute(
            update(Book)
            .where(Book.id == book_id, Book.copies >= quantity)
            .values(
                copies=remaining,
                available=case((remaining <= 0, False), else_=Book.available),
            )
            .execution_options(synchronize_session=False),
        )
        if result.rowcount != 1:
            # Rollback expires `book`; only plain locals are read below
            await self.db.rollback()
            await self._raise_stock_changed(book_id, quantity)

        borrow = Borrow(book_id=book_id, quantity=quantity, due_date=data.due_date)
        self.db.add(borrow)
        await self.db.commit()
        await self.db.refresh(borrow)
        await self.db.refresh(book)
        logger.info(
            f"Borrowed {quantity} of '{book.title}', {book.copies} left",
            extra={"book_id": book_id, "borrow_id": borrow.id, "quantity": quantity},
        )
        return borrow

    async def _raise_stock_changed(self, book_id: str, quantity: int) -> None:
        """Re-read the stock after a missed write and raise the matching error."""
        result = await self.db.execute(
            select(Book.copies).where(Book.id == book_id),
        )
        copies = result.scalar_one_or_none()
        logger.warning(
            "Stock changed before the borrow was written",
            extra={"book_id": book_id, "quantity": quantity},
        )
        if copies is None:
            raise BookNotFoundError(book_id, field="book")
        raise InsufficientCopiesError(available=copies, requested=quantity)

    async def summary(self) -> list[BorrowSummaryEntry]:
        """Total borrowed quantity per book, largest first."""
        total = func.sum(Borrow.quantity).label("total_quantity")
        result = await self.db.execute(
            select(Book.title, Book.isbn, total)
            .select_from(Borrow)
            .join(Book, Book.id == Borrow.book_id)
            .group_by(Borrow.book_id, Book.title, Book.isbn)
            .order_by(total.desc(), Book.title.asc()),
        )
        return [
            BorrowSummaryEntry(
                book=SummaryBook(title=row.title, isbn=row.isbn),
                total_quantity=row.total_quantity,
            )
            for row in result.all()
        ]
