"""Book Service: create, read, update, delete and list catalog books.

Invariants:
    - ISBN uniqueness checked before insert and before an ISBN-changing update;
      a unique-index violation at commit (a racing writer) maps to the same
      DuplicateIsbnError
    - Updates apply only BookUpdate's allow-listed fields
    - Missing books raise BookNotFoundError (404)
    - Deleting a book leaves its borrow records untouched

Design Decisions:
    - sortBy maps through BOOK_SORT_FIELDS: unknown keys fall back to createdAt
      instead of reaching the query
    - Secondary ordering by id keeps pages stable when timestamps tie
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from library_api.core.domain_types import (
    BOOK_SORT_FIELDS, DEFAULT_LIST_LIMIT, DEFAULT_SORT_FIELD,
    FEATURED_BOOKS_LIMIT, SortDirection,
)
from library_api.core.errors import BookNotFoundError, DuplicateIsbnError
from library_api.models.book import Book
from library_api.schemas.book import BookCreate, BookUpdate

logger = logging.getLogger(__name__)


class BookService:
    """Catalog operations bound to one request session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_book(self, data: BookCreate) -> Book:
        await self._ensure_isbn_free(data.isbn)
        book = Book(
            title=data.title,
            author=data.author,
            genre=data.genre.value,
            isbn=data.isbn,
            description=data.description,
            copies=data.copies,
            available=data.available,
        )
        self.db.add(book)
        await self._commit(isbn=data.isbn)
        await self.db.refresh(book)
        logger.info(
            f"Book created: {book.title}",
            extra={"book_id": book.id, "isbn": book.isbn},
        )
        return book

    async def list_books(
        self,
        genre: str | None = None,
        sort_by: str = DEFAULT_SORT_FIELD,
        sort: str = SortDirection.DESC.value,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> list[Book]:
        """List books, optionally filtered by genre. limit=0 returns all."""
        attr = BOOK_SORT_FIELDS.get(sort_by, BOOK_SORT_FIELDS[DEFAULT_SORT_FIELD])
        column = getattr(Book, attr)
        if sort == SortDirection.ASC.value:
            ordering = (column.asc(), Book.id.asc())
        else:
            ordering = (column.desc(), Book.id.desc())

        query = select(Book).order_by(*ordering)
        if genre:
            query = query.where(Book.genre == genre)
        if limit > 0:
            query = query.limit(limit)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def featured_books(self) -> list[Book]:
        """Newest available books."""
        result = await self.db.execute(
            select(Book)
            .where(Book.available.is_(True))
            .order_by(Book.created_at.desc(), Book.id.desc())
            .limit(FEATURED_BOOKS_LIMIT),
        )
        return list(result.scalars().all())

    async def get_book(self, book_id: str) -> Book:
        book = await self.db.get(Book, book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return book

    async def update_book(self, book_id: str, data: BookUpdate) -> Book:
        book = await self.get_book(book_id)
        changes = data.changes()
        new_isbn = changes.get("isbn")
        if new_isbn == book.isbn:
            new_isbn = None
        if new_isbn is not None:
            await self._ensure_isbn_free(new_isbn)

        for key, value in changes.items():
            setattr(book, key, value)

        await self._commit(isbn=new_isbn)
        await self.db.refresh(book)
        logger.info(
            f"Book updated: {', '.join(changes) or 'no changes'}",
            extra={"book_id": book.id},
        )
        return book

    async def delete_book(self, book_id: str) -> None:
        book = await self.get_book(book_id)
        await self.db.delete(book)
        await self.db.commit()
        logger.info("Book deleted", extra={"book_id": book_id})

    async def _ensure_isbn_free(self, isbn: str) -> None:
        result = await self.db.execute(
            select(Book.id).where(Book.isbn == isbn).limit(1),
        )
        if result.scalar_one_or_none() is not None:
            raise DuplicateIsbnError(isbn)

    async def _commit(self, isbn: str | None = None) -> None:
        """Commit; a unique-index hit on `isbn` becomes DuplicateIsbnError."""
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            if isbn is not None:
                await self._ensure_isbn_free(isbn)
            raise
