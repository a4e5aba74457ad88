"""Book Service: ISBN uniqueness when the pre-check is outrun by another writer.

Invariants:
    - A unique-index violation at commit surfaces as DuplicateIsbnError (400)
    - The failed write is rolled back; the existing book is untouched
    - Integrity errors unrelated to a changed ISBN propagate unchanged
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from library_api.core.errors import DuplicateIsbnError
from library_api.models.book import Book
from library_api.schemas.book import BookCreate, BookUpdate
from library_api.services.book_service import BookService


def _payload(**overrides) -> BookCreate:
    data = {"title": "Dune", "author": "Herbert", "genre": "FICTION", "isbn": "978-0", "copies": 3}
    data.update(overrides)
    return BookCreate(**data)


def _skip_first_isbn_check(service: BookService, monkeypatch) -> None:
    """Let the first ISBN check pass as if another writer had not committed yet."""
    real_check = service._ensure_isbn_free
    calls = []

    async def racing_check(isbn):
        calls.append(isbn)
        if len(calls) > 1:
            await real_check(isbn)

    monkeypatch.setattr(service, "_ensure_isbn_free", racing_check)


async def test_create_racing_duplicate_isbn_maps_to_duplicate_error(
    test_session_factory, monkeypatch,
):
    async with test_session_factory() as first:
        await BookService(first).create_book(_payload())

    async with test_session_factory() as second:
        service = BookService(second)
        _skip_first_isbn_check(service, monkeypatch)
        with pytest.raises(DuplicateIsbnError) as exc_info:
            await service.create_book(_payload(title="Other"))

    assert exc_info.value.http_status == 400
    assert exc_info.value.violations["isbn"].kind == "unique"
    async with test_session_factory() as check:
        assert await check.scalar(select(func.count()).select_from(Book)) == 1


async def test_update_racing_duplicate_isbn_maps_to_duplicate_error(
    test_session_factory, monkeypatch,
):
    async with test_session_factory() as setup:
        await BookService(setup).create_book(_payload())
        other = await BookService(setup).create_book(_payload(isbn="978-1"))
        other_id = other.id

    async with test_session_factory() as session:
        service = BookService(session)
        _skip_first_isbn_check(service, monkeypatch)
        with pytest.raises(DuplicateIsbnError):
            await service.update_book(other_id, BookUpdate(isbn="978-0"))

    async with test_session_factory() as check:
        assert (await check.get(Book, other_id)).isbn == "978-1"


async def test_integrity_error_without_isbn_change_propagates():
    db = MagicMock()
    db.commit = AsyncMock(side_effect=IntegrityError("UPDATE books", {}, Exception("CHECK")))
    db.rollback = AsyncMock()
    db.execute = AsyncMock()

    with pytest.raises(IntegrityError):
        await BookService(db)._commit()

    db.rollback.assert_awaited_once()
    db.execute.assert_not_awaited()
