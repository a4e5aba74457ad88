"""Book Routes: catalog CRUD plus the featured-books shelf.

Invariants:
    - Body and path validation happen before the service is called
    - Every success returns {success: true, message, data}
"""

from fastapi import APIRouter, Depends, Query, status

from library_api.api.dependencies import get_book_service, valid_book_id
from library_api.api.envelope import dump, dump_all, success
from library_api.core.domain_types import (
    DEFAULT_LIST_LIMIT, DEFAULT_SORT_FIELD, SortDirection,
)
from library_api.schemas.book import BookCreate, BookRead, BookUpdate
from library_api.services.book_service import BookService

router = APIRouter(prefix="/api", tags=["books"])


@router.post("/books", status_code=status.HTTP_201_CREATED)
async def create_book(
    body: BookCreate, service: BookService = Depends(get_book_service),
):
    book = await service.create_book(body)
    return success("Book created successfully", dump(BookRead.model_validate(book)))


@router.get("/books")
async def list_books(
    genre: str | None = Query(None, alias="filter"),
    sort_by: str = Query(DEFAULT_SORT_FIELD, alias="sortBy"),
    sort: str = Query(SortDirection.DESC.value),
    limit: int = Query(DEFAULT_LIST_LIMIT, ge=0),
    service: BookService = Depends(get_book_service),
):
    """List books. filter matches genre; sort is asc|desc; limit=0 means no limit."""
    books = await service.list_books(
        genre=genre, sort_by=sort_by, sort=sort, limit=limit,
    )
    return success(
        "Books retrieved successfully",
        dump_all(BookRead.model_validate(b) for b in books),
    )


@router.get("/featured-books")
async def featured_books(service: BookService = Depends(get_book_service)):
    books = await service.featured_books()
    return success(
        "Books retrieved successfully",
        dump_all(BookRead.model_validate(b) for b in books),
    )


@router.get("/books/{bookId}")
async def get_book(
    book_id: str = Depends(valid_book_id),
    service: BookService = Depends(get_book_service),
):
    book = await service.get_book(book_id)
    return success("Book retrieved successfully", dump(BookRead.model_validate(book)))


@router.put("/books/{bookId}")
async def update_book(
    body: BookUpdate,
    book_id: str = Depends(valid_book_id),
    service: BookService = Depends(get_book_service),
):
    book = await service.update_book(book_id, body)
    return success("Book updated successfully", dump(BookRead.model_validate(book)))


@router.delete("/books/{bookId}")
async def delete_book(
    book_id: str = Depends(valid_book_id),
    service: BookService = Depends(get_book_service),
):
    await service.delete_book(book_id)
    return success("Book deleted successfully", None)
