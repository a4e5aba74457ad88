"""Route dependencies: path parameter validation and service factories.

Invariants:
    - A malformed bookId raises ValidationFailedError before any query runs
"""

from fastapi import Depends, Path
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from library_api.core.errors import ValidationFailedError
from library_api.core.validation import violations_from_errors
from library_api.infrastructure.database import get_db
from library_api.schemas.book import BookIdParams
from library_api.services.book_service import BookService
from library_api.services.borrow_service import BorrowService


def valid_book_id(bookId: str = Path()) -> str:
    """Validated, lowercased book id from the path."""
    try:
        return BookIdParams(bookId=bookId).bookId
    except ValidationError as e:
        raise ValidationFailedError(violations_from_errors(e.errors())) from e


def get_book_service(db: AsyncSession = Depends(get_db)) -> BookService:
    return BookService(db)


def get_borrow_service(db: AsyncSession = Depends(get_db)) -> BorrowService:
    return BorrowService(db)
