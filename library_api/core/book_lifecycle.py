"""Book Lifecycle: the copies/availability rules applied on borrow and persist.

Invariants:
    - copies never goes below 0
    - copies == 0 implies available is False whenever a book is persisted
    - A borrow of more than the stocked copies is rejected before any write

Design Decisions:
    - Pure functions over BookLike: the shell decides when to write, so the
      same rules run for ORM instances and plain test doubles
"""

from library_api.core.errors import InsufficientCopiesError
from library_api.core.repository_protocols import BookLike


def ensure_sufficient_copies(copies: int, quantity: int) -> None:
    """Reject a borrow of `quantity` from a stock of `copies`."""
    if quantity > copies:
        raise InsufficientCopiesError(available=copies, requested=quantity)


def enforce_availability(book: BookLike) -> BookLike:
    """Force available off for a book with no copies. Run before every persist."""
    if book.copies == 0:
        book.available = False
    return book
