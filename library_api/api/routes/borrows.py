"""Borrow Routes: lend copies and report borrowed totals per book."""

from fastapi import APIRouter, Depends, status

from library_api.api.dependencies import get_borrow_service
from library_api.api.envelope import dump, dump_all, success
from library_api.schemas.borrow import BorrowCreate, BorrowRead
from library_api.services.borrow_service import BorrowService

router = APIRouter(prefix="/api/borrow", tags=["borrow"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def borrow_book(
    body: BorrowCreate, service: BorrowService = Depends(get_borrow_service),
):
    borrow = await service.borrow_book(body)
    return success("Book borrowed successfully", dump(BorrowRead.model_validate(borrow)))


@router.get("")
async def borrowed_books_summary(
    service: BorrowService = Depends(get_borrow_service),
):
    """Borrowed quantity per book: [{book: {title, isbn}, totalQuantity}]."""
    entries = await service.summary()
    return success(
        "Borrowed books summary retrieved successfully", dump_all(entries),
    )
