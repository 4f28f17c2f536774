"""Borrowing API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from toolshare.api.dependencies import get_borrowing_service, get_current_user
from toolshare.models.user import User
from toolshare.schemas.borrowing import BorrowingCreate, BorrowingResponse
from toolshare.services.borrowings import BorrowingService

router = APIRouter(prefix="/api/v1/borrowings", tags=["borrowings"])


@router.get("", response_model=list[BorrowingResponse])
def get_borrowings(
    current_user: Annotated[User, Depends(get_current_user)],
    borrowing_service: Annotated[BorrowingService, Depends(get_borrowing_service)],
    active_only: bool = False,
    mine: bool = False,
):
    """Get borrowings, optionally only open ones or the current user's."""
    borrower_id = current_user.id if mine else None
    return borrowing_service.list_borrowings(borrower_id=borrower_id, active_only=active_only)


@router.post("", response_model=BorrowingResponse, status_code=status.HTTP_201_CREATED)
def borrow_tool(
    borrowing_data: BorrowingCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    borrowing_service: Annotated[BorrowingService, Depends(get_borrowing_service)],
):
    """Borrow an available tool."""
    return borrowing_service.borrow_tool(
        borrowing_data.tool_id, current_user, due_date=borrowing_data.due_date
    )


@router.get("/{borrowing_id}", response_model=BorrowingResponse)
def get_borrowing(
    borrowing_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    borrowing_service: Annotated[BorrowingService, Depends(get_borrowing_service)],
):
    """Get a specific borrowing."""
    return borrowing_service.get_borrowing(borrowing_id)


@router.post("/{borrowing_id}/return", response_model=BorrowingResponse)
def return_tool(
    borrowing_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    borrowing_service: Annotated[BorrowingService, Depends(get_borrowing_service)],
):
    """Return a borrowed tool."""
    return borrowing_service.return_tool(borrowing_id, current_user)
