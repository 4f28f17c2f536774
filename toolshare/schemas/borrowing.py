"""Borrowing schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from toolshare.models.enums import BorrowingStatus


class BorrowingCreate(BaseModel):
    """Borrow a tool."""

    tool_id: int
    due_date: datetime | None = None


class BorrowingResponse(BaseModel):
    """Borrowing response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    tool_id: int
    borrower_id: int
    due_date: datetime | None
    returned_at: datetime | None
    status: BorrowingStatus
    created_at: datetime
    updated_at: datetime
