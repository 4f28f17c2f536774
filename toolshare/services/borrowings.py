"""Borrowing service for lending tools between users."""

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from toolshare.models.borrowing import Borrowing
from toolshare.models.enums import BorrowingStatus
from toolshare.models.tool import Tool
from toolshare.models.user import User
from toolshare.services.errors import ConflictError, ForbiddenError, NotFoundError, store_errors

logger = logging.getLogger(__name__)


class BorrowingService:
    """Service for borrowing-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def list_borrowings(
        self, borrower_id: int | None = None, active_only: bool = False
    ) -> list[Borrowing]:
        query = self.db.query(Borrowing)
        if borrower_id is not None:
            query = query.filter(Borrowing.borrower_id == borrower_id)
        if active_only:
            query = query.filter(Borrowing.status == BorrowingStatus.ACTIVE.value)
        with store_errors(self.db):
            return query.order_by(Borrowing.id).all()

    def get_borrowing(self, borrowing_id: int) -> Borrowing:
        with store_errors(self.db):
            borrowing = self.db.query(Borrowing).filter(Borrowing.id == borrowing_id).first()
        if borrowing is None:
            raise NotFoundError("Borrowing not found")
        return borrowing

    def borrow_tool(
        self, tool_id: int, borrower: User, due_date: datetime | None = None
    ) -> Borrowing:
        """Lend a tool to ``borrower``.

        Availability is claimed with a single conditional UPDATE, so only one
        of several concurrent requests for the same tool can win.
        """
        with store_errors(self.db):
            tool = self.db.query(Tool).filter(Tool.id == tool_id).first()
        if tool is None:
            raise NotFoundError("Tool not found")
        if tool.owner_id == borrower.id:
            raise ConflictError("You cannot borrow your own tool")

        with store_errors(self.db):
            claimed = (
                self.db.query(Tool)
                .filter(Tool.id == tool_id, Tool.available.is_(True))
                .update({Tool.available: False}, synchronize_session=False)
            )
            if not claimed:
                self.db.rollback()
                raise ConflictError("Tool is not available")

            borrowing = Borrowing(
                tool_id=tool_id,
                borrower_id=borrower.id,
                due_date=due_date,
                status=BorrowingStatus.ACTIVE.value,
            )
            self.db.add(borrowing)
            self.db.commit()

        self.db.refresh(borrowing)
        logger.info(f"User {borrower.id} borrowed tool {tool_id}")
        return borrowing

    def return_tool(self, borrowing_id: int, user: User) -> Borrowing:
        """Close a borrowing (borrower or tool owner) and free the tool."""
        borrowing = self.get_borrowing(borrowing_id)
        tool = borrowing.tool
        if user.id not in (borrowing.borrower_id, tool.owner_id):
            raise ForbiddenError("Only the borrower or the owner can return this tool")
        if not BorrowingStatus(borrowing.status).is_open():
            raise ConflictError("Tool already returned")

        borrowing.status = BorrowingStatus.RETURNED.value
        borrowing.returned_at = datetime.now(UTC)
        tool.available = True

        with store_errors(self.db):
            self.db.commit()
        self.db.refresh(borrowing)
        logger.info(f"Borrowing {borrowing.id} returned by user {user.id}")
        return borrowing

    def delete_for_user(self, user_id: int) -> None:
        """Stage deletion of a user's borrowings, freeing tools they still hold.

        Does not commit; the caller finishes the transaction.
        """
        held = (
            self.db.query(Borrowing.tool_id)
            .filter(
                Borrowing.borrower_id == user_id,
                Borrowing.status == BorrowingStatus.ACTIVE.value,
            )
            .scalar_subquery()
        )
        self.db.query(Tool).filter(Tool.id.in_(held)).update(
            {Tool.available: True}, synchronize_session=False
        )
        self.db.query(Borrowing).filter(Borrowing.borrower_id == user_id).delete(
            synchronize_session=False
        )
