"""Tool service for managing lendable tools."""

import logging

from sqlalchemy.orm import Session

from toolshare.models.borrowing import Borrowing
from toolshare.models.enums import BorrowingStatus
from toolshare.models.tool import Tool
from toolshare.models.user import User
from toolshare.services.errors import (
    ConflictError,
    ForbiddenError,
    MissingFieldsError,
    NoFieldsError,
    NotFoundError,
    store_errors,
)

logger = logging.getLogger(__name__)


class ToolService:
    """Service for tool-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def list_tools(self, available: bool | None = None, owner_id: int | None = None) -> list[Tool]:
        query = self.db.query(Tool)
        if available is not None:
            query = query.filter(Tool.available == available)
        if owner_id is not None:
            query = query.filter(Tool.owner_id == owner_id)
        with store_errors(self.db):
            return query.order_by(Tool.id).all()

    def get_tool(self, tool_id: int) -> Tool:
        with store_errors(self.db):
            tool = self.db.query(Tool).filter(Tool.id == tool_id).first()
        if tool is None:
            raise NotFoundError("Tool not found")
        return tool

    def create_tool(self, owner: User, name: str | None, description: str | None = None) -> Tool:
        if name is None or not name.strip():
            raise MissingFieldsError("Tool name is required")

        tool = Tool(name=name.strip(), description=description, owner_id=owner.id)
        self.db.add(tool)
        with store_errors(self.db):
            self.db.commit()
        self.db.refresh(tool)
        logger.info(f"User {owner.id} listed tool {tool.id}")
        return tool

    def update_tool(
        self,
        tool_id: int,
        owner: User,
        *,
        name: str | None = None,
        description: str | None = None,
        available: bool | None = None,
    ) -> Tool:
        """Update a tool (owner only)."""
        tool = self._owned_tool(tool_id, owner)
        if name is None and description is None and available is None:
            raise NoFieldsError()

        if name is not None:
            if not name.strip():
                raise MissingFieldsError("Tool name is required")
            tool.name = name.strip()
        if description is not None:
            tool.description = description if description else None
        if available is not None:
            if available and self._active_borrowing(tool.id) is not None:
                raise ConflictError("Tool is currently borrowed")
            tool.available = available

        with store_errors(self.db):
            self.db.commit()
        self.db.refresh(tool)
        return tool

    def delete_tool(self, tool_id: int, owner: User) -> None:
        """Delete a tool and its borrowing history (owner only)."""
        tool = self._owned_tool(tool_id, owner)
        if self._active_borrowing(tool.id) is not None:
            raise ConflictError("Tool is currently borrowed")

        with store_errors(self.db):
            self.db.query(Borrowing).filter(Borrowing.tool_id == tool.id).delete(
                synchronize_session=False
            )
            self.db.query(Tool).filter(Tool.id == tool.id).delete(synchronize_session=False)
            self.db.commit()
        logger.info(f"User {owner.id} deleted tool {tool_id}")

    def delete_owned_by(self, user_id: int) -> None:
        """Stage deletion of every tool a user owns, with their borrowings.

        Does not commit; the caller finishes the transaction.
        """
        tool_ids = self.db.query(Tool.id).filter(Tool.owner_id == user_id).scalar_subquery()
        self.db.query(Borrowing).filter(Borrowing.tool_id.in_(tool_ids)).delete(
            synchronize_session=False
        )
        self.db.query(Tool).filter(Tool.owner_id == user_id).delete(synchronize_session=False)

    def _owned_tool(self, tool_id: int, owner: User) -> Tool:
        tool = self.get_tool(tool_id)
        if tool.owner_id != owner.id:
            raise ForbiddenError("Only the owner can change this tool")
        return tool

    def _active_borrowing(self, tool_id: int) -> Borrowing | None:
        return (
            self.db.query(Borrowing)
            .filter(
                Borrowing.tool_id == tool_id,
                Borrowing.status == BorrowingStatus.ACTIVE.value,
            )
            .first()
        )
