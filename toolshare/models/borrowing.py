"""Borrowing model."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from toolshare.database import Base
from toolshare.models.enums import BorrowingStatus
from toolshare.models.mixins import TimestampMixin


class Borrowing(Base, TimestampMixin):
    """A loan of a tool to a borrower."""

    __tablename__ = "borrowings"

    id = Column(Integer, primary_key=True, index=True)
    tool_id = Column(Integer, ForeignKey("tools.id"), nullable=False, index=True)
    borrower_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    due_date = Column(DateTime(timezone=True), nullable=True)
    returned_at = Column(DateTime(timezone=True), nullable=True)
    status = Column(String(20), nullable=False, default=BorrowingStatus.ACTIVE.value)  # 'active', 'returned'

    # Relationships
    tool = relationship("Tool", back_populates="borrowings")
    borrower = relationship("User", backref="borrowings")
