"""Tool model."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from toolshare.database import Base
from toolshare.models.mixins import TimestampMixin


class Tool(Base, TimestampMixin):
    """A tool a user offers for lending."""

    __tablename__ = "tools"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(String, nullable=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    available = Column(Boolean, nullable=False, default=True, index=True)

    # Relationships
    owner = relationship("User", backref="tools")
    borrowings = relationship("Borrowing", back_populates="tool")
