"""User model."""

from sqlalchemy import Column, Integer, String

from toolshare.database import Base
from toolshare.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and tool ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    # Stored normalized (stripped, lower-cased); the unique index is the duplicate check
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
