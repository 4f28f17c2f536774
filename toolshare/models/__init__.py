"""SQLAlchemy models."""

from toolshare.models.borrowing import Borrowing
from toolshare.models.session import AuthSession
from toolshare.models.tool import Tool
from toolshare.models.user import User

__all__ = [
    "User",
    "AuthSession",
    "Tool",
    "Borrowing",
]
