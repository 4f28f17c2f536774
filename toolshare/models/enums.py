"""Enums for model fields."""

from enum import Enum


class BorrowingStatus(str, Enum):
    """Lifecycle states of a borrowing."""

    ACTIVE = "active"
    RETURNED = "returned"

    def is_open(self) -> bool:
        """Check if the tool is still out with the borrower."""
        return self == BorrowingStatus.ACTIVE
