"""Pydantic schemas for API requests and responses."""

from toolshare.schemas.auth import (
    AuthResponse,
    MessageResponse,
    UserLogin,
    UserRegister,
    UserResponse,
    UserUpdate,
)
from toolshare.schemas.borrowing import BorrowingCreate, BorrowingResponse
from toolshare.schemas.tool import ToolCreate, ToolResponse, ToolUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "UserUpdate",
    "AuthResponse",
    "MessageResponse",
    "ToolCreate",
    "ToolUpdate",
    "ToolResponse",
    "BorrowingCreate",
    "BorrowingResponse",
]
