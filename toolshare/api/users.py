"""User API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from toolshare.api.dependencies import (
    get_borrowing_service,
    get_credential_store,
    get_current_user,
    get_tool_service,
)
from toolshare.models.user import User
from toolshare.schemas.auth import UserResponse, UserUpdate
from toolshare.services.borrowings import BorrowingService
from toolshare.services.credentials import CredentialStore
from toolshare.services.errors import NotFoundError, store_errors
from toolshare.services.tools import ToolService

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def get_users(
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
):
    """Get all users."""
    return store.list_all()


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
):
    """Get a specific user."""
    user = store.find_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    user_data: UserUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
):
    """Update a user's name, email or password."""
    return await store.update(
        user_id,
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
    )


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    tool_service: Annotated[ToolService, Depends(get_tool_service)],
    borrowing_service: Annotated[BorrowingService, Depends(get_borrowing_service)],
):
    """Delete a user with their sessions, tools and borrowings."""
    if store.find_by_id(user_id) is None:
        raise NotFoundError("User not found")

    # Staged in the same transaction the store commits
    with store_errors(store.db):
        borrowing_service.delete_for_user(user_id)
        tool_service.delete_owned_by(user_id)
    store.delete(user_id)
