"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from toolshare.api.dependencies import get_auth_service, get_bearer_token, get_current_user
from toolshare.models.user import User
from toolshare.schemas.auth import (
    AuthResponse,
    MessageResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from toolshare.services.auth import AuthService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Register a new user and start a session."""
    result = await auth_service.register(user_data.name, user_data.email, user_data.password)
    return AuthResponse.model_validate(result)


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Login with email and password."""
    result = await auth_service.login(credentials.email, credentials.password)
    return AuthResponse.model_validate(result)


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user


@router.post("/refresh", response_model=AuthResponse)
async def refresh(
    token: Annotated[str | None, Depends(get_bearer_token)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Exchange the current token for a new one."""
    result = auth_service.refresh_token(token)
    return AuthResponse.model_validate(result)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    token: Annotated[str | None, Depends(get_bearer_token)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Logout, ending the session behind the token."""
    auth_service.logout(token)
    return {"message": "Logout successful"}
