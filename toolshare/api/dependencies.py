"""FastAPI dependencies for authentication and database."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from toolshare.database import get_db
from toolshare.models.user import User
from toolshare.services.auth import AuthService
from toolshare.services.borrowings import BorrowingService
from toolshare.services.credentials import CredentialStore
from toolshare.services.tools import ToolService

# auto_error=False so a missing header reaches the auth service as None
security = HTTPBearer(auto_error=False)


def get_bearer_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str | None:
    """Extract the bearer token from the Authorization header, if any."""
    return credentials.credentials if credentials else None


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
) -> AuthService:
    """Get auth service bound to the request's database session."""
    return AuthService(db)


def get_current_user(
    token: Annotated[str | None, Depends(get_bearer_token)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> User:
    """Get the current authenticated user from the bearer token."""
    return auth_service.get_current_user(token)


def get_credential_store(
    db: Annotated[Session, Depends(get_db)],
) -> CredentialStore:
    return CredentialStore(db)


def get_tool_service(
    db: Annotated[Session, Depends(get_db)],
) -> ToolService:
    """Get tool service with dependencies."""
    return ToolService(db)


def get_borrowing_service(
    db: Annotated[Session, Depends(get_db)],
) -> BorrowingService:
    """Get borrowing service with dependencies."""
    return BorrowingService(db)
