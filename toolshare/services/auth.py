"""Authentication service: registration, login and token lifecycle."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from toolshare.models.user import User
from toolshare.services.credentials import CredentialStore
from toolshare.services.errors import (
    AlreadyExistsError,
    InvalidCredentialsError,
    MissingFieldsError,
    UnauthenticatedError,
)
from toolshare.services.passwords import verify_password_async
from toolshare.services.sessions import Clock, SessionIssuer, SessionValidator, utcnow

logger = logging.getLogger(__name__)


@dataclass
class AuthResult:
    """An authenticated user together with their new session token."""

    user: User
    token: str
    expires_at: datetime


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class AuthService:
    """Entry point the API layer uses for everything authentication related."""

    def __init__(self, db: Session, clock: Clock = utcnow, session_ttl: timedelta | None = None):
        self.credentials = CredentialStore(db)
        self.issuer = SessionIssuer(db, clock=clock, ttl=session_ttl)
        self.validator = SessionValidator(db, self.issuer)

    async def register(
        self, name: str | None, email: str | None, password: str | None
    ) -> AuthResult:
        """Create an account and log it in."""
        if _is_blank(name) or _is_blank(email) or not password:
            raise MissingFieldsError("Name, email, and password are required")

        # Fast path only; the unique index on users.email is what guarantees this
        if self.credentials.find_by_email(email) is not None:
            raise AlreadyExistsError()

        user = await self.credentials.create(name, email, password)
        issued = self.issuer.issue(user.id)
        logger.info(f"Registered user {user.id}")
        return AuthResult(user=user, token=issued.token, expires_at=issued.expires_at)

    async def login(self, email: str | None, password: str | None) -> AuthResult:
        """Check credentials and start a new session.

        Unknown email and wrong password fail identically.
        """
        if _is_blank(email) or not password:
            raise MissingFieldsError("Email and password are required")

        user = self.credentials.find_by_email(email)
        if user is None or not await verify_password_async(password, user.password_hash):
            logger.warning("Failed login attempt")
            raise InvalidCredentialsError()

        issued = self.issuer.issue(user.id)
        logger.info(f"User {user.id} logged in")
        return AuthResult(user=user, token=issued.token, expires_at=issued.expires_at)

    def logout(self, token: str | None) -> None:
        """End the session for ``token``; without a token there is nothing to do."""
        if token:
            self.validator.revoke(token)

    def get_current_user(self, token: str | None) -> User:
        if not token:
            raise UnauthenticatedError("No token provided")

        user = self.validator.validate(token)
        if user is None:
            raise UnauthenticatedError()
        return user

    def refresh_token(self, token: str | None) -> AuthResult:
        """Replace a valid token with a fresh one."""
        if not token:
            raise UnauthenticatedError("No token provided")

        issued = self.validator.refresh(token)
        if issued is None:
            raise UnauthenticatedError()

        user = self.credentials.find_by_id(issued.user_id)
        if user is None:
            raise UnauthenticatedError()
        logger.info(f"Refreshed session for user {user.id}")
        return AuthResult(user=user, token=issued.token, expires_at=issued.expires_at)
