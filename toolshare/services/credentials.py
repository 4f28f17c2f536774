"""Credential store: user records and their password hashes."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from toolshare.models.session import AuthSession
from toolshare.models.user import User
from toolshare.services.errors import (
    DuplicateEmailError,
    NoFieldsError,
    NotFoundError,
    StoreUnavailableError,
    store_errors,
)
from toolshare.services.passwords import hash_password_async

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Emails are compared and stored case-insensitively."""
    return email.strip().lower()


class CredentialStore:
    """Persistence for users, backed by the injected database session."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> User | None:
        with store_errors(self.db):
            return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def find_by_id(self, user_id: int) -> User | None:
        with store_errors(self.db):
            return self.db.query(User).filter(User.id == user_id).first()

    def list_all(self) -> list[User]:
        with store_errors(self.db):
            return self.db.query(User).order_by(User.id).all()

    async def create(self, name: str, email: str, password: str) -> User:
        """Create a user, hashing the password off the event loop.

        The unique email index decides duplicates, so two concurrent
        registrations for one address cannot both succeed.
        """
        password_hash = await hash_password_async(password)
        user = User(name=name.strip(), email=normalize_email(email), password_hash=password_hash)
        self.db.add(user)
        self._commit()
        self.db.refresh(user)
        return user

    async def update(
        self,
        user_id: int,
        *,
        name: str | None = None,
        email: str | None = None,
        password: str | None = None,
    ) -> User:
        """Update only the supplied fields; a new password is re-hashed."""
        user = self.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        if name is None and email is None and password is None:
            raise NoFieldsError()

        if name is not None:
            user.name = name.strip()
        if email is not None:
            user.email = normalize_email(email)
        if password is not None:
            user.password_hash = await hash_password_async(password)

        self._commit()
        self.db.refresh(user)
        return user

    def delete(self, user_id: int) -> None:
        """Delete a user's sessions, then the user, in a single transaction."""
        if self.find_by_id(user_id) is None:
            raise NotFoundError("User not found")

        try:
            self.db.query(AuthSession).filter(AuthSession.user_id == user_id).delete(
                synchronize_session=False
            )
            self.db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete user {user_id}: {e}")
            raise StoreUnavailableError("Could not delete user") from e

        logger.info(f"Deleted user {user_id} and their sessions")

    def _commit(self) -> None:
        with store_errors(self.db):
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                raise DuplicateEmailError() from None
