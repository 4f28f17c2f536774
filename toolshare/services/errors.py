"""Service-level failures.

Each error carries a ``kind`` tag and the HTTP status the API layer maps it to.
Services raise these; ``toolshare.main`` turns them into JSON responses.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import status
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base class for tagged service failures."""

    kind = "service_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Unexpected error"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {"detail": self.message, "kind": self.kind}


class MissingFieldsError(ServiceError):
    kind = "missing_fields"
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Required fields are missing"


class NoFieldsError(ServiceError):
    kind = "no_fields"
    status_code = status.HTTP_400_BAD_REQUEST
    message = "No fields to update"


class InvalidCredentialsError(ServiceError):
    """Raised for both unknown email and wrong password."""

    kind = "invalid_credentials"
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials"


class UnauthenticatedError(ServiceError):
    kind = "unauthenticated"
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid or expired token"


class ForbiddenError(ServiceError):
    kind = "forbidden"
    status_code = status.HTTP_403_FORBIDDEN
    message = "You don't have permission to do that"


class NotFoundError(ServiceError):
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class AlreadyExistsError(ServiceError):
    kind = "already_exists"
    status_code = status.HTTP_409_CONFLICT
    message = "User already exists"


class DuplicateEmailError(AlreadyExistsError):
    """The store's unique email index rejected an insert or update."""


class ConflictError(ServiceError):
    kind = "conflict"
    status_code = status.HTTP_409_CONFLICT
    message = "Request conflicts with current state"


class StoreUnavailableError(ServiceError):
    """The database failed underneath an operation; callers may retry once."""

    kind = "store_unavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    message = "Storage is temporarily unavailable"


@contextmanager
def store_errors(db: Session) -> Iterator[None]:
    """Roll back and surface database outages as StoreUnavailableError."""
    try:
        yield
    except OperationalError as e:
        db.rollback()
        logger.error(f"Database operation failed: {e}")
        raise StoreUnavailableError() from e
