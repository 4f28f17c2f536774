"""Bearer-token sessions: issuing, validating, revoking and refreshing.

Tokens are JWTs signed with the application secret. The signature only proves
that we minted the token; the ``sessions`` table decides whether it is still
valid, so logout and refresh take effect immediately.
"""

import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from sqlalchemy.orm import Session

from toolshare.config import get_settings
from toolshare.models.session import AuthSession
from toolshare.models.user import User
from toolshare.services.errors import store_errors

logger = logging.getLogger(__name__)
settings = get_settings()

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class IssuedSession:
    """A freshly minted token and the moment it stops being valid."""

    token: str
    expires_at: datetime
    user_id: int


class SessionIssuer:
    """Mints signed tokens and records a session row for each."""

    def __init__(
        self,
        db: Session,
        clock: Clock = utcnow,
        ttl: timedelta | None = None,
        secret: str | None = None,
        algorithm: str | None = None,
    ):
        self.db = db
        self.clock = clock
        self.ttl = ttl if ttl is not None else timedelta(minutes=settings.session_ttl_minutes)
        self.secret = secret or settings.jwt_secret
        self.algorithm = algorithm or settings.jwt_algorithm

    def issue(self, user_id: int, ttl: timedelta | None = None) -> IssuedSession:
        """Create a session for ``user_id``.

        Every call adds a row; a user may hold any number of live sessions.
        """
        now = self.clock()
        expires_at = now + (ttl if ttl is not None else self.ttl)
        claims = {
            "sub": str(user_id),
            "iat": now,
            "exp": expires_at,
            "jti": secrets.token_urlsafe(16),
        }
        token = jwt.encode(claims, self.secret, algorithm=self.algorithm)

        self.db.add(AuthSession(user_id=user_id, token=token, expires_at=expires_at))
        with store_errors(self.db):
            self.db.commit()

        return IssuedSession(token=token, expires_at=expires_at, user_id=user_id)


class SessionValidator:
    """Resolves tokens to users against the session table."""

    def __init__(self, db: Session, issuer: SessionIssuer, clock: Clock | None = None):
        self.db = db
        self.issuer = issuer
        self.clock = clock or issuer.clock

    def validate(self, token: str) -> User | None:
        now = self.clock()
        try:
            # Expiry is judged against our clock by the session row below
            jwt.decode(
                token,
                self.issuer.secret,
                algorithms=[self.issuer.algorithm],
                options={"verify_exp": False},
            )
        except JWTError:
            return None

        with store_errors(self.db):
            user = (
                self.db.query(User)
                .join(AuthSession, AuthSession.user_id == User.id)
                .filter(AuthSession.token == token, AuthSession.expires_at > now)
                .first()
            )
        if user is None:
            self._collect_expired(token, now)
        return user

    def revoke(self, token: str) -> None:
        """Delete the session for ``token``; unknown tokens are ignored."""
        with store_errors(self.db):
            deleted = (
                self.db.query(AuthSession)
                .filter(AuthSession.token == token)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        if deleted:
            logger.debug("Revoked session")

    def refresh(self, old_token: str) -> IssuedSession | None:
        """Swap ``old_token`` for a new session.

        The new session is committed before the old one is revoked, so a
        failure part way leaves the caller holding a working token.
        """
        user = self.validate(old_token)
        if user is None:
            return None

        issued = self.issuer.issue(user.id)
        self.revoke(old_token)
        return issued

    def _collect_expired(self, token: str, now: datetime) -> None:
        with store_errors(self.db):
            removed = (
                self.db.query(AuthSession)
                .filter(AuthSession.token == token, AuthSession.expires_at <= now)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        if removed:
            logger.debug("Removed expired session")
