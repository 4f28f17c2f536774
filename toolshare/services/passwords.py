"""Password hashing with bcrypt."""

from fastapi.concurrency import run_in_threadpool
from passlib.context import CryptContext

from toolshare.config import get_settings

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def hash_password(password: str) -> str:
    """Hash a password (salted, so the digest differs on every call)."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    A malformed or unrecognised digest counts as a mismatch.
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


async def hash_password_async(password: str) -> str:
    """Hash a password on the worker thread pool."""
    return await run_in_threadpool(hash_password, password)


async def verify_password_async(plain_password: str, hashed_password: str) -> bool:
    """Verify a password on the worker thread pool."""
    return await run_in_threadpool(verify_password, plain_password, hashed_password)
