"""Pytest configuration and fixtures."""

import os

# Must be set before toolshare reads its settings
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from toolshare import models  # noqa: E402, F401
from toolshare.database import Base, engine, get_db  # noqa: E402
from toolshare.main import app  # noqa: E402

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id, email and token."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email

    @property
    def token(self) -> str:
        return self["Authorization"].removeprefix("Bearer ")


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop database - each test cleans up after itself


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def session_factory():
    """Open additional independent sessions, closed after the test."""
    sessions = []

    def _open():
        session = TestingSessionLocal()
        sessions.append(session)
        return session

    yield _open

    for session in sessions:
        session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register_user(client, email: str, name: str = "Test User", password: str = "testpass123"):
    """Register a user through the API and return auth headers for them."""
    response = client.post(
        "/api/v1/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"},
        user_id=data["user"]["id"],
        email=data["user"]["email"],
    )


@pytest.fixture
def make_user(client):
    """Register extra users: ``make_user("a@example.com")``."""

    def _make(email: str, name: str = "Test User", password: str = "testpass123"):
        return register_user(client, email, name=name, password=password)

    return _make


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return register_user(client, "test@example.com")


@pytest.fixture
def other_headers(client):
    """A second registered user."""
    return register_user(client, "other@example.com", name="Other User")
