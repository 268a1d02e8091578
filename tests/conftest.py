"""Pytest configuration and fixtures."""

import os
from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from interne import models  # noqa: F401
from interne.api.dependencies import get_now
from interne.config import Settings, get_settings
from interne.database import Base, get_db
from interne.main import app
from interne.services.auth import create_user


class AuthHeaders(dict):
    """Dict subclass that also stores user_id."""

    def __init__(self, *args, user_id: int | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id


class Clock:
    """Controllable replacement for the request clock."""

    def __init__(self, now: datetime):
        self.now = now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


SQLALCHEMY_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


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
def now():
    """Fixed reference time for tests."""
    return datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def clock(now):
    """Clock used by the API; tests move it forward explicitly."""
    return Clock(now)


@pytest.fixture
def settings():
    """Settings with jitter disabled so labels are exact."""
    return Settings(entropy=0)


@pytest.fixture(scope="function")
def client(db, clock, settings):
    """Create a test client with database, clock and settings overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: clock.now
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def user_factory(db):
    """Create users directly in the database."""

    def create(name: str = "Test User", email: str | None = None):
        return create_user(db, name, email)

    return create


@pytest.fixture
def login(client):
    """Log a user in with their invite code and return auth headers."""

    def _login(user) -> AuthHeaders:
        response = client.post("/api/v1/auth/login", json={"invite_code": user.invite_code})
        assert response.status_code == 200
        token = response.json()["access_token"]
        return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=user.id)

    return _login


@pytest.fixture
def auth_headers(user_factory, login):
    """Create a user and return auth headers with user info."""
    return login(user_factory("Test User", "test@example.com"))


@pytest.fixture
def other_headers(user_factory, login):
    """A second, unrelated user."""
    return login(user_factory("Other User", "other@example.com"))


@pytest.fixture
def entry_payload():
    """Valid body for creating an entry."""
    return {
        "url": "https://example.com/article",
        "title": "An article",
        "description": "Worth rereading",
        "duration": 3,
        "interval": "days",
    }
