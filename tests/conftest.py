"""Pytest configuration and fixtures."""

import os
import uuid
from datetime import datetime, timedelta

# Set test environment variables BEFORE importing app modules
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-access-secret-for-testing-only")
os.environ.setdefault("REFRESH_TOKEN_SECRET", "test-refresh-secret-for-testing-only")
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

# Patch PostgreSQL types for SQLite compatibility BEFORE importing models
from sqlalchemy import String, TypeDecorator
import sqlalchemy.dialects.postgresql as pg_dialect


class SQLiteUUID(TypeDecorator):
    """Platform-independent UUID type that works with SQLite."""
    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None:
            if isinstance(value, uuid.UUID):
                return str(value)
            return str(uuid.UUID(value))
        return value

    def process_result_value(self, value, dialect):
        if value is not None:
            return uuid.UUID(value)
        return value


# Monkey-patch the PostgreSQL UUID class before any models are imported
class MockUUID(SQLiteUUID):
    """Mock PostgreSQL UUID that works with SQLite for testing."""
    def __init__(self, as_uuid=True):
        super().__init__()
        self.as_uuid = as_uuid


pg_dialect.UUID = MockUUID

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from vidtube.core.config import settings
from vidtube.core.database import Base
from vidtube.core.security import TokenConfig
from vidtube.api.deps import get_db
from vidtube.services.token_service import TokenService
from main import app

API = "/api/v1"
TEST_PASSWORD = "Secret123"

# Create in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class ShiftableClock:
    """Clock for the token service; shifting it back mints tokens that are already old."""

    def __init__(self):
        self.offset = timedelta(0)

    def __call__(self) -> datetime:
        return datetime.utcnow() + self.offset

    def shift(self, **kwargs) -> None:
        self.offset = timedelta(**kwargs)

    def reset(self) -> None:
        self.offset = timedelta(0)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def clock():
    return ShiftableClock()


@pytest.fixture
def token_config():
    return TokenConfig.from_settings(settings)


@pytest.fixture
def token_service(token_config, clock):
    return TokenService(token_config, clock=clock)


@pytest.fixture(scope="function")
def client(db_session, token_service):
    """Create a test client with database and token service overrides."""
    original_service = app.state.token_service
    app.state.token_service = token_service
    app.dependency_overrides[get_db] = lambda: db_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    app.state.token_service = original_service


def user_payload(username: str) -> dict:
    return {
        "fullname": f"{username.title()} Example",
        "username": username,
        "email": f"{username}@example.com",
        "password": TEST_PASSWORD,
        "avatar": f"https://cdn.example.com/avatars/{username}.png",
    }


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register_user(client):
    """
    Factory: register a user and return its id, tokens and bearer headers.
    The client's cookie jar is cleared so later calls authenticate only
    with the headers they pass.
    """
    def _register(username: str) -> dict:
        response = client.post(f"{API}/users/register", json=user_payload(username))
        assert response.status_code == 201, response.text
        client.cookies.clear()
        data = response.json()
        return {
            "id": data["user"]["id"],
            "username": username,
            "access_token": data["access_token"],
            "refresh_token": data["refresh_token"],
            "headers": auth_headers(data["access_token"]),
        }

    return _register


@pytest.fixture
def alice(register_user):
    return register_user("alice")


@pytest.fixture
def bob(register_user):
    return register_user("bob")


@pytest.fixture
def create_video(client):
    """Factory: publish a video as the given user and return its JSON."""
    def _create(user: dict, title: str = "My first video", **overrides) -> dict:
        payload = {
            "title": title,
            "description": "A short description",
            "video_file": "https://cdn.example.com/videos/clip.mp4",
            "thumbnail": "https://cdn.example.com/thumbs/clip.png",
            "duration": 120,
        }
        payload.update(overrides)
        response = client.post(f"{API}/videos", json=payload, headers=user["headers"])
        assert response.status_code == 201, response.text
        return response.json()

    return _create
