"""
Pytest configuration and fixtures for all tests.
"""

import os
from datetime import datetime, timedelta

import pytz

# Must be set before config.py is imported
os.environ["JWT_SECRET"] = "test-signing-secret-with-at-least-32-bytes"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import app
from core.database import get_db
from core.dependencies import (
    get_clock,
    get_password_hasher,
    get_token_provider,
    get_upload_dir,
)
from core.security import PasswordHasher, TokenProvider
from models import Base

TEST_SECRET = os.environ["JWT_SECRET"]
DEFAULT_PASSWORD = "secret1"


class FakeTime:
    """Epoch-seconds clock for the token provider that only moves when told."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class TickClock:
    """Audit clock advancing one second per call."""

    def __init__(self):
        self.current = datetime(2024, 1, 1, tzinfo=pytz.utc)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture
def engine():
    """In-memory database shared by every session of a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def Session(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def session(Session):
    """Create a new database session for a test."""
    session = Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return TickClock()


@pytest.fixture
def fake_time():
    return FakeTime()


@pytest.fixture
def token_provider(fake_time):
    return TokenProvider(TEST_SECRET, 86_400_000, clock=fake_time)


@pytest.fixture
def password_hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def client(Session, clock, token_provider, password_hasher, upload_dir):
    def override_get_db():
        db = Session()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_token_provider] = lambda: token_provider
    app.dependency_overrides[get_password_hasher] = lambda: password_hasher
    app.dependency_overrides[get_upload_dir] = lambda: upload_dir
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register_user(client):
    """Register through the API and return ``(headers, user_json)``."""

    def _register(email, role="STUDENT", password=DEFAULT_PASSWORD, **profile):
        body = {"email": email, "password": password, "role": role, **profile}
        response = client.post("/auth/register", json=body)
        assert response.status_code == 200, response.text
        data = response.json()
        return bearer(data["accessToken"]), data["user"]

    return _register


@pytest.fixture
def instructor(register_user):
    return register_user("instructor@its.test", "INSTRUCTOR", firstName="Ada", lastName="Lovelace")


@pytest.fixture
def course(client, instructor):
    headers, _ = instructor
    response = client.post(
        "/courses",
        json={"title": "Algebra", "subject": "math", "difficulty": "BEGINNER"},
        headers=headers,
    )
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def topic(client, instructor, course):
    headers, _ = instructor
    response = client.post(
        "/topics", json={"name": "Equations", "courseId": course["id"]}, headers=headers
    )
    assert response.status_code == 200, response.text
    return response.json()
