"""Pytest configuration and fixtures."""

import os

# Test settings must be in place before devfolio.config is first imported
if not os.getenv("DATABASE_URL"):
    os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from unittest.mock import MagicMock, patch  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from devfolio import models  # noqa: E402, F401
from devfolio.database import Base, dump_json, get_db  # noqa: E402
from devfolio.main import app  # noqa: E402
from devfolio.models.user import User  # noqa: E402

SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"]
TEST_PASSWORD = "Testpass123"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args=connect_args, json_serializer=dump_json
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

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


@pytest.fixture(autouse=True)
def mock_redis():
    """Replace the publishing Redis client; tests never need a live server."""
    client = MagicMock()
    with patch("devfolio.services.realtime.get_sync_redis", return_value=client):
        yield client


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


@pytest.fixture
def register(client):
    """Factory that signs up a user and returns their auth headers."""

    def _register(name: str = "Test User", email: str = "test@example.com") -> AuthHeaders:
        response = client.post(
            "/api/auth/signup",
            json={
                "name": name,
                "email": email,
                "password": TEST_PASSWORD,
                "confirmPassword": TEST_PASSWORD,
            },
        )
        assert response.status_code == 201, response.text
        data = response.json()
        return AuthHeaders(
            {"Authorization": f"Bearer {data['token']}"},
            user_id=data["user"]["id"],
            email=email,
        )

    return _register


@pytest.fixture
def auth_headers(register):
    """Create a user and return auth headers with user info."""
    return register()


@pytest.fixture
def other_headers(register):
    """A second, unrelated user."""
    return register("Other Person", "other@example.com")


@pytest.fixture
def admin_headers(register, db):
    """A user promoted to the admin role."""
    headers = register("Admin User", "admin@example.com")
    db.query(User).filter(User.id == headers.user_id).update({User.role: "admin"})
    db.commit()
    return headers
