"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from store_ratings import models  # noqa: F401
from store_ratings.database import Base, get_db
from store_ratings.main import app
from store_ratings.models.enums import Role
from store_ratings.services.storage import StorageService

# Valid credentials reused across tests
PASSWORD = "Secret@123"
USER_NAME = "Regular Test User Account"
ADMIN_NAME = "Platform Administrator Test"
OWNER_NAME = "Store Owner Test Account"

# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace(
        "/store_ratings", "/store_ratings_test"
    )
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


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
def storage(db):
    """Persistence layer bound to the test session."""
    return StorageService(db)


@pytest.fixture
def login(client):
    """Return a helper that logs the test client in as the given account."""

    def _login(email: str, password: str = PASSWORD):
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return response.json()["user"]

    return _login


@pytest.fixture
def admin_user(storage):
    """An administrator, created directly since registration cannot grant roles."""
    return storage.create_user(
        name=ADMIN_NAME, email="admin@example.com", password=PASSWORD, role=Role.ADMIN
    )


@pytest.fixture
def owner_user(storage):
    """A store owner."""
    return storage.create_user(
        name=OWNER_NAME, email="owner@example.com", password=PASSWORD, role=Role.STORE_OWNER
    )


@pytest.fixture
def regular_user(client):
    """Register a user through the API and return its JSON representation."""
    response = client.post(
        "/api/auth/register",
        json={"name": USER_NAME, "email": "user@example.com", "password": PASSWORD},
    )
    assert response.status_code == 200
    return response.json()["user"]


@pytest.fixture
def store(storage, owner_user):
    """A store owned by owner_user with no ratings."""
    return storage.create_store(
        name="Corner Street Bakery",
        email="bakery@example.com",
        address="12 Corner Street",
        owner_id=owner_user.id,
    )


@pytest.fixture
def make_user(storage):
    """Return a helper that creates extra accounts with the shared password."""

    def _make_user(email: str, role: Role = Role.USER):
        return storage.create_user(
            name=f"Additional Test Account {email.split('@')[0]}"[:60],
            email=email,
            password=PASSWORD,
            role=role,
        )

    return _make_user
