"""
Pytest configuration and shared fixtures for the Job Tracker tests.
"""
import os

# Settings are read once at import time, so the environment goes first
os.environ["TESTING"] = "true"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SESSION_SECRET"] = "test-session-secret-0123456789abcdefghijklmnop"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "DEBUG"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from job_tracker_app.backend.main import app
from job_tracker_app.backend.models.db.database import get_db, Base
from job_tracker_app.backend.models.db import crud
from job_tracker_app.backend.security import get_password_hash


# Test Database Setup
@pytest.fixture(scope="function")
def test_db_engine():
    """Fresh in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def test_db_session(test_db_engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_db_engine)
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def session_factory(test_db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=test_db_engine)


@pytest.fixture(scope="function")
def test_client(session_factory):
    """Test client with the database dependency pointed at the test engine."""
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def make_client(test_client):
    """Extra clients with their own cookie jars, sharing the same database."""
    clients = []

    def _make():
        client = TestClient(app)
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


# User Fixtures
@pytest.fixture
def test_user_data():
    return {"username": "alice", "password": "secret1"}


@pytest.fixture
def other_user_data():
    return {"username": "bob", "password": "hunter22"}


@pytest.fixture
def test_user(test_db_session, test_user_data):
    """Create a user directly in the database."""
    return crud.create_user(
        test_db_session,
        username=test_user_data["username"],
        password_hash=get_password_hash(test_user_data["password"]),
    )


@pytest.fixture
def other_user(test_db_session, other_user_data):
    return crud.create_user(
        test_db_session,
        username=other_user_data["username"],
        password_hash=get_password_hash(other_user_data["password"]),
    )


@pytest.fixture
def auth_client(test_client, test_user_data):
    """Client holding a session cookie for a freshly registered user."""
    response = test_client.post("/api/auth/register", json=test_user_data)
    assert response.status_code == 201
    return test_client


@pytest.fixture
def other_auth_client(make_client, other_user_data):
    client = make_client()
    response = client.post("/api/auth/register", json=other_user_data)
    assert response.status_code == 201
    return client


# Job Fixtures
@pytest.fixture
def sample_job_data():
    return {
        "company": "Acme",
        "role": "SWE",
        "dateApplied": "2024-01-01",
    }


@pytest.fixture
def full_job_data():
    return {
        "company": "Globex",
        "role": "Backend Engineer",
        "dateApplied": "2024-02-14",
        "status": "Technical Interview",
        "notes": "Referred by Sam",
        "category": "Big Tech",
    }
