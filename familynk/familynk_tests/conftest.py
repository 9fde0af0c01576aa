"""
Shared fixtures: an in-memory database per test and a TestClient wired to it.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
# Low round count keeps hashing fast in tests; production uses the configured default
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "1000")

import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from familynk.familynk.auth_service.db import Base, get_db, init_db
from familynk.familynk.auth_service.dependencies import get_token_issuer
from familynk.familynk.auth_service.main import app
from familynk.familynk.auth_service.tokens import TokenIssuer

ACCESS_SECRET = "test-access-secret"
REFRESH_SECRET = "test-refresh-secret"


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def token_issuer():
    return TokenIssuer(ACCESS_SECRET, REFRESH_SECRET, access_ttl="15m", refresh_ttl="7d")


@pytest.fixture
def client(session_factory, token_issuer):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_issuer] = lambda: token_issuer
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_registration(**overrides) -> dict:
    unique = uuid.uuid4().hex[:8]
    data = {
        "email": f"user_{unique}@example.com",
        "password": "testing12345",
        "first_name": "Bob",
        "last_name": "Smith",
    }
    data.update(overrides)
    return data


@pytest.fixture
def new_registration():
    return make_registration


@pytest.fixture
def registered_user(client):
    """Register a fresh user; returns (registration data, response body)."""
    data = make_registration(date_of_birth="1990-05-17")
    response = client.post("/register", json=data)
    assert response.status_code == 201
    return data, response.json()
