"""
Shared fixtures: an in-memory SQLite database behind the FastAPI app.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401
from app.db.base import Base
from app.db.session import get_db
from app.main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    """Fresh schema and session for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    """Test client whose requests use the test database."""
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def trip(client):
    """A trip with no participants."""
    response = client.post("/api/trips", json={"name": "Lisbon", "currency": "EUR"})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def add_participant(client, trip):
    """Factory adding a named participant to the trip fixture."""
    def _add(name: str, trip_id: int = None):
        response = client.post(
            f"/api/trips/{trip_id or trip['id']}/participants",
            json={"name": name, "email": None}
        )
        assert response.status_code == 201
        return response.json()
    return _add
