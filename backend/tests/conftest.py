import os

# keep the app's own engine off the on-disk cv.db
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session

from workexperience.database import build_engine, get_session
from workexperience.main import app


@pytest.fixture
def engine():
    """A fresh in-memory database per test."""
    engine = build_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def client(engine):
    def _session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _session_override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def quiet_client(client):
    """Client that returns 500 responses instead of re-raising server errors."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def record():
    return {
        'companyName': 'Acme',
        'jobTitle': 'Developer',
        'location': 'Remote',
        'startDate': '2020-01-01',
        'endDate': '2021-06-30',
        'description': 'Built internal tools',
    }
