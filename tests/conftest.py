"""Shared fixtures for the tutorials API tests.

The database is an in-memory mongomock-motor collection injected into the
app, so no MongoDB server is needed.
"""

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from tutorials.config.app_config import AppConfig, clear_config_cache
from tutorials.db.tutorials_repository import TutorialsRepository
from tutorials.web.api import create_app


@pytest.fixture(autouse=True)
def _fresh_config():
    """Never leak a cached config between tests."""
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def collection():
    """Empty in-memory tutorials collection."""
    return AsyncMongoMockClient()["tutorials_test"]["tutorials"]


@pytest.fixture
def repository(collection):
    return TutorialsRepository(collection)


@pytest.fixture
def app(repository):
    return create_app(config=AppConfig(), repository=repository)


@pytest.fixture
def client(app):
    """Test client bound to the in-memory repository."""
    return TestClient(app)


@pytest.fixture
def create_tutorial(client):
    """Create a tutorial through the API and return its id."""

    def _create(title: str, **fields) -> str:
        response = client.post("/tutorials", json={"title": title, **fields})
        assert response.status_code == 201
        return response.json()["URL"].rsplit("/", 1)[-1]

    return _create
