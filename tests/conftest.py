import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from config.database import Database
from main import app


@pytest.fixture
def db():
    """Point the Database class at a fresh in-memory store."""
    Database.client = AsyncMongoMockClient()
    Database.db = Database.client["test_servicesDB"]
    yield Database()
    Database.client = None
    Database.db = None


@pytest.fixture
def client(db):
    # Not used as a context manager so the startup hook does not try a real connection
    return TestClient(app)

