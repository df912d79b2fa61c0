import pytest
from fastapi.testclient import TestClient

from problems_backend.api.main import create_app
from problems_backend.config import Settings
from problems_backend.db import build_engine, create_tables
from problems_backend.store import SqlAlchemyProblemStore


@pytest.fixture
def store():
    """A store over a fresh in-memory SQLite database."""
    engine = build_engine("sqlite://")
    create_tables(engine)
    yield SqlAlchemyProblemStore(engine)
    engine.dispose()


@pytest.fixture
def settings():
    return Settings(database_url="sqlite://")


@pytest.fixture
def client(settings):
    """Test client whose app owns its own in-memory database."""
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def lenient_client(settings):
    """Test client that turns server errors into 500 responses instead of raising."""
    with TestClient(create_app(settings), raise_server_exceptions=False) as c:
        yield c


@pytest.fixture
def two_sum():
    return {"title": "Two Sum", "difficulty": "Easy", "platform": "LeetCode"}
