"""Pytest fixtures for the Task API tests."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from task_api.config import Settings
from task_api.database import make_engine
from task_api.main import create_app
from task_api.service import TaskService
from task_api.store import InMemoryTaskStore, SqlTaskStore


class FakeClock:
    """A clock that only moves when told to."""

    def __init__(self) -> None:
        self.now = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sql_store() -> SqlTaskStore:
    """A SQL store over a fresh in-memory SQLite database."""
    store = SqlTaskStore(make_engine("sqlite://"))
    store.create_schema()
    yield store
    store.engine.dispose()


@pytest.fixture
def service(clock: FakeClock) -> TaskService:
    return TaskService(InMemoryTaskStore(), clock=clock)


@pytest.fixture
def client(sql_store: SqlTaskStore) -> TestClient:
    """Create a test client for the API."""
    app = create_app(Settings(database_url="sqlite://"), store=sql_store)
    return TestClient(app)
