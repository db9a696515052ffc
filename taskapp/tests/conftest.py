"""Shared fixtures: a fresh in-memory database, store and API client per test."""

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, create_engine
from sqlmodel.pool import StaticPool

from taskapp.config import Settings
from taskapp.events import TaskEvent
from taskapp.main import create_app
from taskapp.store import TaskStore


class RecordingListener:
    """Collects every event the store emits."""

    def __init__(self):
        self.events: list[TaskEvent] = []

    def __call__(self, event: TaskEvent) -> None:
        self.events.append(event)


@pytest.fixture(name="engine")
def engine_fixture():
    """Create a fresh in-memory database for each test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(name="recorder")
def recorder_fixture():
    return RecordingListener()


@pytest.fixture(name="store")
def store_fixture(engine, recorder):
    return TaskStore(engine, listeners=[recorder])


@pytest.fixture(name="client")
def client_fixture(store: TaskStore):
    """Create a test client around the per-test store."""
    app = create_app(settings=Settings(), store=store)
    with TestClient(app) as client:
        yield client
