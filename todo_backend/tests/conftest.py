import os

import pytest
from fastapi.testclient import TestClient

# Keep the module-level app from touching the filesystem when imported
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from src.api.main import create_app  # noqa: E402
from src.api.settings import Settings  # noqa: E402


@pytest.fixture
def settings():
    return Settings(database_url="sqlite:///:memory:", log_level="WARNING")


@pytest.fixture
def client(settings):
    # A fresh app (and in-memory database) per test; the context manager runs the lifespan
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def make_todo(client):
    def _make(tasks="Buy milk", due_date="2024-01-01", **extra):
        res = client.post("/todos", json={"tasks": tasks, "due_date": due_date, **extra})
        assert res.status_code == 201
        return res.json()["data"]["signature"][0]

    return _make
