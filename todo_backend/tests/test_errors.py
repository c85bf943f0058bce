import pytest
from fastapi.testclient import TestClient

from src.api.errors import GENERIC_ERROR_MESSAGE, StoreError
from src.api.main import create_app
from src.api.store import RecordStore


class BrokenStore(RecordStore):
    backend = "broken"

    def __init__(self, exc):
        self.exc = exc
        self.opened = False
        self.closed = False

    def open(self):
        self.opened = True

    def close(self):
        self.closed = True

    def execute(self, statement, params=()):
        raise self.exc


ROUTES = [
    ("get", "/", None),
    ("get", "/todos", None),
    ("post", "/todos", {"tasks": "Buy milk", "due_date": "2024-01-01"}),
    ("get", "/todos/1", None),
    ("delete", "/todos/1", None),
    ("put", "/todos/1", {"tasks": "Buy milk", "due_date": "2024-01-01"}),
    ("put", "/todos/1/complete", None),
    ("get", "/health", None),
]


@pytest.mark.parametrize("method,path,payload", ROUTES)
def test_store_failure_yields_error_envelope(settings, method, path, payload):
    app = create_app(settings, store=BrokenStore(StoreError("connection refused")))
    with TestClient(app) as client:
        kwargs = {"json": payload} if payload is not None else {}
        res = client.request(method.upper(), path, **kwargs)
    assert res.status_code == 500
    assert res.json() == {
        "status": "error",
        "data": {"kind": "store", "message": GENERIC_ERROR_MESSAGE},
    }


def test_unexpected_exception_yields_error_envelope(settings):
    app = create_app(settings, store=BrokenStore(RuntimeError("boom")))
    with TestClient(app, raise_server_exceptions=False) as client:
        res = client.get("/todos", headers={"X-Request-ID": "abc"})
    assert res.status_code == 500
    assert res.headers["X-Request-ID"] == "abc"
    assert res.json()["status"] == "error"
    assert res.json()["data"]["kind"] == "internal"
    assert res.json()["data"]["message"] == GENERIC_ERROR_MESSAGE


def test_validation_runs_before_store(settings):
    app = create_app(settings, store=BrokenStore(StoreError("unreachable")))
    with TestClient(app) as client:
        assert client.post("/todos", json={"tasks": 1}).status_code == 400
        assert client.put("/todos/1", json={}).status_code == 404
        assert client.get("/todos/abc").status_code == 400


def test_lifespan_opens_and_closes_store(settings):
    store = BrokenStore(StoreError("unused"))
    with TestClient(create_app(settings, store=store)):
        assert store.opened
        assert not store.closed
    assert store.closed
