from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from fastapi import Request

from .settings import Settings, get_settings


@dataclass(frozen=True)
class QueryResult:
    """
    Outcome of a single statement.

    rowcount is the number of returned rows for statements that produce rows
    (SELECT, ... RETURNING) and the number of affected rows otherwise.
    """
    rows: List[Dict[str, Any]] = field(default_factory=list)
    rowcount: int = 0


# PUBLIC_INTERFACE
class RecordStore(ABC):
    """Abstract contract for the SQL datastore behind the todo routes."""

    backend: str = "unknown"

    @abstractmethod
    def open(self) -> None:
        """Establish the connection and make sure the todos table exists."""

    @abstractmethod
    def close(self) -> None:
        """Release the connection. Safe to call more than once."""

    @abstractmethod
    def execute(self, statement: str, params: Sequence[Any] = ()) -> QueryResult:
        """
        Run one parameterized statement with '?' placeholders and return its rows
        and row count. Driver errors are raised as StoreError.
        """

    def __enter__(self) -> "RecordStore":
        self.open()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


# PUBLIC_INTERFACE
def create_record_store(settings: Optional[Settings] = None) -> RecordStore:
    """
    Factory to return the configured record store based on settings.database_url.
    - sqlite:///<path>: SQLiteRecordStore (':memory:' allowed)
    - postgres:// or postgresql://: PostgresRecordStore
    """
    settings = settings or get_settings()
    url = settings.database_url
    if url.startswith("sqlite:///"):
        from .db import SQLiteRecordStore

        return SQLiteRecordStore(url[len("sqlite:///"):])
    if url.startswith(("postgres://", "postgresql://")):
        from .db import PostgresRecordStore

        return PostgresRecordStore(url, reject_unauthorized=settings.database_ssl_reject_unauthorized)
    raise ValueError(f"Unsupported DATABASE_URL scheme: {url.split(':', 1)[0]!r}")


# PUBLIC_INTERFACE
def get_store(request: Request) -> RecordStore:
    """FastAPI dependency returning the store opened by the app lifespan."""
    return request.app.state.store
