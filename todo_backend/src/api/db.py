from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from threading import RLock
from typing import Any, Generator, Optional, Sequence

import psycopg
from psycopg.rows import dict_row

from .errors import StoreError
from .models import COLS
from .store import QueryResult, RecordStore

logger = logging.getLogger(__name__)


class SQLiteRecordStore(RecordStore):
    """
    SQLite record store holding one connection for the process lifetime.
    """

    backend = "sqlite"

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._lock = RLock()
        self._connection: Optional[sqlite3.Connection] = None

    def open(self) -> None:
        if self._connection is not None:
            return
        if self._db_path != ":memory:":
            os.makedirs(os.path.dirname(self._db_path) or ".", exist_ok=True)
        # isolation_level=None: autocommit, every statement is its own transaction
        conn = sqlite3.connect(self._db_path, isolation_level=None, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        self._connection = conn
        self._init_db()
        logger.info("Opened sqlite store at %s", self._db_path)

    def close(self) -> None:
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None
                logger.info("Closed sqlite store")

    def _init_db(self) -> None:
        self.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {COLS.table} (
                {COLS.id} INTEGER PRIMARY KEY AUTOINCREMENT,
                {COLS.tasks} TEXT NOT NULL,
                {COLS.due_date} TEXT NOT NULL,
                {COLS.creation_date} TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f', 'now')),
                {COLS.completed} INTEGER NOT NULL DEFAULT 0
            )
            """
        )
        self.execute(
            f"CREATE INDEX IF NOT EXISTS idx_{COLS.table}_{COLS.completed} ON {COLS.table}({COLS.completed})"
        )

    @contextmanager
    def _cursor(self) -> Generator[sqlite3.Cursor, None, None]:
        if self._connection is None:
            raise StoreError("sqlite store is not open")
        cur = self._connection.cursor()
        try:
            yield cur
        finally:
            cur.close()

    def execute(self, statement: str, params: Sequence[Any] = ()) -> QueryResult:
        with self._lock, self._cursor() as cur:
            try:
                cur.execute(statement, tuple(params))
                rows = [dict(r) for r in cur.fetchall()]
            except (sqlite3.Error, OverflowError) as e:
                raise StoreError(f"sqlite error: {e}") from e
            rowcount = len(rows) if cur.description is not None else cur.rowcount
            return QueryResult(rows=rows, rowcount=rowcount)


class PostgresRecordStore(RecordStore):
    """
    PostgreSQL record store backed by a single psycopg connection.

    reject_unauthorized selects the TLS trust mode: False encrypts without
    verifying the server certificate (sslmode=require), True verifies it
    (sslmode=verify-full).
    """

    backend = "postgres"

    def __init__(self, url: str, reject_unauthorized: bool = False) -> None:
        self._url = url
        self._reject_unauthorized = reject_unauthorized
        self._lock = RLock()
        self._connection: Optional[psycopg.Connection] = None

    @property
    def sslmode(self) -> str:
        return "verify-full" if self._reject_unauthorized else "require"

    @staticmethod
    def to_pyformat(statement: str) -> str:
        """Translate '?' placeholders into psycopg's '%s' style."""
        return statement.replace("%", "%%").replace("?", "%s")

    def open(self) -> None:
        if self._connection is not None:
            return
        try:
            self._connection = psycopg.connect(
                self._url, sslmode=self.sslmode, autocommit=True, row_factory=dict_row
            )
        except psycopg.Error as e:
            raise StoreError(f"postgres connection failed: {e}") from e
        self._init_db()
        logger.info("Opened postgres store (sslmode=%s)", self.sslmode)

    def close(self) -> None:
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None
                logger.info("Closed postgres store")

    def _init_db(self) -> None:
        self.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {COLS.table} (
                {COLS.id} SERIAL PRIMARY KEY,
                {COLS.tasks} TEXT NOT NULL,
                {COLS.due_date} DATE NOT NULL,
                {COLS.creation_date} TIMESTAMP NOT NULL DEFAULT now(),
                {COLS.completed} BOOLEAN NOT NULL DEFAULT false
            )
            """
        )

    def execute(self, statement: str, params: Sequence[Any] = ()) -> QueryResult:
        if self._connection is None:
            raise StoreError("postgres store is not open")
        with self._lock:
            try:
                with self._connection.cursor() as cur:
                    cur.execute(self.to_pyformat(statement), tuple(params))
                    if cur.description is not None:
                        rows = [dict(r) for r in cur.fetchall()]
                        return QueryResult(rows=rows, rowcount=len(rows))
                    return QueryResult(rows=[], rowcount=cur.rowcount)
            except psycopg.Error as e:
                raise StoreError(f"postgres error: {e}") from e
