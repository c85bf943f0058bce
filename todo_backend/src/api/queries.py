"""
SQL statements issued by the todo routes.

Statements use '?' positional placeholders; stores that speak another
paramstyle translate them before execution.
"""
from __future__ import annotations

from .models import COLS

SELECT_ALL = f"SELECT * FROM {COLS.table} ORDER BY {COLS.completed}"

SELECT_BY_ID = f"SELECT * FROM {COLS.table} WHERE {COLS.id} = ?"

INSERT = (
    f"INSERT INTO {COLS.table} ({COLS.tasks}, {COLS.due_date}) "
    f"VALUES (?, ?) RETURNING *"
)

INSERT_WITH_COMPLETED = (
    f"INSERT INTO {COLS.table} ({COLS.tasks}, {COLS.due_date}, {COLS.completed}) "
    f"VALUES (?, ?, ?) RETURNING *"
)

DELETE_BY_ID = f"DELETE FROM {COLS.table} WHERE {COLS.id} = ?"

REPLACE_BY_ID = f"UPDATE {COLS.table} SET {COLS.tasks} = ?, {COLS.due_date} = ? WHERE {COLS.id} = ?"

TOGGLE_COMPLETED = (
    f"UPDATE {COLS.table} SET {COLS.completed} = NOT {COLS.completed} "
    f"WHERE {COLS.id} = ? RETURNING *"
)

PING = "SELECT 1"
