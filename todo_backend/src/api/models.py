from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import TypedDict, Union


@dataclass(frozen=True)
class _Cols:
    table: str = "todos"
    id: str = "id"
    tasks: str = "tasks"
    due_date: str = "due_date"
    creation_date: str = "creation_date"
    completed: str = "completed"


COLS = _Cols()


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    A row of the todos table as returned by a record store.

    Fields:
    - id: Unique integer identifier assigned by the store
    - tasks: Task description
    - due_date: Due date, text in SQLite and DATE in PostgreSQL
    - creation_date: Insertion timestamp assigned by the store
    - completed: Completion flag (0/1 in SQLite, boolean in PostgreSQL)
    """

    id: int
    tasks: str
    due_date: Union[str, date]
    creation_date: Union[str, datetime]
    completed: Union[bool, int]
