from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Path, status

from .. import queries
from ..errors import CREATE_BODY_MESSAGE, InvalidInputError, NotFoundError
from ..schemas import TodoCreate, TodoOut, TodoReplace, parse_body
from ..store import RecordStore, get_store
from ..utils import success_envelope

logger = logging.getLogger(__name__)

router = APIRouter(tags=["todos"])

SIGNATURE_NOT_FOUND = "Could not find a signature with that id identifier"
TODO_NOT_FOUND = "Could not find a todo with that id identifier"
TASK_NOT_FOUND = "Could not find a task with that id identifier"

# Ids are 64-bit integers in both stores
MAX_ID = 2**63 - 1
MIN_ID = -(2**63)


def _get_store(store: RecordStore = Depends(get_store)) -> RecordStore:
    """
    Dependency wrapper for the record store to keep signatures clean.
    """
    return store


def _todo(row: Dict[str, Any]) -> Dict[str, Any]:
    return TodoOut.from_row(row).model_dump(mode="json")  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.get("/", include_in_schema=False)
@router.get(
    "/todos",
    summary="List Todos",
    description="List every todo, incomplete ones first.",
    responses={200: {"description": "List retrieved successfully"}},
)
def list_todos(store: RecordStore = Depends(_get_store)) -> Dict[str, Any]:
    """
    Return all todos ordered by completion flag.
    """
    result = store.execute(queries.SELECT_ALL)
    return success_envelope([_todo(r) for r in result.rows])


# PUBLIC_INTERFACE
@router.post(
    "/todos",
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a todo from 'tasks' and 'due_date' strings and an optional 'completed' flag.",
    responses={
        201: {"description": "Todo created successfully"},
        400: {"description": "tasks or due_date is not a string"},
    },
)
def create_todo(
    body: Any = Body(default=None),
    store: RecordStore = Depends(_get_store),
) -> Dict[str, Any]:
    """
    Create a new Todo. The store assigns id and creation_date, and completed
    defaults to false unless a truthy value is supplied.
    """
    payload = parse_body(TodoCreate, body)
    if payload is None:
        raise InvalidInputError(CREATE_BODY_MESSAGE, field="name")

    if payload.wants_completed:
        result = store.execute(queries.INSERT_WITH_COMPLETED, (payload.tasks, payload.due_date, True))
    else:
        result = store.execute(queries.INSERT, (payload.tasks, payload.due_date))
    logger.info("Created todo id=%s", result.rows[0]["id"] if result.rows else None)
    return success_envelope({"signature": [_todo(r) for r in result.rows]})


# PUBLIC_INTERFACE
@router.get(
    "/todos/{todo_id}",
    summary="Get Todo",
    responses={
        200: {"description": "Todo found"},
        400: {"description": "id is not an integer"},
        404: {"description": "Todo not found"},
    },
)
def get_todo(
    todo_id: int = Path(..., ge=MIN_ID, le=MAX_ID),
    store: RecordStore = Depends(_get_store),
) -> Dict[str, Any]:
    result = store.execute(queries.SELECT_BY_ID, (todo_id,))
    if result.rowcount != 1:
        raise NotFoundError(SIGNATURE_NOT_FOUND)
    return success_envelope(_todo(result.rows[0]))


# PUBLIC_INTERFACE
@router.delete(
    "/todos/{todo_id}",
    summary="Delete Todo",
    responses={
        200: {"description": "Todo deleted"},
        400: {"description": "id is not an integer"},
        404: {"description": "Todo not found"},
    },
)
def delete_todo(
    todo_id: int = Path(..., ge=MIN_ID, le=MAX_ID),
    store: RecordStore = Depends(_get_store),
) -> Dict[str, Any]:
    result = store.execute(queries.DELETE_BY_ID, (todo_id,))
    if result.rowcount != 1:
        raise NotFoundError(TODO_NOT_FOUND)
    logger.info("Deleted todo id=%s", todo_id)
    return success_envelope()


# PUBLIC_INTERFACE
@router.put(
    "/todos/{todo_id}",
    summary="Replace Todo",
    description=(
        "Replace tasks and due_date of an existing todo. completed and creation_date are left untouched. "
        "The response carries the row as it was before the update."
    ),
    responses={
        200: {"description": "Todo updated"},
        400: {"description": "id is not an integer"},
        404: {"description": "Todo not found, or tasks/due_date is not a string"},
    },
)
def replace_todo(
    todo_id: int = Path(..., ge=MIN_ID, le=MAX_ID),
    body: Any = Body(default=None),
    store: RecordStore = Depends(_get_store),
) -> Dict[str, Any]:
    """
    Full update of a Todo.

    An invalid body is reported with the same 404 body as a missing row.
    """
    payload = parse_body(TodoReplace, body)
    if payload is None:
        raise NotFoundError(TODO_NOT_FOUND)

    existing = store.execute(queries.SELECT_BY_ID, (todo_id,))
    if existing.rowcount != 1:
        raise NotFoundError(TODO_NOT_FOUND)

    store.execute(queries.REPLACE_BY_ID, (payload.tasks, payload.due_date, todo_id))
    return success_envelope({"todos": _todo(existing.rows[0])})


# PUBLIC_INTERFACE
@router.put(
    "/todos/{todo_id}/complete",
    summary="Toggle Todo completion",
    description="Flip the completed flag of a todo and return the updated row.",
    responses={
        200: {"description": "Todo toggled"},
        400: {"description": "id is not an integer"},
        404: {"description": "Todo not found"},
    },
)
def toggle_todo(
    todo_id: int = Path(..., ge=MIN_ID, le=MAX_ID),
    store: RecordStore = Depends(_get_store),
) -> Dict[str, Any]:
    result = store.execute(queries.TOGGLE_COMPLETED, (todo_id,))
    if result.rowcount != 1:
        raise NotFoundError(TASK_NOT_FOUND)
    return success_envelope({"task": _todo(result.rows[0])})
