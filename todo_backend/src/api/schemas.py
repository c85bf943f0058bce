from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, field_validator

from .models import TodoEntity


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Body accepted by POST /todos.

    tasks and due_date must be JSON strings; due_date's format is not checked.
    completed is optional and only its truthiness matters.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "tasks": "Buy milk",
                "due_date": "2024-01-01",
                "completed": False,
            }
        }
    )

    tasks: StrictStr = Field(..., description="Task description")
    due_date: StrictStr = Field(..., description="Due date as text, e.g. '2024-01-01'")
    completed: Optional[Any] = Field(default=None, description="Insert as completed when truthy")

    @property
    def wants_completed(self) -> bool:
        return bool(self.completed)


# PUBLIC_INTERFACE
class TodoReplace(BaseModel):
    """
    Body accepted by PUT /todos/{id}. Only tasks and due_date are replaced.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"tasks": "Buy oat milk", "due_date": "2024-01-02"}}
    )

    tasks: StrictStr = Field(..., description="Task description")
    due_date: StrictStr = Field(..., description="Due date as text")


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo row.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "tasks": "Buy milk",
                "due_date": "2024-01-01",
                "creation_date": "2023-12-30T10:15:30.123000",
                "completed": False,
            }
        }
    )

    id: int = Field(..., description="Unique identifier of the todo")
    tasks: str = Field(..., description="Task description")
    due_date: str = Field(..., description="Due date as text")
    creation_date: datetime = Field(..., description="Creation timestamp assigned by the store")
    completed: bool = Field(..., description="Completion status flag")

    @field_validator("due_date", mode="before")
    @classmethod
    def due_date_as_text(cls, v: Any) -> Any:
        """PostgreSQL hands back DATE columns as date objects."""
        if isinstance(v, date):
            return v.isoformat()
        return v

    @classmethod
    def from_row(cls, row: TodoEntity) -> "TodoOut":
        return cls.model_validate(dict(row))


def parse_body(model: type, body: Any) -> Optional[BaseModel]:
    """
    Validate a raw JSON body against model. Returns None when the body does
    not have the required shape so callers can pick their own failure response.
    """
    if not isinstance(body, dict):
        return None
    try:
        return model.model_validate(body)
    except ValidationError:
        return None
