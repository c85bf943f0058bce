from datetime import date, datetime

from src.api.schemas import TodoCreate, TodoOut, TodoReplace, parse_body


class TestTodoOut:
    def test_postgres_row_types(self):
        row = {
            "id": 7,
            "tasks": "Buy milk",
            "due_date": date(2024, 1, 1),
            "creation_date": datetime(2023, 12, 30, 10, 15, 30, 123000),
            "completed": True,
        }
        assert TodoOut.from_row(row).model_dump(mode="json") == {
            "id": 7,
            "tasks": "Buy milk",
            "due_date": "2024-01-01",
            "creation_date": "2023-12-30T10:15:30.123000",
            "completed": True,
        }

    def test_sqlite_row_types(self):
        row = {
            "id": 1,
            "tasks": "Walk dog",
            "due_date": "2024-02-02",
            "creation_date": "2024-01-01T08:00:00.500",
            "completed": 0,
        }
        out = TodoOut.from_row(row).model_dump(mode="json")
        assert out["due_date"] == "2024-02-02"
        assert out["completed"] is False
        assert datetime.fromisoformat(out["creation_date"]) == datetime(2024, 1, 1, 8, 0, 0, 500000)


class TestParseBody:
    def test_valid_create(self):
        payload = parse_body(TodoCreate, {"tasks": "a", "due_date": "b", "completed": "yes"})
        assert payload is not None
        assert payload.wants_completed is True

    def test_strict_strings(self):
        assert parse_body(TodoCreate, {"tasks": 1, "due_date": "b"}) is None
        assert parse_body(TodoReplace, {"tasks": "a", "due_date": None}) is None
        assert parse_body(TodoReplace, "not an object") is None
