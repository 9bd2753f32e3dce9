"""
Error types for the Todo API.
"""

from __future__ import annotations


class TodoApiError(Exception):
    """Base error carrying the HTTP status and error code it renders as."""

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, status_code: int | None = None, code: str | None = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"error": {"code": self.code, "message": self.message}}


class ValidationError(TodoApiError):
    status_code = 400
    code = "INVALID_REQUEST"


class TodoNotFoundError(TodoApiError):
    status_code = 404
    code = "TODO_NOT_FOUND"

    def __init__(self, todo_id: int):
        self.todo_id = todo_id
        super().__init__(f"Todo with id '{todo_id}' not found")


class AmbiguousTodoError(TodoApiError):
    status_code = 500
    code = "AMBIGUOUS_TODO_ID"

    def __init__(self, todo_id: int, count: int):
        self.todo_id = todo_id
        self.count = count
        super().__init__(f"{count} todos share id '{todo_id}'; expected at most one")


class ConfigError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
