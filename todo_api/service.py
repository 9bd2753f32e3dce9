"""
In-memory storage and service operations for the Todo API.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from .errors import AmbiguousTodoError
from .schemas import Todo

logger = logging.getLogger(__name__)


class TodoService:
    """Ordered, in-memory collection of todos.

    Duplicate ids are accepted. Every operation holds the same lock, so
    concurrent request handlers see a consistent list.
    """

    def __init__(self) -> None:
        self._todos: list[Todo] = []
        self._lock = threading.Lock()

    def list_todos(self) -> list[Todo]:
        with self._lock:
            return list(self._todos)

    def get_todo_by_id(self, todo_id: int) -> Optional[Todo]:
        with self._lock:
            matches = [todo for todo in self._todos if todo.id == todo_id]
        if len(matches) > 1:
            raise AmbiguousTodoError(todo_id, len(matches))
        return matches[0] if matches else None

    def add_todo(self, todo: Todo) -> Todo:
        with self._lock:
            self._todos.append(todo)
        logger.debug("Added todo %s", todo.id)
        return todo

    def delete_todo_by_id(self, todo_id: int) -> int:
        with self._lock:
            kept = [todo for todo in self._todos if todo.id != todo_id]
            removed = len(self._todos) - len(kept)
            self._todos[:] = kept
        if removed:
            logger.debug("Deleted %d todo(s) with id %s", removed, todo_id)
        return removed

    def clear(self) -> None:
        with self._lock:
            self._todos.clear()


# ---------------------------------------------------------------------------
# Process-wide instance
# ---------------------------------------------------------------------------

_service = TodoService()


def get_service() -> TodoService:
    return _service


def reset_service() -> None:
    _service.clear()
