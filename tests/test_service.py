from __future__ import annotations

from datetime import datetime, timedelta, timezone
import threading

import pytest

from todo_api.errors import AmbiguousTodoError
from todo_api.schemas import Todo
from todo_api.service import TodoService, get_service, reset_service


def make_todo(todo_id: int, name: str = "task") -> Todo:
    return Todo(
        id=todo_id,
        name=name,
        due_date=datetime.now(timezone.utc) + timedelta(days=1),
        is_completed=False,
    )


def test_list_preserves_insertion_order(service: TodoService) -> None:
    ids = [5, 2, 9, 1]
    for todo_id in ids:
        service.add_todo(make_todo(todo_id))

    assert [todo.id for todo in service.list_todos()] == ids


def test_list_empty(service: TodoService) -> None:
    assert service.list_todos() == []


def test_list_returns_snapshot(service: TodoService) -> None:
    service.add_todo(make_todo(1))
    listed = service.list_todos()
    service.add_todo(make_todo(2))

    assert [todo.id for todo in listed] == [1]


def test_add_returns_same_record(service: TodoService) -> None:
    todo = make_todo(3)
    assert service.add_todo(todo) is todo


def test_get_by_id(service: TodoService) -> None:
    first = service.add_todo(make_todo(1, "first"))
    service.add_todo(make_todo(2, "second"))

    assert service.get_todo_by_id(1) == first
    assert service.get_todo_by_id(42) is None


def test_get_with_duplicate_ids_fails_loudly(service: TodoService) -> None:
    service.add_todo(make_todo(7, "one"))
    service.add_todo(make_todo(7, "two"))

    with pytest.raises(AmbiguousTodoError) as excinfo:
        service.get_todo_by_id(7)
    assert excinfo.value.count == 2


def test_delete_removes_every_match(service: TodoService) -> None:
    service.add_todo(make_todo(7, "one"))
    service.add_todo(make_todo(8))
    service.add_todo(make_todo(7, "two"))

    assert service.delete_todo_by_id(7) == 2
    assert service.get_todo_by_id(7) is None
    assert [todo.id for todo in service.list_todos()] == [8]


def test_delete_missing_is_noop(service: TodoService) -> None:
    service.add_todo(make_todo(1))

    assert service.delete_todo_by_id(99) == 0
    assert len(service.list_todos()) == 1


def test_concurrent_adds_are_all_kept(service: TodoService) -> None:
    def worker(offset: int) -> None:
        for i in range(200):
            service.add_todo(make_todo(offset * 1000 + i))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(service.list_todos()) == 8 * 200


def test_reset_service_clears_shared_instance() -> None:
    get_service().add_todo(make_todo(1))
    reset_service()
    assert get_service().list_todos() == []
