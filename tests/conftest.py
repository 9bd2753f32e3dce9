"""Pytest configuration and shared fixtures."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
import sys

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from todo_api.main import app  # noqa: E402
from todo_api.service import TodoService, reset_service  # noqa: E402


@pytest.fixture(autouse=True)
def clean_store():
    reset_service()
    yield
    reset_service()


@pytest.fixture()
def service() -> TodoService:
    return TodoService()


@pytest.fixture()
def client() -> TestClient:
    with TestClient(app) as test_client:
        yield test_client


def _iso_from_now(delta: timedelta) -> str:
    return (datetime.now(timezone.utc) + delta).isoformat().replace("+00:00", "Z")


@pytest.fixture()
def past_iso():
    """Factory for a UTC timestamp ``days`` in the past."""
    return lambda days=1: _iso_from_now(-timedelta(days=days))


@pytest.fixture()
def todo_body():
    """Factory for a valid POST /todos body."""

    def make(todo_id: int = 1, name: str = "A", due_date: str | None = None, completed: bool = False) -> dict:
        return {
            "id": todo_id,
            "name": name,
            "dueDate": due_date or _iso_from_now(timedelta(days=7)),
            "isCompleted": completed,
        }

    return make
