"""
Data models for the Todo API.
Uses plain dicts on the wire — no Pydantic models for route-level validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, TypedDict

from .errors import ValidationError


class TodoDict(TypedDict):
    id: int
    name: str
    dueDate: str
    isCompleted: bool


# ---------------------------------------------------------------------------
# Timestamp helpers
# ---------------------------------------------------------------------------

def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken to be UTC."""
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


# ---------------------------------------------------------------------------
# Field validators
# ---------------------------------------------------------------------------

def _require(body: dict, field: str) -> Any:
    if field not in body or body[field] is None:
        raise ValidationError(f"{field}: Required")
    return body[field]


def _validate_int(body: dict, field: str) -> int:
    val = _require(body, field)
    if isinstance(val, bool) or not isinstance(val, int):
        raise ValidationError(f"{field}: Expected integer, received {type(val).__name__}")
    return val


def _validate_string(body: dict, field: str) -> str:
    val = _require(body, field)
    if not isinstance(val, str):
        raise ValidationError(f"{field}: Expected string, received {type(val).__name__}")
    return val


def _validate_bool(body: dict, field: str) -> bool:
    val = _require(body, field)
    if not isinstance(val, bool):
        raise ValidationError(f"{field}: Expected boolean, received {type(val).__name__}")
    return val


def _validate_timestamp(body: dict, field: str) -> datetime:
    val = _validate_string(body, field)
    try:
        return parse_timestamp(val)
    except (ValueError, OverflowError):
        raise ValidationError(f"{field}: Invalid ISO-8601 timestamp '{val}'") from None


# ---------------------------------------------------------------------------
# Todo record
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Todo:
    id: int
    name: str
    due_date: datetime
    is_completed: bool

    def to_dict(self) -> TodoDict:
        return {
            "id": self.id,
            "name": self.name,
            "dueDate": format_timestamp(self.due_date),
            "isCompleted": self.is_completed,
        }

    @classmethod
    def from_dict(cls, body: Any) -> Todo:
        if not isinstance(body, dict):
            raise ValidationError(f"Expected a JSON object, received {type(body).__name__}")
        return cls(
            id=_validate_int(body, "id"),
            name=_validate_string(body, "name"),
            due_date=_validate_timestamp(body, "dueDate"),
            is_completed=_validate_bool(body, "isCompleted"),
        )
