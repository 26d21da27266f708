# homework/codec.py

"""
Snapshot (de)serialization.

The durable store holds one JSON array; each element uses the camelCase keys
id, title, description, subject, dueDate, completed, createdAt. Exactly
`dueDate` and `createdAt` are timestamps and travel as ISO-8601 strings
(millisecond precision, "Z" suffix). Everything else passes through as
plain strings/booleans.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from .errors import DeserializationError
from .models import HomeworkItem, Subject

DATE_FIELDS = ("dueDate", "createdAt")


def stored_precision(dt: datetime) -> datetime:
    """UTC, cut to the millisecond precision snapshots keep."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    dt = dt.astimezone(UTC)
    return dt.replace(microsecond=dt.microsecond // 1000 * 1000)


def format_timestamp(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(raw: Any) -> datetime:
    if not isinstance(raw, str) or not raw.strip():
        raise DeserializationError(f"Expected ISO-8601 timestamp, got {raw!r}")
    s = raw.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(s)
    except ValueError as e:
        raise DeserializationError(f"Bad timestamp {raw!r}") from e
    return dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt.astimezone(UTC)


def item_to_dict(item: HomeworkItem) -> dict[str, Any]:
    return {
        "id": item.id,
        "title": item.title,
        "description": item.description,
        "subject": item.subject.value,
        "dueDate": format_timestamp(item.due_date),
        "completed": item.completed,
        "createdAt": format_timestamp(item.created_at),
    }


def item_from_dict(raw: Any) -> HomeworkItem:
    if not isinstance(raw, dict):
        raise DeserializationError(f"Expected an object, got {type(raw).__name__}")

    task_id = raw.get("id")
    title = raw.get("title")
    if not isinstance(task_id, str) or not task_id:
        raise DeserializationError(f"Missing or invalid id: {task_id!r}")
    if not isinstance(title, str):
        raise DeserializationError(f"Missing or invalid title for id={task_id}")

    subject = Subject.parse(raw.get("subject"))
    if subject is None:
        raise DeserializationError(f"Unknown subject {raw.get('subject')!r} for id={task_id}")

    description = raw.get("description")
    completed = raw.get("completed", False)
    if not isinstance(completed, bool):
        raise DeserializationError(f"Invalid completed flag for id={task_id}")

    return HomeworkItem(
        id=task_id,
        title=title,
        description=description if isinstance(description, str) else "",
        subject=subject,
        due_date=parse_timestamp(raw.get("dueDate")),
        completed=completed,
        created_at=parse_timestamp(raw.get("createdAt")),
    )


def dumps(items: Iterable[HomeworkItem]) -> str:
    return json.dumps([item_to_dict(i) for i in items], ensure_ascii=False)


def loads(blob: str) -> list[HomeworkItem]:
    """Parse a stored snapshot; any structural problem raises DeserializationError."""
    try:
        data = json.loads(blob)
    except (TypeError, ValueError) as e:
        raise DeserializationError(f"Snapshot is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise DeserializationError(f"Snapshot must be a JSON array, got {type(data).__name__}")

    items = [item_from_dict(raw) for raw in data]

    seen: set[str] = set()
    for item in items:
        if item.id in seen:
            raise DeserializationError(f"Duplicate id in snapshot: {item.id}")
        seen.add(item.id)
    return items
