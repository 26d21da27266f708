# tests/test_codec.py

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta, timezone

import pytest

from homework_tracker.homework import codec
from homework_tracker.homework.errors import DeserializationError
from homework_tracker.homework.models import HomeworkItem, Subject


def _item(**kw) -> HomeworkItem:
    base = dict(
        id="a1",
        title="Lab report",
        description="Titration results",
        subject=Subject.SCIENCE,
        due_date=datetime(2024, 5, 8, 0, 0, tzinfo=UTC),
        completed=False,
        created_at=datetime(2024, 5, 1, 9, 30, 15, 250000, tzinfo=UTC),
    )
    base.update(kw)
    return HomeworkItem(**base)


def test_dumps_uses_camel_case_and_iso_timestamps() -> None:
    (raw,) = json.loads(codec.dumps([_item()]))
    assert raw == {
        "id": "a1",
        "title": "Lab report",
        "description": "Titration results",
        "subject": "Science",
        "dueDate": "2024-05-08T00:00:00.000Z",
        "completed": False,
        "createdAt": "2024-05-01T09:30:15.250Z",
    }


def test_round_trip_compares_by_instant() -> None:
    plus_two = timezone(timedelta(hours=2))
    item = _item(due_date=datetime(2024, 5, 8, 2, 0, tzinfo=plus_two), completed=True)

    (back,) = codec.loads(codec.dumps([item]))
    assert back.due_date == item.due_date
    assert back.due_date.tzinfo == UTC
    assert back == item


def test_loads_accepts_offsets_and_missing_description() -> None:
    blob = json.dumps(
        [
            {
                "id": "b2",
                "title": "Scales",
                "subject": "Music",
                "dueDate": "2024-05-08T00:00:00+02:00",
                "completed": True,
                "createdAt": "2024-05-01T00:00:00",
            }
        ]
    )
    (item,) = codec.loads(blob)
    assert item.description == ""
    assert item.subject is Subject.MUSIC
    assert item.due_date == datetime(2024, 5, 7, 22, 0, tzinfo=UTC)
    assert item.created_at == datetime(2024, 5, 1, tzinfo=UTC)


def test_loads_empty_array() -> None:
    assert codec.loads("[]") == []


@pytest.mark.parametrize(
    "blob",
    [
        "",
        "{oops",
        '{"id": "x"}',
        "[1, 2]",
        '[{"id": "x", "title": "t", "subject": "Cooking", "dueDate": "2024-05-01T00:00:00Z",'
        ' "completed": false, "createdAt": "2024-05-01T00:00:00Z"}]',
        '[{"id": "x", "title": "t", "subject": "Math", "completed": false,'
        ' "createdAt": "2024-05-01T00:00:00Z"}]',
        '[{"id": "x", "title": "t", "subject": "Math", "dueDate": "2024-05-01T00:00:00Z",'
        ' "completed": "yes", "createdAt": "2024-05-01T00:00:00Z"}]',
    ],
)
def test_loads_rejects_malformed_snapshots(blob: str) -> None:
    with pytest.raises(DeserializationError):
        codec.loads(blob)


def test_loads_rejects_duplicate_ids() -> None:
    blob = codec.dumps([_item(), _item(title="Other")])
    with pytest.raises(DeserializationError, match="Duplicate id"):
        codec.loads(blob)


def test_stored_precision_survives_a_round_trip() -> None:
    raw = datetime(2024, 5, 1, 12, 0, 0, 123456, tzinfo=UTC)
    kept = codec.stored_precision(raw)
    assert kept == datetime(2024, 5, 1, 12, 0, 0, 123000, tzinfo=UTC)
    assert codec.parse_timestamp(codec.format_timestamp(kept)) == kept
    assert codec.stored_precision(datetime(2024, 5, 1, 12)) == datetime(2024, 5, 1, 12, tzinfo=UTC)
