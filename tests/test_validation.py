# tests/test_validation.py

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from homework_tracker.homework.errors import ValidationError
from homework_tracker.homework.models import HomeworkFormData, Subject
from homework_tracker.homework.validation import clean_form, coerce_due_date, validate_form


def test_valid_form_has_no_errors() -> None:
    data = HomeworkFormData(title="Worksheet", subject=Subject.MATH, due_date=date(2024, 5, 2))
    assert validate_form(data) == {}


def test_missing_fields_are_reported_by_name() -> None:
    data = HomeworkFormData(title=" ", subject=None, due_date=None)
    assert validate_form(data) == {
        "title": "Title is required",
        "subject": "Subject is required",
        "dueDate": "Due date is required",
    }


def test_unknown_subject_is_rejected() -> None:
    errors = validate_form(HomeworkFormData(title="x", subject="Astronomy", due_date=date(2024, 5, 2)))
    assert list(errors) == ["subject"]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (date(2024, 5, 2), datetime(2024, 5, 2, tzinfo=UTC)),
        (datetime(2024, 5, 2, 15, 30), datetime(2024, 5, 2, 15, 30, tzinfo=UTC)),
        (
            datetime(2024, 5, 2, 1, 0, tzinfo=timezone(timedelta(hours=3))),
            datetime(2024, 5, 1, 22, 0, tzinfo=UTC),
        ),
        ("2024-05-02", datetime(2024, 5, 2, tzinfo=UTC)),
        ("", None),
        ("next week", None),
        (None, None),
    ],
)
def test_coerce_due_date(raw, expected) -> None:
    assert coerce_due_date(raw) == expected


def test_clean_form_normalizes_subject_and_description() -> None:
    form = clean_form(HomeworkFormData(title="  Poem ", subject="english", due_date="2024-05-02", description=None))  # type: ignore[arg-type]
    assert form.subject is Subject.ENGLISH
    assert form.due_date == datetime(2024, 5, 2, tzinfo=UTC)
    assert form.description == ""
    assert form.title == "  Poem "


def test_clean_form_raises_with_error_map() -> None:
    with pytest.raises(ValidationError) as exc:
        clean_form(HomeworkFormData(title="", subject=Subject.ART, due_date=date(2024, 5, 2)))
    assert exc.value.errors == {"title": "Title is required"}
    assert "title" in str(exc.value)
