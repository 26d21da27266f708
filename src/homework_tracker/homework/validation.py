# homework/validation.py

from __future__ import annotations

from datetime import UTC, date, datetime, time

from .codec import stored_precision
from .errors import ValidationError
from .models import HomeworkFormData, Subject


def coerce_due_date(raw: datetime | date | str | None) -> datetime | None:
    """
    Normalize a due date to a tz-aware UTC datetime.

    Accepts datetimes (naive ones are taken as UTC), plain dates (midnight UTC)
    and ISO-8601 strings, kept to millisecond precision. Returns None for
    anything missing or unparseable.
    """
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return stored_precision(raw)
    if isinstance(raw, date):
        return datetime.combine(raw, time.min, tzinfo=UTC)
    if isinstance(raw, str):
        s = raw.strip()
        if not s:
            return None
        try:
            return coerce_due_date(datetime.fromisoformat(s))
        except ValueError:
            return None
    return None


def validate_form(data: HomeworkFormData) -> dict[str, str]:
    """Return field -> message for every violated rule (empty dict when valid)."""
    errors: dict[str, str] = {}

    if not (data.title or "").strip():
        errors["title"] = "Title is required"

    if data.subject is None or (isinstance(data.subject, str) and not data.subject.strip()):
        errors["subject"] = "Subject is required"
    elif Subject.parse(data.subject) is None:
        errors["subject"] = f"Unknown subject: {data.subject}"

    if coerce_due_date(data.due_date) is None:
        errors["dueDate"] = "Due date is required"

    return errors


def clean_form(data: HomeworkFormData) -> HomeworkFormData:
    """
    Validate and normalize form data.

    Raises ValidationError with the full error map on failure. The title is
    stored as entered; only emptiness is judged on the trimmed value.
    """
    errors = validate_form(data)
    if errors:
        raise ValidationError(errors)

    subject = Subject.parse(data.subject)
    due_date = coerce_due_date(data.due_date)
    assert subject is not None and due_date is not None

    return HomeworkFormData(
        title=data.title,
        subject=subject,
        due_date=due_date,
        description=data.description or "",
    )
