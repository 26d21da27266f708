# homework/seed.py

from __future__ import annotations

from datetime import datetime, timedelta

from .models import HomeworkItem, Subject


def build_seed_items(now: datetime) -> list[HomeworkItem]:
    """Example items shown on first run (or when the stored snapshot is unreadable)."""
    return [
        HomeworkItem(
            id="1",
            title="Math Homework - Algebra",
            description="Complete exercises 10-15 on page 45",
            subject=Subject.MATH,
            due_date=now + timedelta(days=1),
            completed=False,
            created_at=now,
        ),
        HomeworkItem(
            id="2",
            title="Science Lab Report",
            description="Write up the findings from the chemistry experiment",
            subject=Subject.SCIENCE,
            due_date=now + timedelta(days=7),
            completed=False,
            created_at=now,
        ),
        HomeworkItem(
            id="3",
            title="History Essay",
            description="2000 word essay on World War II",
            subject=Subject.HISTORY,
            due_date=now - timedelta(days=1),
            completed=True,
            created_at=now,
        ),
    ]
