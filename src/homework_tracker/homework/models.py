# homework/models.py

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class Subject(StrEnum):
    """
    Closed set of school subjects a homework item can belong to.

    Values are the display names; they are also what gets persisted.
    """

    MATH = "Math"
    SCIENCE = "Science"
    HISTORY = "History"
    ENGLISH = "English"
    ART = "Art"
    MUSIC = "Music"
    PE = "PE"
    LANGUAGES = "Languages"
    COMPUTER_SCIENCE = "Computer Science"
    OTHER = "Other"

    @classmethod
    def parse(cls, raw: str | Subject | None) -> Subject | None:
        """Case-insensitive lookup by value; None when not a known subject."""
        if isinstance(raw, Subject):
            return raw
        if not raw:
            return None
        needle = str(raw).strip().lower()
        for subject in cls:
            if subject.value.lower() == needle:
                return subject
        return None


ALL_SUBJECTS = "all"


@dataclass(slots=True)
class HomeworkFormData:
    """User-editable part of a homework item (what add/edit accept)."""

    title: str
    subject: Subject | str | None
    due_date: datetime | None
    description: str = ""


@dataclass(slots=True)
class HomeworkItem:
    id: str
    title: str
    description: str
    subject: Subject
    due_date: datetime
    completed: bool
    created_at: datetime

    def matches(self, search_text: str, subject_filter: str = ALL_SUBJECTS) -> bool:
        needle = (search_text or "").lower()
        if needle and needle not in self.title.lower() and needle not in self.description.lower():
            return False
        return subject_filter == ALL_SUBJECTS or self.subject == subject_filter

    def days_left(self, now: datetime) -> int:
        """Whole days until due, rounded up (0 or less means overdue)."""
        return math.ceil((self.due_date - now).total_seconds() / 86400)

    def due_status(self, now: datetime) -> str:
        if self.completed:
            return "Completed"
        days = self.days_left(now)
        if days <= 0:
            return "Overdue"
        if days == 1:
            return "Due Tomorrow"
        return f"Due in {days} days"
