# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta


class FakeClock:
    """
    Deterministic clock for unit tests.

    - Returns `now` on every call
    - `advance()` moves time forward
    """

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2024, 5, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


class SequentialIds:
    """Id factory yielding task-1, task-2, ... (optionally replaying given ids first)."""

    def __init__(self, *preset: str) -> None:
        self._preset = list(preset)
        self._n = 0

    def __call__(self) -> str:
        if self._preset:
            return self._preset.pop(0)
        self._n += 1
        return f"task-{self._n}"


@dataclass(slots=True)
class FlakyKeyValueStore:
    """
    In-memory KeyValueStore whose writes can be switched to fail
    (simulates an unavailable / over-quota backend).
    """

    data: dict[str, str] = field(default_factory=dict)
    fail_writes: bool = False
    writes: int = 0

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise OSError("quota exceeded")
        self.writes += 1
        self.data[key] = value
