# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from homework_tracker.core.state import AppState
from homework_tracker.homework.task_store import TaskStore

from .fakes import FakeClock, FlakyKeyValueStore, SequentialIds


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="homework-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        store_path=tmp_path / "store.sqlite3",
        storage_key="homeworkItems",
        storage_backend="memory",
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def kv() -> FlakyKeyValueStore:
    return FlakyKeyValueStore()


@pytest.fixture()
def store(kv: FlakyKeyValueStore, clock: FakeClock) -> TaskStore:
    """TaskStore over an empty flaky store: first load yields the seed items."""
    return TaskStore(kv, id_factory=SequentialIds(), clock=clock)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    store.load()
    return AppState(settings=settings, tasks=store)
