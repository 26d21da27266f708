# tests/test_bootstrap.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from homework_tracker.cli.bootstrap import create_initial_state, create_kv_store
from homework_tracker.config import Settings
from homework_tracker.storage.kv_store import InMemoryKeyValueStore, SqliteKeyValueStore


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOMEWORK_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("HOMEWORK_STORAGE_KEY", "hw")
    monkeypatch.setenv("HOMEWORK_STORAGE_BACKEND", "MEMORY")
    monkeypatch.setenv("HOMEWORK_LOG_LEVEL", "debug")
    monkeypatch.delenv("HOMEWORK_STORE_PATH", raising=False)

    s = Settings.from_env()
    assert s.data_dir == tmp_path
    assert s.store_path == tmp_path / "store.sqlite3"
    assert s.storage_key == "hw"
    assert s.storage_backend == "memory"
    assert s.log_level == "DEBUG"


def test_unknown_backend_falls_back_to_sqlite(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOMEWORK_STORAGE_BACKEND", "redis")
    assert Settings.from_env().storage_backend == "sqlite"


def test_create_kv_store_by_backend(settings: SimpleNamespace) -> None:
    assert isinstance(create_kv_store(settings), InMemoryKeyValueStore)
    settings.storage_backend = "sqlite"
    assert isinstance(create_kv_store(settings), SqliteKeyValueStore)


def test_create_initial_state_loads_seed(settings: SimpleNamespace) -> None:
    settings.storage_backend = "sqlite"
    state = create_initial_state(settings=settings)

    assert settings.store_path.exists()
    assert [i.id for i in state.tasks.items()] == ["1", "2", "3"]
    assert state.search_text == ""
    assert state.subject_filter == "all"


def test_restart_over_same_sqlite_file_keeps_seed(settings: SimpleNamespace) -> None:
    settings.storage_backend = "sqlite"
    first = create_initial_state(settings=settings).tasks.items()
    second = create_initial_state(settings=settings).tasks.items()
    assert second == first
