# src/homework_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- picks the durable key-value backend and wires the TaskStore into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import KeyValueStore
from ..core.state import AppState
from ..homework.task_store import TaskStore
from ..storage.kv_store import InMemoryKeyValueStore, SqliteKeyValueStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.store_path.parent.mkdir(parents=True, exist_ok=True)


def create_kv_store(settings) -> KeyValueStore:
    backend = str(getattr(settings, "storage_backend", "sqlite")).lower()
    if backend == "memory":
        logger.info("Using in-memory storage; nothing will survive a restart.")
        return InMemoryKeyValueStore()
    return SqliteKeyValueStore(settings.store_path)


def create_initial_state(*, settings=None, kv: KeyValueStore | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the store backend) injectable makes the app easier
    to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if kv is None:
        _ensure_local_dirs(settings)
        kv = create_kv_store(settings)

    tasks = TaskStore(kv, storage_key=settings.storage_key)
    items = tasks.load()
    logger.info("Task store ready key=%s items=%d", settings.storage_key, len(items))

    return AppState(settings=settings, tasks=tasks)
