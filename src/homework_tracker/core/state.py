# src/homework_tracker/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from ..homework.models import ALL_SUBJECTS
from ..homework.task_store import TaskStore


@dataclass
class AppState:
    """
    Global application state shared by the front-end connectors.

    Holds:
    - settings object (frozen Settings in prod; SimpleNamespace in tests)
    - the homework task store (single source of truth for items)
    - the current list view filters (search text + subject filter)
    - a lock that serializes store calls across connectors
    """

    settings: Any
    tasks: TaskStore

    search_text: str = ""
    subject_filter: str = ALL_SUBJECTS

    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
