# src/homework_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on Protocols instead of concrete implementations.
This keeps the durable backend swappable and makes testing easier.
"""

from datetime import datetime
from typing import Protocol


class KeyValueStore(Protocol):
    """
    Flat, synchronous string key-value backend (localStorage-like).

    `set` raises on failure (unavailable, over quota, ...); callers decide
    whether that is fatal.
    """

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...


class IdFactory(Protocol):
    """Produces ids unique within the store's lifetime."""
    def __call__(self) -> str: ...


class Clock(Protocol):
    """Returns the current time as a tz-aware datetime."""
    def __call__(self) -> datetime: ...

