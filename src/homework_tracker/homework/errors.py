# homework/errors.py

from __future__ import annotations


class ValidationError(ValueError):
    """Form data rejected; `errors` maps field name -> user-facing message."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        details = "; ".join(f"{k}: {v}" for k, v in self.errors.items())
        super().__init__(f"Invalid homework data ({details})")


class TaskNotFoundError(LookupError):
    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}")


class PersistenceError(RuntimeError):
    """Writing the snapshot to the durable store failed (in-memory state is kept)."""


class PersistenceWarning(UserWarning):
    pass


class DeserializationError(ValueError):
    """Stored snapshot could not be turned back into homework items."""
