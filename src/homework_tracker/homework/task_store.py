# homework/task_store.py

from __future__ import annotations

import logging
import uuid
import warnings
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import UTC, datetime

from ..core.ports import Clock, IdFactory, KeyValueStore
from . import codec
from .errors import (
    DeserializationError,
    PersistenceError,
    PersistenceWarning,
    TaskNotFoundError,
)
from .models import ALL_SUBJECTS, HomeworkFormData, HomeworkItem, Subject
from .seed import build_seed_items
from .validation import clean_form

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "homeworkItems"

ChangeListener = Callable[[], None]


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _new_id() -> str:
    return str(uuid.uuid4())


class TaskStore:
    """
    In-memory homework collection mirrored into a flat key-value store.

    - The whole collection is one JSON snapshot under `storage_key`.
    - Every mutation rewrites the full snapshot (no deltas).
    - A failed write keeps the in-memory change; the failure is recorded in
      `last_persist_error`, logged and emitted as PersistenceWarning.
    - Operations on an unknown id change nothing and report it through the
      return value (None / False) instead of raising.

    The collection is loaded lazily on first access, so mutating before an
    explicit load() never clobbers the stored snapshot.
    """

    def __init__(
        self,
        kv: KeyValueStore,
        *,
        storage_key: str = DEFAULT_STORAGE_KEY,
        id_factory: IdFactory = _new_id,
        clock: Clock = _utc_now,
    ) -> None:
        self._kv = kv
        self._key = storage_key
        self._id_factory = id_factory
        self._clock = clock
        self._items: list[HomeworkItem] | None = None
        self._listeners: list[ChangeListener] = []
        self.last_persist_error: PersistenceError | None = None

    def _now(self) -> datetime:
        return codec.stored_precision(self._clock())

    # ---- loading / persistence ----

    def load(self) -> list[HomeworkItem]:
        """
        (Re)read the snapshot from the durable store.

        No snapshot -> seed items (first run), written back right away so later
        loads return the same items. Unreadable snapshot -> seed items as well;
        the error is logged, never raised. A failed read seeds memory only and
        leaves the stored snapshot alone.
        """
        try:
            blob = self._kv.get(self._key)
        except Exception:
            logger.exception("Durable store read failed key=%s; using seed items.", self._key)
            self._items = build_seed_items(self._now())
            return list(self._items)

        if blob is None:
            self._items = build_seed_items(self._now())
            logger.info("No stored snapshot key=%s; seeded %d items.", self._key, len(self._items))
            self._persist()
        else:
            try:
                self._items = codec.loads(blob)
                logger.debug("Loaded %d items from key=%s", len(self._items), self._key)
            except DeserializationError as e:
                logger.warning("Stored snapshot key=%s is unreadable (%s); using seed items.", self._key, e)
                self._items = build_seed_items(self._now())
                self._persist()

        return list(self._items)

    def _collection(self) -> list[HomeworkItem]:
        if self._items is None:
            self.load()
        assert self._items is not None
        return self._items

    def _persist(self) -> None:
        try:
            self._kv.set(self._key, codec.dumps(self._collection()))
        except Exception as e:
            err = PersistenceError(f"Failed to write snapshot key={self._key}: {e}")
            err.__cause__ = e
            self.last_persist_error = err
            logger.warning("%s (in-memory state kept)", err)
            warnings.warn(str(err), PersistenceWarning, stacklevel=3)
            return
        self.last_persist_error = None

    def _changed(self) -> None:
        self._persist()
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Change listener failed.")

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a callback run after every mutation; returns an unsubscribe function."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ---- read side ----

    def items(self) -> list[HomeworkItem]:
        return list(self._collection())

    def get(self, task_id: str) -> HomeworkItem | None:
        for item in self._collection():
            if item.id == task_id:
                return item
        return None

    def require(self, task_id: str) -> HomeworkItem:
        item = self.get(task_id)
        if item is None:
            raise TaskNotFoundError(task_id)
        return item

    def query(self, search_text: str = "", subject_filter: str = ALL_SUBJECTS) -> list[HomeworkItem]:
        """
        Filtered view: incomplete before completed, then earliest due date.

        Ties keep collection order (newest first) since sorted() is stable.
        """
        matched = [i for i in self._collection() if i.matches(search_text, subject_filter)]
        return sorted(matched, key=lambda i: (i.completed, i.due_date))

    def subjects_in_use(self) -> list[Subject]:
        seen: list[Subject] = []
        for item in self._collection():
            if item.subject not in seen:
                seen.append(item.subject)
        return seen

    @staticmethod
    def split_by_status(
        items: Iterable[HomeworkItem],
    ) -> tuple[list[HomeworkItem], list[HomeworkItem]]:
        pending: list[HomeworkItem] = []
        completed: list[HomeworkItem] = []
        for item in items:
            (completed if item.completed else pending).append(item)
        return pending, completed

    # ---- mutations ----

    def add(self, data: HomeworkFormData) -> HomeworkItem:
        form = clean_form(data)
        items = self._collection()

        existing = {i.id for i in items}
        task_id = self._id_factory()
        while task_id in existing:
            task_id = self._id_factory()

        assert isinstance(form.subject, Subject) and form.due_date is not None
        item = HomeworkItem(
            id=task_id,
            title=form.title,
            description=form.description,
            subject=form.subject,
            due_date=form.due_date,
            completed=False,
            created_at=self._now(),
        )
        items.insert(0, item)
        logger.debug("Task added id=%s subject=%s due=%s", item.id, item.subject, item.due_date)
        self._changed()
        return item

    def edit(self, task_id: str, data: HomeworkFormData) -> HomeworkItem | None:
        form = clean_form(data)
        items = self._collection()

        for idx, item in enumerate(items):
            if item.id != task_id:
                continue
            assert isinstance(form.subject, Subject) and form.due_date is not None
            updated = replace(
                item,
                title=form.title,
                description=form.description,
                subject=form.subject,
                due_date=form.due_date,
            )
            items[idx] = updated
            logger.debug("Task edited id=%s", task_id)
            self._changed()
            return updated

        logger.warning("edit: task id=%s not found; nothing changed.", task_id)
        return None

    def set_completed(self, task_id: str, completed: bool) -> HomeworkItem | None:
        items = self._collection()
        for idx, item in enumerate(items):
            if item.id != task_id:
                continue
            updated = replace(item, completed=bool(completed))
            items[idx] = updated
            logger.debug("Task id=%s completed=%s", task_id, updated.completed)
            self._changed()
            return updated

        logger.warning("set_completed: task id=%s not found; nothing changed.", task_id)
        return None

    def remove(self, task_id: str) -> bool:
        items = self._collection()
        for idx, item in enumerate(items):
            if item.id == task_id:
                del items[idx]
                logger.debug("Task removed id=%s", task_id)
                self._changed()
                return True

        logger.warning("remove: task id=%s not found; nothing changed.", task_id)
        return False
