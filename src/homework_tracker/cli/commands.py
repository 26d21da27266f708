# src/homework_tracker/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import cast

from ..core.state import AppState
from ..homework.errors import ValidationError
from ..homework.models import ALL_SUBJECTS, HomeworkFormData, HomeworkItem, Subject
from ..homework.validation import coerce_due_date

CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], str], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

SHORT_ID_LEN = 8


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, /list, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Two-parameter handlers get the whitespace-split args; three-parameter
        handlers also get the rest of the line exactly as typed.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].strip().split(None, 1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        rest = parts[1] if len(parts) > 1 else ""
        args = rest.split()

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        logger.debug("Command /%s args=%s", name, args)
        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, rest)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----

def _now() -> datetime:
    return datetime.now(UTC)


def _parse_due(raw: str) -> datetime | None:
    """YYYY-MM-DD / ISO-8601, or today / tomorrow / +N (days from today, UTC)."""
    s = raw.strip().lower()
    today = _now().date()
    if s == "today":
        return coerce_due_date(today)
    if s == "tomorrow":
        return coerce_due_date(today + timedelta(days=1))
    if s.startswith("+") and s[1:].isdigit():
        return coerce_due_date(today + timedelta(days=int(s[1:])))
    return coerce_due_date(raw)


def _parse_form(text: str) -> HomeworkFormData:
    """
    "<title> | <subject> | <due> [| description]" -> HomeworkFormData.

    Pieces are trimmed at the edges only; inner whitespace is kept as typed.
    Missing pieces are left empty so validation reports them by field.
    """
    pieces = [p.strip() for p in text.split("|")]
    pieces += [""] * (4 - len(pieces))
    title, subject_raw, due_raw = pieces[0], pieces[1], pieces[2]
    description = " | ".join(p for p in pieces[3:] if p)

    subject: Subject | str | None = Subject.parse(subject_raw) or subject_raw or None
    due = _parse_due(due_raw) if due_raw else None
    return HomeworkFormData(title=title, subject=subject, due_date=due, description=description)


def _format_errors(err: ValidationError) -> str:
    lines = ["Not saved:"]
    for field_name, msg in err.errors.items():
        lines.append(f"  {field_name}: {msg}")
    return "\n".join(lines)


def _resolve_id(state: AppState, token: str) -> tuple[str | None, str | None]:
    """
    Map a full id or unique id prefix to an existing id.
    Returns (task_id, None) or (None, error message).
    """
    token = token.strip()
    if not token:
        return None, "Missing task id."
    if state.tasks.get(token) is not None:
        return token, None
    matches = [i.id for i in state.tasks.items() if i.id.startswith(token)]
    if len(matches) == 1:
        return matches[0], None
    if not matches:
        return None, f"Task not found: {token}"
    return None, f"Ambiguous id prefix {token!r} ({len(matches)} matches)."


def _persist_note(state: AppState) -> str:
    err = state.tasks.last_persist_error
    return f"\n[warning] Changes are kept in memory but were not saved: {err}" if err else ""


def format_item(item: HomeworkItem, now: datetime | None = None) -> str:
    now = now or _now()
    box = "[x]" if item.completed else "[ ]"
    due = item.due_date.date().isoformat()
    return (
        f"{box} {item.id[:SHORT_ID_LEN]:<{SHORT_ID_LEN}}  {item.title}"
        f"  ({item.subject}, due {due}, {item.due_status(now)})"
    )


# ---- commands ----

def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    items = state.tasks.items()
    pending, completed = state.tasks.split_by_status(items)
    backend = getattr(state.settings, "storage_backend", "?")
    return (
        "Status:\n"
        f"  Storage: {backend} (key={state.settings.storage_key})\n"
        f"  Items: {len(items)} ({len(pending)} pending, {len(completed)} completed)\n"
        f"  Search: {state.search_text or '(none)'}\n"
        f"  Subject filter: {state.subject_filter}"
    )


def cmd_list(state: AppState, args: list[str], text: str) -> str:
    """
    /list            -> list with current search/filter
    /list <text...>  -> set search text, then list
    /list -          -> clear search text, then list
    """
    text = text.strip()
    if text:
        state.search_text = "" if text == "-" else text

    shown = state.tasks.query(state.search_text, state.subject_filter)
    if not shown:
        if state.search_text or state.subject_filter != ALL_SUBJECTS:
            return "No tasks found. Try adjusting your filters or search query."
        return "No tasks found. Add your first homework task with /add."

    now = _now()
    pending, completed = state.tasks.split_by_status(shown)
    lines = [f"Pending ({len(pending)}):"]
    lines += [f"  {format_item(i, now)}" for i in pending] or ["  (none)"]
    lines.append(f"Completed ({len(completed)}):")
    lines += [f"  {format_item(i, now)}" for i in completed] or ["  (none)"]
    return "\n".join(lines)


def cmd_filter(state: AppState, args: list[str]) -> str:
    if not args:
        return f"Subject filter is {state.subject_filter}. Use /filter <subject> or /filter all."
    raw = " ".join(args)
    if raw.lower() == ALL_SUBJECTS:
        state.subject_filter = ALL_SUBJECTS
        return "Showing all subjects."
    subject = Subject.parse(raw)
    if subject is None:
        return f"Unknown subject: {raw}. Choose from: {', '.join(s.value for s in Subject)}."
    state.subject_filter = subject.value
    return f"Showing {subject.value} only."


def cmd_subjects(state: AppState, args: list[str]) -> str:
    used = state.tasks.subjects_in_use()
    return (
        f"All subjects: {', '.join(s.value for s in Subject)}\n"
        f"In use: {', '.join(s.value for s in used) or '(none)'}"
    )


def cmd_add(state: AppState, args: list[str], text: str) -> str:
    try:
        item = state.tasks.add(_parse_form(text))
    except ValidationError as e:
        return _format_errors(e)
    return f"Task added: {format_item(item)}{_persist_note(state)}"


def cmd_edit(state: AppState, args: list[str], text: str) -> str:
    if not args:
        return "Usage: /edit <id> <title> | <subject> | <due> [| description]"
    token, *tail = text.split(None, 1)
    form_text = tail[0] if tail else ""
    task_id, err = _resolve_id(state, token)
    if task_id is None:
        return err or "Task not found."
    try:
        item = state.tasks.edit(task_id, _parse_form(form_text))
    except ValidationError as e:
        return _format_errors(e)
    if item is None:
        return f"Task not found: {task_id}"
    return f"Task updated: {format_item(item)}{_persist_note(state)}"


def cmd_show(state: AppState, args: list[str]) -> str:
    task_id, err = _resolve_id(state, args[0] if args else "")
    if task_id is None:
        return err or "Task not found."
    item = state.tasks.require(task_id)
    return (
        f"{item.title}\n"
        f"  id: {item.id}\n"
        f"  subject: {item.subject}\n"
        f"  due: {item.due_date.date().isoformat()} ({item.due_status(_now())})\n"
        f"  created: {item.created_at.astimezone().strftime('%Y-%m-%d %H:%M')}\n"
        f"  description: {item.description or '-'}"
    )


def _set_completed(state: AppState, args: list[str], completed: bool) -> str:
    task_id, err = _resolve_id(state, args[0] if args else "")
    if task_id is None:
        return err or "Task not found."
    item = state.tasks.set_completed(task_id, completed)
    if item is None:
        return f"Task not found: {task_id}"
    if completed:
        return f"Task completed. Great job!{_persist_note(state)}"
    return f"Task marked as incomplete.{_persist_note(state)}"


def cmd_done(state: AppState, args: list[str]) -> str:
    return _set_completed(state, args, True)


def cmd_undo(state: AppState, args: list[str]) -> str:
    return _set_completed(state, args, False)


def cmd_rm(state: AppState, args: list[str]) -> str:
    task_id, err = _resolve_id(state, args[0] if args else "")
    if task_id is None:
        return err or "Task not found."
    if not state.tasks.remove(task_id):
        return f"Task not found: {task_id}"
    return f"Task deleted.{_persist_note(state)}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show storage, item counts and active filters.")
registry.register(
    "list", cmd_list, help_text="List tasks: /list [search text] (use '/list -' to clear search).",
    aliases=["ls"],
)
registry.register("filter", cmd_filter, help_text="Filter by subject: /filter <subject> | /filter all.")
registry.register("subjects", cmd_subjects, help_text="Show known subjects and the ones in use.")
registry.register(
    "add", cmd_add, help_text="Add: /add <title> | <subject> | <YYYY-MM-DD|today|tomorrow|+N> [| description]."
)
registry.register(
    "edit", cmd_edit, help_text="Edit: /edit <id> <title> | <subject> | <due> [| description]."
)
registry.register("show", cmd_show, help_text="Show one task: /show <id>.")
registry.register("done", cmd_done, help_text="Mark complete: /done <id>.", aliases=["complete"])
registry.register("undo", cmd_undo, help_text="Mark incomplete: /undo <id>.")
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <id>.", aliases=["delete"])
