# src/taskpad/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from ..core.state import AppState
from ..tasks.icons import ICON_CATALOG, icon_index, icon_key, is_valid_icon
from ..tasks.task_api import add_task_from_text, countdown_line, edit_task_from_text, schedule_in_minutes
from ..tasks.task_models import Err, ErrorKind, Task, TaskError
from ..tasks.time_utils import TIMESTAMP_PATTERN, format_timestamp

CommandHandler = Callable[[AppState, str, datetime], str]

logger = logging.getLogger(__name__)

# User-facing wording lives here; the store only reports kinds.
ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.INVALID_NAME_FORMAT: "Task name must be alphanumeric (letters, digits, spaces).",
    ErrorKind.NAME_TOO_LONG: "Task name must not exceed 20 characters.",
    ErrorKind.DUPLICATE_NAME: "Task name must be unique.",
    ErrorKind.SCHEDULED_IN_PAST: "Selected date/time cannot be in the past.",
    ErrorKind.INVALID_ICON: f"Unknown icon. Use /icons (0-{len(ICON_CATALOG) - 1}).",
    ErrorKind.NOT_FOUND: "No such task.",
    ErrorKind.MALFORMED_TIMESTAMP: f"Date/time must look like {TIMESTAMP_PATTERN}.",
    ErrorKind.PERSISTENCE: "Could not save the change; nothing was modified.",
}


def error_message(error: TaskError) -> str:
    return ERROR_MESSAGES.get(error.kind, f"Error: {error.kind.value}")


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

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

    def handle(self, state: AppState, line: str, now: datetime | None = None) -> str | None:
        """
        Handle a string like "/command args".
        Only the command word is split off; handlers get the rest of the line as-is.
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1] if len(parts) > 1 else ""

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args, now if now is not None else datetime.now())

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _split_fields(text: str) -> list[str]:
    return [p.strip() for p in text.split("|")]


def _parse_int(raw: str) -> int | None:
    # ASCII only: str.isdigit() also accepts superscripts that int() rejects.
    return int(raw) if raw.isascii() and raw.isdigit() else None


def _parse_icon(raw: str) -> int | None:
    raw = raw.strip()
    if not raw:
        return 0
    idx = _parse_int(raw)
    return idx if idx is not None else icon_index(raw)


def _parse_id(raw: str) -> int | None:
    return _parse_int(raw.strip().lstrip("#"))


def _render_list(title: str, tasks: tuple[Task, ...], now: datetime) -> str:
    if not tasks:
        return f"{title}: none."
    lines = [f"{title} ({len(tasks)}):"]
    for t in tasks:
        lines.append(f"  {countdown_line(t, now)}")
    return "\n".join(lines)


def cmd_help(state: AppState, args: str, now: datetime) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: str, now: datetime) -> str:
    return _render_list("Tasks", state.store.list(), now)


def cmd_find(state: AppState, args: str, now: datetime) -> str:
    if not args.strip():
        return _render_list("Tasks", state.store.list(), now)
    return _render_list(f"Tasks matching '{args}'", state.store.filtered_by_query(args), now)


def cmd_show(state: AppState, args: str, now: datetime) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /show <id>"
    task = state.store.get(task_id)
    if task is None:
        return ERROR_MESSAGES[ErrorKind.NOT_FOUND]
    return (
        f"#{task.id} {task.name} [{icon_key(task.icon)}]\n"
        f"  Description: {task.description or '-'}\n"
        f"  Created: {format_timestamp(task.created_at)}\n"
        f"  {countdown_line(task, now)}"
    )


def cmd_add(state: AppState, args: str, now: datetime) -> str:
    """
    /add <name> | <dd/mm/yyyy HH:MM> | [icon] | [description]
    """
    fields = _split_fields(args)
    if len(fields) < 2 or not fields[0]:
        return f"Usage: /add <name> | <{TIMESTAMP_PATTERN}> | [icon] | [description]"

    icon = _parse_icon(fields[2]) if len(fields) > 2 else 0
    if icon is None:
        return ERROR_MESSAGES[ErrorKind.INVALID_ICON]
    description = " | ".join(fields[3:]) if len(fields) > 3 else ""

    result = add_task_from_text(
        state.store,
        name=fields[0],
        scheduled_text=fields[1],
        description=description,
        icon=icon,
        now=now,
    )
    if isinstance(result, Err):
        return error_message(result.error)
    return f"Added {countdown_line(result.value, now)}"


def cmd_in(state: AppState, args: str, now: datetime) -> str:
    """
    /in <minutes> <name>
    """
    parts = args.split(maxsplit=1)
    minutes = _parse_int(parts[0]) if parts else None
    if minutes is None or len(parts) < 2:
        return "Usage: /in <minutes> <name>"
    result = schedule_in_minutes(state.store, name=parts[1].strip(), minutes=minutes, now=now)
    if isinstance(result, Err):
        return error_message(result.error)
    return f"Added {countdown_line(result.value, now)}"


def cmd_edit(state: AppState, args: str, now: datetime) -> str:
    """
    /edit <id> name=<name> | desc=<text> | icon=<n or key> | at=<dd/mm/yyyy HH:MM>
    """
    usage = f"Usage: /edit <id> name=<name> | desc=<text> | icon=<icon> | at=<{TIMESTAMP_PATTERN}>"
    parts = args.split(maxsplit=1)
    task_id = _parse_id(parts[0]) if parts else None
    if task_id is None or len(parts) < 2:
        return usage

    values: dict[str, str] = {}
    for field in _split_fields(parts[1]):
        key, sep, value = field.partition("=")
        key = key.strip().lower()
        if not sep or key not in ("name", "desc", "icon", "at"):
            return usage
        values[key] = value.strip()

    icon: int | None = None
    if "icon" in values:
        icon = _parse_icon(values["icon"])
        if icon is None or not is_valid_icon(icon):
            return ERROR_MESSAGES[ErrorKind.INVALID_ICON]

    result = edit_task_from_text(
        state.store,
        task_id,
        name=values.get("name"),
        description=values.get("desc"),
        icon=icon,
        scheduled_text=values.get("at"),
        now=now,
    )
    if isinstance(result, Err):
        return error_message(result.error)
    return f"Updated {countdown_line(result.value, now)}"


def cmd_del(state: AppState, args: str, now: datetime) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /del <id>"
    result = state.store.delete(task_id)
    if isinstance(result, Err):
        return error_message(result.error)
    return f"Deleted task #{task_id}."


def cmd_due(state: AppState, args: str, now: datetime) -> str:
    """
    /due            -> tasks due within the configured window
    /due <minutes>  -> tasks due within that many minutes
    """
    window = state.due_window
    if args.strip():
        requested = _parse_int(args.strip())
        if requested is None:
            return "Usage: /due [minutes]"
        window = timedelta(minutes=requested)
    minutes = int(window.total_seconds() // 60)
    return _render_list(f"Due within {minutes} min", state.store.due_within(window, now), now)


def cmd_icons(state: AppState, args: str, now: datetime) -> str:
    lines = ["Icons:"]
    for i, key in enumerate(ICON_CATALOG):
        lines.append(f"  {i}: {key}")
    return "\n".join(lines)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="List all tasks, newest first.", aliases=["ls"])
registry.register("find", cmd_find, help_text="Search task names: /find <text>.", aliases=["search"])
registry.register("show", cmd_show, help_text="Show one task: /show <id>.")
registry.register(
    "add", cmd_add, help_text=f"Add a task: /add <name> | <{TIMESTAMP_PATTERN}> | [icon] | [description]."
)
registry.register("in", cmd_in, help_text="Add a task due in N minutes: /in <minutes> <name>.")
registry.register(
    "edit", cmd_edit, help_text="Edit a task: /edit <id> name=.. | desc=.. | icon=.. | at=.."
)
registry.register("del", cmd_del, help_text="Delete a task: /del <id>.", aliases=["rm", "delete"])
registry.register("due", cmd_due, help_text="Tasks due soon: /due [minutes].")
registry.register("icons", cmd_icons, help_text="List the icon catalog.")
