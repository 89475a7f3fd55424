# src/taskpad/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks.task_models import FilterType, Task, TaskValidationError, ValidationErrorKind

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, str], str]
CommandHandler3 = Callable[[AppState, str, CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

EMPTY_MESSAGES = {
    FilterType.ALL: "No tasks yet. Add one above to get started!",
    FilterType.COMPLETED: "No completed tasks yet.",
    FilterType.PENDING: "No pending tasks. Great job!",
}

# Shortest id prefix accepted as a task reference.
MIN_ID_PREFIX = 4


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

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

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        arg_text = parts[1] if len(parts) > 1 else ""

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, arg_text, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, arg_text)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        lines.append("Text without a leading / is added as a new task.")
        return "\n".join(lines)


registry = CommandRegistry()


def resolve_task(state: AppState, ref: str) -> Task | None:
    """
    Find a task by 1-based position in the current view, full id or id prefix.

    An ambiguous prefix resolves to nothing.
    """
    ref = ref.strip()
    if not ref:
        return None

    if ref.isdecimal():
        view = state.task_store.filtered_view()
        pos = int(ref)
        return view[pos - 1] if 1 <= pos <= len(view) else None

    ref = ref.lower()
    tasks = state.task_store.tasks
    for t in tasks:
        if t.id.lower() == ref:
            return t

    if len(ref) < MIN_ID_PREFIX:
        return None
    matches = [t for t in tasks if t.id.lower().startswith(ref)]
    return matches[0] if len(matches) == 1 else None


def render_view(state: AppState) -> str:
    store = state.task_store
    view = store.filtered_view()
    if not view:
        return EMPTY_MESSAGES[store.filter]

    lines = [f"Tasks ({store.filter.value}):"]
    for i, t in enumerate(view, start=1):
        mark = "x" if t.completed else " "
        lines.append(f"  {i:>2}. [{mark}] {t.title}  ({t.id[:8]})")
    return "\n".join(lines)


def add_from_text(state: AppState, text: str) -> str:
    try:
        task = state.task_store.add_task(text)
    except TaskValidationError as e:
        logger.debug("Task title rejected kind=%s", e.kind)
        if e.kind == ValidationErrorKind.EMPTY_TITLE:
            return "Task title cannot be empty. Usage: /add <title>"
        return f"Cannot add task: {e}"
    return f"Added: {task.title}"


def cmd_help(state: AppState, arg_text: str) -> str:
    return registry.build_help()


def cmd_list(state: AppState, arg_text: str) -> str:
    return render_view(state)


def cmd_add(state: AppState, arg_text: str) -> str:
    return add_from_text(state, arg_text)


def cmd_done(state: AppState, arg_text: str) -> str:
    """
    /done 2         -> toggle the 2nd task of the current view
    /done 3f2a9c1e  -> toggle by id (or unique id prefix)
    """
    task = resolve_task(state, arg_text)
    if task is None:
        return f"No such task: {arg_text.strip() or '?'}. Usage: /done <n|id>"

    state.task_store.toggle_completion(task.id)
    state_word = "pending" if task.completed else "completed"
    return f"Marked {state_word}: {task.title}"


def cmd_rm(state: AppState, arg_text: str) -> str:
    task = resolve_task(state, arg_text)
    if task is None:
        return f"No such task: {arg_text.strip() or '?'}. Usage: /rm <n|id>"

    state.task_store.delete_task(task.id)
    return f"Deleted: {task.title}"


def cmd_filter(state: AppState, arg_text: str, emit: CommandEmitter | None = None) -> str:
    """
    /filter            -> show the active filter
    /filter completed  -> switch filter and show the view
    """
    store = state.task_store
    value = arg_text.strip().lower()
    if not value:
        return f"Filter is '{store.filter.value}'. Use /filter all | completed | pending."

    try:
        store.set_filter(value)
    except TaskValidationError as e:
        return str(e)

    if emit:
        emit(f"Filter set to '{store.filter.value}'.")
    return render_view(state)


def cmd_status(state: AppState, arg_text: str) -> str:
    counts = state.task_store.counts()
    store_path = getattr(state.settings, "store_path", None)
    return (
        "Status:\n"
        f"  Tasks: {counts['all']} total, {counts['completed']} completed, {counts['pending']} pending\n"
        f"  Filter: {state.task_store.filter.value}\n"
        f"  Storage: {store_path or 'in-memory'}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show tasks for the active filter.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <title>.", aliases=["a"])
registry.register(
    "done", cmd_done, help_text="Toggle completion: /done <n|id>.", aliases=["toggle", "t"]
)
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <n|id>.", aliases=["del", "delete"])
registry.register(
    "filter", cmd_filter, help_text="Filter: /filter all | completed | pending.", aliases=["f"]
)
registry.register("status", cmd_status, help_text="Show totals, filter and storage path.")
