# tests/test_commands.py

from __future__ import annotations

from taskpad.cli.commands import CommandRegistry, registry, resolve_task
from taskpad.connectors.console_connector import handle_line
from taskpad.tasks.task_models import FilterType


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, arg_text):
        called["h2"] += 1
        return f"h2:{arg_text}"

    def h3(state, arg_text, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b")

    assert reg.handle(state, "/a x  y") == "h2:x  y"
    assert reg.handle(state, "/b y", emit=lambda _: None) == "h3"
    assert called["h2"] == 1
    assert called["h3"] == 1


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_add_keeps_inner_spacing_and_trims(state) -> None:
    reply = registry.handle(state, "/add   Buy  milk   ")
    assert reply == "Added: Buy  milk"
    assert state.task_store.tasks[0].title == "Buy  milk"


def test_add_reports_validation_errors(state) -> None:
    assert "cannot be empty" in (registry.handle(state, "/add") or "")
    assert "cannot exceed 500" in (registry.handle(state, "/add " + "x" * 501) or "")
    assert state.task_store.tasks == ()


def test_resolve_task_by_position_id_and_prefix(state) -> None:
    a = state.task_store.add_task("a")
    b = state.task_store.add_task("b")

    assert resolve_task(state, "1") == a
    assert resolve_task(state, "2") == b
    assert resolve_task(state, "3") is None
    assert resolve_task(state, "0") is None
    assert resolve_task(state, b.id.upper()) == b
    assert resolve_task(state, a.id[:8]) == a
    assert resolve_task(state, a.id[:2]) is None
    assert resolve_task(state, "") is None


def test_positions_follow_the_filtered_view(state) -> None:
    store = state.task_store
    a = store.add_task("a")
    b = store.add_task("b")
    store.toggle_completion(a.id)
    store.set_filter(FilterType.PENDING)

    assert resolve_task(state, "1") == b


def test_done_rm_and_filter_commands(state) -> None:
    store = state.task_store
    store.add_task("write report")

    assert registry.handle(state, "/done 1") == "Marked completed: write report"
    assert store.tasks[0].completed is True
    assert registry.handle(state, "/t 1") == "Marked pending: write report"

    assert "No such task" in (registry.handle(state, "/done 9") or "")

    shown = registry.handle(state, "/filter completed")
    assert shown == "No completed tasks yet."
    assert store.filter == FilterType.COMPLETED

    assert registry.handle(state, "/filter bogus") == "Filter must be one of: all, completed, pending"
    assert store.filter == FilterType.COMPLETED

    registry.handle(state, "/f all")
    assert registry.handle(state, "/rm 1") == "Deleted: write report"
    assert store.tasks == ()
    assert registry.handle(state, "/list") == "No tasks yet. Add one above to get started!"


def test_filter_emits_confirmation(state) -> None:
    notes: list[str] = []
    registry.handle(state, "/filter pending", emit=notes.append)
    assert notes == ["Filter set to 'pending'."]
    assert registry.handle(state, "/ls") == "No pending tasks. Great job!"


def test_status_counts(state) -> None:
    a = state.task_store.add_task("a")
    state.task_store.add_task("b")
    state.task_store.toggle_completion(a.id)

    reply = registry.handle(state, "/status") or ""
    assert "2 total, 1 completed, 1 pending" in reply
    assert "Filter: all" in reply


def test_console_line_without_slash_adds_task(state) -> None:
    assert handle_line(state, "  Buy milk  ") == "Added: Buy milk"
    assert handle_line(state, "   ") is None
    assert "1. [ ] Buy milk" in (handle_line(state, "/list") or "")


def test_console_line_survives_crashing_handler(state, monkeypatch) -> None:
    def boom(_task_id):
        raise RuntimeError("boom")

    state.task_store.add_task("a")
    monkeypatch.setattr(state.task_store, "delete_task", boom)

    assert handle_line(state, "/rm 1") == "Internal error while handling a command."


def test_non_decimal_digits_are_not_positions(state) -> None:
    state.task_store.add_task("a")

    assert resolve_task(state, "²") is None
    assert handle_line(state, "/done ²") == "No such task: ². Usage: /done <n|id>"
    assert handle_line(state, "/rm ²") == "No such task: ². Usage: /rm <n|id>"
    assert state.task_store.tasks[0].completed is False
