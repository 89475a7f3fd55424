# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskpad.core.state import AppState
from taskpad.storage.backends import MemoryBackend
from taskpad.storage.local_storage import LocalStorage
from taskpad.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskpad-test",
        log_level="DEBUG",
        console_enabled=False,
        data_dir=tmp_path / "data",
        store_path=tmp_path / "data" / "storage.sqlite3",
        tasks_key="tasks",
        filter_key="filter",
    )


@pytest.fixture()
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture()
def storage(backend: MemoryBackend) -> LocalStorage:
    return LocalStorage(backend)


@pytest.fixture()
def store(storage: LocalStorage) -> TaskStore:
    return TaskStore(storage)


@pytest.fixture()
def state(settings: SimpleNamespace, storage: LocalStorage, store: TaskStore) -> AppState:
    """
    AppState wired with an in-memory backend.

    Bootstrap (SQLite) is covered separately in test_bootstrap.py.
    """
    return AppState(settings=settings, storage=storage, task_store=store)
