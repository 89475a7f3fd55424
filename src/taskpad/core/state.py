# src/taskpad/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..storage.local_storage import LocalStorage
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    storage: LocalStorage
    task_store: TaskStore
