# src/taskpad/tasks/task_store.py

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from ..storage.local_storage import LocalStorage, StoredValue
from .task_models import (
    FilterType,
    Task,
    TaskValidationError,
    create_task,
    task_from_dict,
    validate_filter,
    validate_task_collection,
)

logger = logging.getLogger(__name__)

DEFAULT_TASKS_KEY = "tasks"
DEFAULT_FILTER_KEY = "filter"

_UNCHECKED = object()


class TaskStore:
    """
    Owns the task list and the active filter, mirrored into local storage.

    Loading is self-healing:
    - a task list that fails validation is replaced by [] (written back first)
    - an unknown filter is replaced by "all" (written back first)
    The two recoveries are independent of each other.

    Mutations update memory, then persist the whole value synchronously.
    Validation errors from add_task/set_filter propagate to the caller.
    """

    def __init__(
        self,
        storage: LocalStorage,
        *,
        tasks_key: str = DEFAULT_TASKS_KEY,
        filter_key: str = DEFAULT_FILTER_KEY,
    ) -> None:
        self._tasks_value: StoredValue[Any] = StoredValue(storage, tasks_key, [])
        self._filter_value: StoredValue[Any] = StoredValue(storage, filter_key, FilterType.ALL.value)

        self._tasks: tuple[Task, ...] = ()
        self._filter = FilterType.ALL

        # Raw objects last accepted by validation; compared by identity.
        self._checked_tasks_raw: Any = _UNCHECKED
        self._checked_filter_raw: Any = _UNCHECKED

        self._view_cache: tuple[tuple[Task, ...], FilterType, tuple[Task, ...]] | None = None

        self._sync_tasks()
        self._sync_filter()
        logger.info(
            "TaskStore ready tasks_key=%s filter_key=%s total=%s filter=%s",
            tasks_key,
            filter_key,
            len(self._tasks),
            self._filter.value,
        )

    # ---- load / self-healing ----

    def _sync_tasks(self) -> None:
        raw = self._tasks_value.get()
        if raw is self._checked_tasks_raw:
            return
        try:
            validate_task_collection(raw)
        except TaskValidationError as e:
            logger.warning(
                "Invalid tasks data in storage key=%s, resetting to empty list: %s",
                self._tasks_value.key,
                e,
            )
            self._tasks_value.set([])
            self._tasks = ()
        else:
            self._tasks = tuple(task_from_dict(d) for d in raw)
        self._checked_tasks_raw = self._tasks_value.get()

    def _sync_filter(self) -> None:
        raw = self._filter_value.get()
        if raw is self._checked_filter_raw:
            return
        try:
            validate_filter(raw)
        except TaskValidationError as e:
            logger.warning(
                'Invalid filter in storage key=%s, resetting to "all": %s',
                self._filter_value.key,
                e,
            )
            self._filter_value.set(FilterType.ALL.value)
            self._filter = FilterType.ALL
        else:
            self._filter = FilterType(raw)
        self._checked_filter_raw = self._filter_value.get()

    def reload(self) -> None:
        """Re-read both keys from storage and re-run the load checks."""
        self._tasks_value.reload()
        self._filter_value.reload()
        self._sync_tasks()
        self._sync_filter()

    # ---- state ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._tasks

    @property
    def filter(self) -> FilterType:
        return self._filter

    def _commit_tasks(self, tasks: tuple[Task, ...]) -> None:
        self._tasks = tasks
        self._tasks_value.set([t.to_dict() for t in tasks])
        self._checked_tasks_raw = self._tasks_value.get()

    # ---- operations ----

    def add_task(self, title: str) -> Task:
        task = create_task(title)
        self._commit_tasks((*self._tasks, task))
        logger.debug("Task added id=%s total=%s", task.id, len(self._tasks))
        return task

    def toggle_completion(self, task_id: str) -> None:
        # Unknown id: nothing changes, the list is still written back.
        self._commit_tasks(
            tuple(replace(t, completed=not t.completed) if t.id == task_id else t for t in self._tasks)
        )
        logger.debug("Task toggled id=%s", task_id)

    def delete_task(self, task_id: str) -> None:
        before = len(self._tasks)
        self._commit_tasks(tuple(t for t in self._tasks if t.id != task_id))
        logger.debug("Task delete id=%s removed=%s", task_id, before - len(self._tasks))

    def set_filter(self, new_filter: FilterType | str) -> None:
        try:
            validate_filter(new_filter)
        except TaskValidationError as e:
            logger.error("Invalid filter: %s", e)
            raise

        self._filter = FilterType(new_filter)
        self._filter_value.set(self._filter.value)
        self._checked_filter_raw = self._filter_value.get()

    def filtered_view(self) -> list[Task]:
        cache = self._view_cache
        if cache is not None and cache[0] is self._tasks and cache[1] == self._filter:
            return list(cache[2])

        if self._filter == FilterType.COMPLETED:
            view = tuple(t for t in self._tasks if t.completed is True)
        elif self._filter == FilterType.PENDING:
            view = tuple(t for t in self._tasks if t.completed is False)
        else:
            view = self._tasks

        self._view_cache = (self._tasks, self._filter, view)
        return list(view)

    def counts(self) -> dict[str, int]:
        done = sum(1 for t in self._tasks if t.completed)
        return {
            FilterType.ALL.value: len(self._tasks),
            FilterType.COMPLETED.value: done,
            FilterType.PENDING.value: len(self._tasks) - done,
        }
