# src/taskpad/storage/local_storage.py

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from ..core.ports import KeyValueBackend

T = TypeVar("T")

logger = logging.getLogger(__name__)

_MISSING = object()


class LocalStorage:
    """
    JSON read/write over a raw key-value backend.

    Neither method ever raises: a broken entry or a failing backend only
    costs durability, never the caller's state.
    """

    def __init__(self, backend: KeyValueBackend) -> None:
        self._backend = backend

    @property
    def backend(self) -> KeyValueBackend:
        return self._backend

    def read(self, key: str, fallback: Any) -> Any:
        try:
            raw = self._backend.get_item(key)
            if raw is None:
                return fallback
            return json.loads(raw)
        except Exception:
            logger.warning('Error reading storage key "%s"', key, exc_info=True)
            return fallback

    def write(self, key: str, value: Any) -> None:
        try:
            self._backend.set_item(key, json.dumps(value, ensure_ascii=False))
        except Exception:
            logger.error('Error setting storage key "%s"', key, exc_info=True)


class StoredValue(Generic[T]):
    """
    One storage key bound to an in-memory value.

    set() accepts either a value or a callable taking the previous value.
    The in-memory value is updated before the write-through, so a failed
    write leaves it in place.
    """

    def __init__(self, storage: LocalStorage, key: str, default: T) -> None:
        self._storage = storage
        self._key = key
        self._default = default
        self._value: Any = _MISSING
        self.reload()

    @property
    def key(self) -> str:
        return self._key

    def get(self) -> T:
        return self._value

    def set(self, value: T | Callable[[T], T]) -> None:
        new_value = value(self._value) if callable(value) else value
        self._value = new_value
        self._storage.write(self._key, new_value)

    def reload(self) -> T:
        self._value = self._storage.read(self._key, self._default)
        return self._value
