# src/taskpad/core/ports.py

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage backends swappable and makes testing easier.
"""

from __future__ import annotations

from typing import Protocol


class KeyValueBackend(Protocol):
    """
    Raw string key-value store (the "local storage" of the app).

    Implementations may raise on any access (disk full, locked db, ...);
    LocalStorage on top is responsible for catching that.
    """

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...
