# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class FlakyBackend:
    """
    In-memory KeyValueBackend that raises on demand.

    - fail_get / fail_set switch the matching operation to raise
    - writes are recorded for assertions
    """

    items: dict[str, str] = field(default_factory=dict)
    fail_get: bool = False
    fail_set: bool = False
    writes: list[tuple[str, str]] = field(default_factory=list)

    def get_item(self, key: str) -> str | None:
        if self.fail_get:
            raise OSError("storage not available")
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.fail_set:
            raise OSError("storage quota exceeded")
        self.writes.append((key, value))
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)
