"""In-process cache adapter for the service-layer cache port."""

from __future__ import annotations

from typing import Any


class MemoryCache:
    """Dict-backed ``get/set/invalidate`` store scoped to one process."""

    def __init__(self) -> None:
        self._items: dict[str, Any] = {}

    def get(self, key: str) -> Any | None:
        return self._items.get(key)

    def set(self, key: str, value: Any) -> None:
        self._items[key] = value

    def invalidate(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
