"""
Cache store capability and the in-process default.

A store is a plain key -> value map with clear/enumerate; the enabled flag is
fixed when the store is built (one init cycle).
"""

from typing import Any, Protocol


class CacheStore(Protocol):
    def enabled(self) -> bool: ...

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any) -> None: ...

    def clear(self) -> None: ...

    def keys(self) -> list[str]: ...


def _row_count(value: Any) -> int:
    return len(value) if isinstance(value, list) else 1


class MemoryCacheStore:
    """
    Dict-backed store. Unbounded unless ``row_limit`` is given; with a limit, a
    ``set`` that would push the cached row total past it clears the store first.
    """

    def __init__(self, *, enabled: bool = True, row_limit: int | None = None) -> None:
        self._enabled = enabled
        self._row_limit = row_limit
        self._map: dict[str, Any] = {}
        self._size = 0

    def enabled(self) -> bool:
        return self._enabled

    @property
    def size(self) -> int:
        """Total rows currently cached."""
        return self._size

    def get(self, key: str) -> Any | None:
        if not self._enabled:
            return None
        return self._map.get(key)

    def set(self, key: str, value: Any) -> None:
        if not self._enabled:
            return
        rows = _row_count(value)
        old_rows = _row_count(self._map[key]) if key in self._map else 0
        if self._row_limit is not None:
            if rows > self._row_limit:
                return
            if self._size - old_rows + rows > self._row_limit:
                self.clear()
                old_rows = 0
        self._map[key] = value
        self._size += rows - old_rows

    def clear(self) -> None:
        self._map = {}
        self._size = 0

    def keys(self) -> list[str]:
        if not self._enabled:
            return []
        return list(self._map)
