"""
Result cache: rows keyed by the cache-key codec, stored in a ``CacheStore``.

Every call is a no-op when the store is disabled (``get`` returns ``None``).
"""

import json
from typing import Any

from namedquery.core.cache.store import CacheStore
from namedquery.core.reporting import Reporter
from namedquery.core.text import abbreviate


class ResultCache:
    def __init__(self, store: CacheStore, reporter: Reporter | None = None) -> None:
        self._store = store
        self._report = reporter or Reporter()

    def enabled(self) -> bool:
        return self._store.enabled()

    def get(self, key: str) -> Any | None:
        if not self.enabled():
            return None
        rows = self._store.get(key)
        if rows is None:
            self._report(None, f"cache get: miss, key = {abbreviate(key)}")
            return None
        if isinstance(rows, list):
            self._report(None, f"cache get: hit, key = {abbreviate(key)}, row count = {len(rows)}")
            if rows:
                first = json.dumps(rows[0], default=str)
                self._report(None, f"cache get: rows[0] = {abbreviate(first)}")
        else:
            self._report(None, f"cache get: hit, key = {abbreviate(key)}, type = {type(rows).__name__}")
        return rows

    def set(self, key: str, rows: Any) -> None:
        if not self.enabled():
            return
        self._store.set(key, rows)
        self._report(None, f"cache set: key = {abbreviate(key)}")

    def clear(self) -> None:
        self._store.clear()
        self._report(None, "cache clear: cache cleared")

    def keys(self) -> list[str]:
        return self._store.keys()
