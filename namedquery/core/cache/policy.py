"""Cacheability policy: which query names may be served from / stored in cache."""

from collections.abc import Callable

TRANSACTION_CONTROL_NAMES = frozenset(
    {"begin transaction", "rollback transaction", "commit transaction"}
)


class CacheabilityPolicy:
    """
    Transaction-control names are never cacheable. Otherwise the override
    predicate (if any) decides, and everything defaults to cacheable.
    """

    def __init__(self, override: Callable[[str], bool] | None = None) -> None:
        self._override = override

    def is_cacheable(self, name: str) -> bool:
        if name in TRANSACTION_CONTROL_NAMES:
            return False
        if self._override is not None:
            return bool(self._override(name))
        return True
