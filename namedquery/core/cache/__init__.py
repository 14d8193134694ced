"""
Result caching: key codec, cacheability policy, stores and the result cache.
"""

from namedquery.core.cache.keys import RESERVED_KEYS, cache_key
from namedquery.core.cache.policy import TRANSACTION_CONTROL_NAMES, CacheabilityPolicy
from namedquery.core.cache.redis_store import RedisCacheStore
from namedquery.core.cache.result_cache import ResultCache
from namedquery.core.cache.store import CacheStore, MemoryCacheStore
from namedquery.core.config import QueryOptions, settings
from namedquery.core.redis_client import get_redis


def build_cache_store(options: QueryOptions) -> CacheStore:
    """Build the store selected by ``options.cache_backend``."""
    enabled = bool(options.enable_cache)
    if options.cache_backend == "redis":
        client = get_redis(settings.REDIS_URL) if enabled else None
        return RedisCacheStore(client, prefix=settings.CACHE_KEY_PREFIX, enabled=enabled)
    return MemoryCacheStore(enabled=enabled, row_limit=options.row_limit)


__all__ = [
    "CacheStore",
    "CacheabilityPolicy",
    "MemoryCacheStore",
    "RESERVED_KEYS",
    "RedisCacheStore",
    "ResultCache",
    "TRANSACTION_CONTROL_NAMES",
    "build_cache_store",
    "cache_key",
]
