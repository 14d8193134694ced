"""
Shared Redis clients for the Redis-backed result cache.

One client per URL for the whole process, created on first use. A URL whose
initial ping fails is remembered as unavailable, so callers get ``None`` and
the cache degrades to disabled instead of raising on every query.
"""

import logging
import threading

import redis

_LOG = logging.getLogger(__name__)

_lock = threading.Lock()
_clients: dict[str, "redis.Redis | None"] = {}


def get_redis(url: str) -> "redis.Redis | None":
    """Return the shared client for *url*, or ``None`` if Redis is unreachable."""
    if url in _clients:
        return _clients[url]
    with _lock:
        if url not in _clients:
            _clients[url] = _create_client(url)
        return _clients[url]


def _create_client(url: str) -> "redis.Redis | None":
    try:
        r = redis.Redis.from_url(url, decode_responses=True)
        r.ping()
        return r
    except redis.RedisError as e:
        _LOG.debug("Redis unavailable (%s): %s", url, e)
        return None


def reset_clients() -> None:
    """Close and forget every shared client."""
    with _lock:
        clients = [c for c in _clients.values() if c is not None]
        _clients.clear()
    for c in clients:
        try:
            c.close()
        except redis.RedisError as e:
            _LOG.debug("Redis close failed: %s", e)
