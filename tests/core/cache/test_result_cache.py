"""Unit tests for core.cache.result_cache."""

from unittest.mock import MagicMock

from namedquery.core.cache import MemoryCacheStore, RedisCacheStore, ResultCache
from namedquery.core.reporting import Reporter


def test_get_set_roundtrip_and_reports():
    fn = MagicMock()
    cache = ResultCache(MemoryCacheStore(), Reporter(fn))
    assert cache.get("k") is None
    cache.set("k", [{"n": 1}])
    assert cache.get("k") == [{"n": 1}]
    messages = [c.args[1] for c in fn.call_args_list]
    assert any(m.startswith("cache get: miss") for m in messages)
    assert any(m.startswith("cache get: hit") for m in messages)
    assert any(m.startswith("cache set") for m in messages)


def test_empty_row_list_is_a_hit():
    cache = ResultCache(MemoryCacheStore())
    cache.set("k", [])
    assert cache.get("k") == []


def test_disabled_cache():
    cache = ResultCache(MemoryCacheStore(enabled=False))
    assert cache.enabled() is False
    cache.set("k", [1])
    assert cache.get("k") is None


def test_clear_and_keys():
    cache = ResultCache(MemoryCacheStore())
    cache.set("a", [1])
    cache.set("b", [2])
    assert sorted(cache.keys()) == ["a", "b"]
    cache.clear()
    assert cache.keys() == []


def test_undecodable_redis_entry_reported_as_miss():
    fn = MagicMock()
    client = MagicMock()
    client.get.return_value = b"{truncated"
    cache = ResultCache(RedisCacheStore(client), Reporter(fn))
    assert cache.get("k") is None
    assert fn.call_args_list[-1].args[1].startswith("cache get: miss")
