"""
Redis-backed cache store: rows serialized as JSON under a key prefix.

Values psycopg hands back that JSON has no type for (timestamps, dates, times,
intervals, decimals, UUIDs, bytea) are written as ``{"__nq_type__": ..., "value": ...}``
objects and restored on read. A value the codec cannot encode is not cached.

Redis errors are logged and treated as a miss (get) or a dropped write (set),
matching how the in-process store behaves when disabled. An entry that does
not decode is also a miss.
"""

import base64
import datetime
import json
import logging
import uuid
from decimal import Decimal
from typing import Any

import redis

_LOG = logging.getLogger(__name__)

TYPE_TAG = "__nq_type__"


def _encode_value(o: Any) -> dict[str, Any]:
    # datetime is a date subclass, so it is checked first
    if isinstance(o, datetime.datetime):
        return {TYPE_TAG: "datetime", "value": o.isoformat()}
    if isinstance(o, datetime.date):
        return {TYPE_TAG: "date", "value": o.isoformat()}
    if isinstance(o, datetime.time):
        return {TYPE_TAG: "time", "value": o.isoformat()}
    if isinstance(o, datetime.timedelta):
        return {TYPE_TAG: "timedelta", "value": [o.days, o.seconds, o.microseconds]}
    if isinstance(o, Decimal):
        return {TYPE_TAG: "decimal", "value": str(o)}
    if isinstance(o, uuid.UUID):
        return {TYPE_TAG: "uuid", "value": str(o)}
    if isinstance(o, (bytes, bytearray, memoryview)):
        return {TYPE_TAG: "bytes", "value": base64.b64encode(bytes(o)).decode("ascii")}
    raise TypeError(f"Object of type {type(o).__name__} is not cacheable")


_DECODERS: dict[str, Any] = {
    "datetime": datetime.datetime.fromisoformat,
    "date": datetime.date.fromisoformat,
    "time": datetime.time.fromisoformat,
    "timedelta": lambda v: datetime.timedelta(days=v[0], seconds=v[1], microseconds=v[2]),
    "decimal": Decimal,
    "uuid": uuid.UUID,
    "bytes": base64.b64decode,
}


def _decode_object(obj: dict[str, Any]) -> Any:
    tag = obj.get(TYPE_TAG)
    if tag in _DECODERS and len(obj) == 2 and "value" in obj:
        return _DECODERS[tag](obj["value"])
    return obj


def dumps(value: Any) -> str:
    return json.dumps(value, default=_encode_value)


def loads(raw: str | bytes) -> Any:
    return json.loads(raw, object_hook=_decode_object)


class RedisCacheStore:
    def __init__(
        self,
        client: "redis.Redis | None",
        *,
        prefix: str = "namedquery:",
        enabled: bool = True,
    ) -> None:
        self._client = client
        self._prefix = prefix
        self._enabled = enabled

    def enabled(self) -> bool:
        return self._enabled and self._client is not None

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get(self, key: str) -> Any | None:
        if not self.enabled():
            return None
        try:
            raw = self._client.get(self._key(key))  # type: ignore[union-attr]
        except redis.RedisError as e:
            _LOG.debug("Cache get failed for %s: %s", key, e)
            return None
        if raw is None:
            return None
        try:
            return loads(raw)
        except (ValueError, TypeError) as e:
            _LOG.debug("Cache entry for %s is not decodable, treating as miss: %s", key, e)
            return None

    def set(self, key: str, value: Any) -> None:
        if not self.enabled():
            return
        try:
            payload = dumps(value)
        except (TypeError, ValueError) as e:
            _LOG.debug("Cache set skipped for %s: %s", key, e)
            return
        try:
            self._client.set(self._key(key), payload)  # type: ignore[union-attr]
        except redis.RedisError as e:
            _LOG.debug("Cache set failed for %s: %s", key, e)

    def clear(self) -> None:
        if not self.enabled():
            return
        try:
            keys = list(self._client.scan_iter(match=f"{self._prefix}*"))  # type: ignore[union-attr]
            if keys:
                self._client.delete(*keys)  # type: ignore[union-attr]
        except redis.RedisError as e:
            _LOG.debug("Cache clear failed: %s", e)

    def keys(self) -> list[str]:
        if not self.enabled():
            return []
        try:
            raw_keys = self._client.scan_iter(match=f"{self._prefix}*")  # type: ignore[union-attr]
            return [k[len(self._prefix) :] for k in raw_keys]
        except redis.RedisError as e:
            _LOG.debug("Cache keys failed: %s", e)
            return []
