"""
Cache key codec: ``name`` or ``name?k1=v1&k2=v2``.

Keys are sorted and percent-encoded like JavaScript ``encodeURIComponent``, so
the same pairs always give the same key whatever the dict's insertion order.
``_`` and ``q`` carry cache-busting / search noise and never reach the key.
"""

from typing import Any
from urllib.parse import quote

from namedquery.core.text import to_text

RESERVED_KEYS = frozenset({"_", "q"})

# Characters encodeURIComponent leaves alone besides alphanumerics
_SAFE = "-_.!~*'()"


def _encode(s: str) -> str:
    return quote(s, safe=_SAFE)


def cache_key(name: str, params: dict[str, Any] | None = None) -> str:
    if not params:
        return name
    qs = "&".join(
        f"{_encode(key)}={_encode(to_text(params[key]))}"
        for key in sorted(params)
        if key not in RESERVED_KEYS
    )
    return f"{name}?{qs}" if qs else name
