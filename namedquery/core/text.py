"""
Text helpers shared by substitution, cache keys and diagnostics.
"""

import json
from typing import Any


def abbreviate(s: str, length: int = 100) -> str:
    """Shorten *s* to *length* chars, noting the original size in a suffix."""
    if len(s) > length:
        suffix = f"… ({len(s)} chars)"
        return s[: length - len(suffix)] + suffix
    return s


def to_text(value: Any) -> str:
    """
    String form of a parameter value, as spliced into SQL or a cache key.

    None -> ``null``, booleans -> ``true``/``false``, integral floats drop the
    trailing ``.0`` and lists/tuples are comma-joined element by element.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join("" if v is None else to_text(v) for v in value)
    return str(value)


def encode_array(values: list[Any]) -> str:
    """Render *values* as a Postgres array literal, e.g. ``{"a","b"}``."""
    out = json.dumps(list(values), separators=(",", ":"), default=str)
    return "{" + out[1:-1] + "}"
