"""
Parameter substitution for SQL templates.

Two placeholder forms, matched case-insensitively:

- ``$$name`` (literal splice): replaced by the value's text, unescaped. Only for
  trusted values such as identifiers or SQL fragments.
- ``$name`` (bound): replaced by the next positional marker ``$1``, ``$2``, ...
  and the value is appended to the bound list. All occurrences of one key share
  a marker.

Keys are processed in reverse lexicographic order so ``$id2`` is replaced
before ``$id`` could eat its prefix. Keys without a placeholder are ignored.
"""

import re
from typing import Any

from namedquery.core.errors import SubstitutionIncomplete
from namedquery.core.text import to_text

# $name not preceded by a word char or $, and not a $tag$ dollar-quote opener
_PLACEHOLDER_RE = re.compile(r"(?<![\w$])\$([A-Za-z_][A-Za-z0-9_]*)(?![\w$])")
# comments, E'' escape strings and plain '' literals, blanked before the scan
_SKIPPED_RE = re.compile(
    r"--[^\n]*"
    r"|/\*.*?\*/"
    r"|(?<!\w)[eE]'(?:[^'\\]|\\.|'')*'"
    r"|'(?:[^']|'')*'",
    re.DOTALL,
)


def render(
    template: str,
    params: dict[str, Any] | None = None,
    *,
    strict: bool = False,
) -> tuple[str, list[Any]]:
    """
    Substitute *params* into *template*.

    Returns ``(text, values)`` where ``values[i]`` binds to marker ``$<i+1>``.
    With ``strict=True`` a ``$name`` placeholder left in the text (outside
    comments and quoted literals) raises ``SubstitutionIncomplete``.
    """
    text = template
    values: list[Any] = []
    index = 1

    for key in sorted(params or {}, reverse=True):
        value = params[key]  # type: ignore[index]
        if f"$${key}" in text:
            literal = to_text(value)
            text = re.sub(
                r"\$\$" + re.escape(key), lambda _m: literal, text, flags=re.IGNORECASE
            )
        elif f"${key}" in text:
            marker = f"${index}"
            text = re.sub(
                r"\$" + re.escape(key), lambda _m: marker, text, flags=re.IGNORECASE
            )
            values.append(value)
            index += 1

    if strict:
        missing = unresolved_placeholders(text)
        if missing:
            raise SubstitutionIncomplete(missing)
    return text, values


def unresolved_placeholders(text: str) -> list[str]:
    """Names of ``$name`` placeholders still present in *text*, in order of first use."""
    scanned = _SKIPPED_RE.sub(" ", text)
    seen: dict[str, None] = {}
    for m in _PLACEHOLDER_RE.finditer(scanned):
        seen.setdefault(m.group(1), None)
    return list(seen)
