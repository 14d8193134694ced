"""
Connection helpers for the Postgres pool.

Connections use psycopg's raw cursor so templates keep native ``$1, $2``
markers, return rows as dicts, and run in autocommit mode: transactions are
opened and closed explicitly with ``begin/commit/rollback transaction``.
"""

from typing import Any

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg.rows import dict_row
from psycopg.types.numeric import FloatLoader

# kwargs passed to every AsyncConnection.connect() made by the pool
CONNECTION_KWARGS: dict[str, Any] = {
    "cursor_factory": psycopg.AsyncRawCursor,
    "row_factory": dict_row,
}


def build_conninfo(connection_info: str | dict[str, Any] | None) -> str:
    """
    Normalize connection info to a conninfo string.

    Accepts a conninfo / ``postgresql://`` URL string, or a dict of libpq
    keywords (``host``, ``port``, ``dbname``, ``user``, ``password``, ...).
    """
    if connection_info is None:
        return ""
    if isinstance(connection_info, str):
        return connection_info
    params = {k: v for k, v in connection_info.items() if v is not None}
    return make_conninfo("", **params)


async def configure_connection(conn: psycopg.AsyncConnection) -> None:
    """Pool ``configure`` hook: autocommit and numeric -> float decoding."""
    await conn.set_autocommit(True)
    conn.adapters.register_loader("numeric", FloatLoader)


async def run_query(
    conn: psycopg.AsyncConnection, text: str, values: list[Any] | None = None
) -> list[dict[str, Any]]:
    """Execute *text* with positional *values*; rows for statements that return any."""
    cur = await conn.execute(text, values or None)
    try:
        if cur.description is None:
            return []
        return await cur.fetchall()
    finally:
        await cur.close()
