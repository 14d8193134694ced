"""
Postgres driver over a psycopg ``AsyncConnectionPool``.

The pool is opened lazily on first use and closed by ``shutdown()``.
Transaction connections are checked out with ``getconn`` and always handed
back with ``putconn``, even when commit/rollback fails; the pool resets or
discards a connection returned mid-transaction.
"""

import asyncio
import logging
from typing import Any

import psycopg
from psycopg_pool import AsyncConnectionPool

from namedquery.core.errors import ExecutionFailed
from namedquery.core.reporting import Reporter
from namedquery.core.text import abbreviate

from .connect import CONNECTION_KWARGS, build_conninfo, configure_connection, run_query

_log = logging.getLogger(__name__)


class PostgresDriver:
    def __init__(
        self,
        connection_info: str | dict[str, Any] | None = None,
        *,
        min_size: int = 1,
        max_size: int = 10,
        timeout: float = 30.0,
        reporter: Reporter | None = None,
    ) -> None:
        self._conninfo = build_conninfo(connection_info)
        self._min_size = min_size
        self._max_size = max(max_size, min_size)
        self._timeout = timeout
        self._report = reporter or Reporter()
        self._pool: AsyncConnectionPool | None = None
        self._pool_lock = asyncio.Lock()

    async def get_pool(self) -> AsyncConnectionPool:
        """Return the open pool, creating it on first call."""
        if self._pool is not None:
            return self._pool
        async with self._pool_lock:
            if self._pool is None:
                pool = AsyncConnectionPool(
                    self._conninfo,
                    min_size=self._min_size,
                    max_size=self._max_size,
                    timeout=self._timeout,
                    kwargs=CONNECTION_KWARGS,
                    configure=configure_connection,
                    open=False,
                )
                await pool.open()
                self._pool = pool
                _log.debug("pool opened (min_size=%s, max_size=%s)", self._min_size, self._max_size)
        return self._pool

    def _fail(self, err: Exception, message: str, throw_on_error: bool) -> None:
        self._report(err, message)
        if throw_on_error:
            raise ExecutionFailed(f"{message}: {err}") from err

    async def query(
        self,
        text: str,
        values: list[Any] | None = None,
        throw_on_error: bool = False,
        connection: psycopg.AsyncConnection | None = None,
    ) -> list[dict[str, Any]]:
        try:
            if connection is not None:
                return await run_query(connection, text, values)
            pool = await self.get_pool()
            async with pool.connection() as conn:
                return await run_query(conn, text, values)
        except psycopg.Error as e:
            self._fail(e, f"query: execute failed, text = {abbreviate(text)}", throw_on_error)
            return []

    async def acquire_transactional_connection(
        self, throw_on_error: bool = True
    ) -> psycopg.AsyncConnection | None:
        try:
            pool = await self.get_pool()
            conn = await pool.getconn()
        except psycopg.Error as e:
            self._fail(e, "begin transaction: could not acquire connection", throw_on_error)
            return None
        try:
            await conn.execute("begin transaction")
        except psycopg.Error as e:
            await pool.putconn(conn)
            self._fail(e, "begin transaction: error", throw_on_error)
            return None
        return conn

    async def commit(self, connection: psycopg.AsyncConnection, throw_on_error: bool = True) -> None:
        await self._finish(connection, "commit transaction", throw_on_error)

    async def rollback(self, connection: psycopg.AsyncConnection, throw_on_error: bool = True) -> None:
        await self._finish(connection, "rollback transaction", throw_on_error)

    async def _finish(
        self, connection: psycopg.AsyncConnection, statement: str, throw_on_error: bool
    ) -> None:
        try:
            await connection.execute(statement)
        except psycopg.Error as e:
            self._fail(e, f"{statement}: error", throw_on_error)
        finally:
            await self.release(connection)

    async def release(self, connection: psycopg.AsyncConnection) -> None:
        """Return a checked-out connection to the pool (or close it if the pool is gone)."""
        if self._pool is not None:
            await self._pool.putconn(connection)
        else:
            await connection.close()

    async def shutdown(self) -> None:
        pool, self._pool = self._pool, None
        if pool is not None:
            await pool.close()
            self._report(None, "shutdown: pool has ended")

    def stats(self) -> dict[str, int]:
        """Pool statistics for monitoring (empty before the pool opens)."""
        if self._pool is None:
            return {}
        return dict(self._pool.get_stats())
