"""
Transaction manager: begin/commit/rollback over the driver.

``begin`` hands out a ``Transaction`` handle that owns one pooled connection.
Ownership passes to exactly one of ``commit``/``rollback``; the handle is
closed before the driver call, so it can never be reused or released twice.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from namedquery.core.errors import TransactionStateError
from namedquery.core.pool.driver import Driver
from namedquery.core.reporting import Reporter


class Transaction:
    """Handle for one open transaction; pass it to ``execute`` to pin calls to it."""

    __slots__ = ("_connection", "_closed")

    def __init__(self, connection: Any) -> None:
        self._connection = connection
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def connection(self) -> Any:
        if self._closed:
            raise TransactionStateError("transaction is already committed or rolled back")
        return self._connection

    def detach(self) -> Any:
        """Close the handle and hand its connection to the caller."""
        conn = self.connection
        self._closed = True
        self._connection = None
        return conn

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<Transaction {state}>"


class TransactionManager:
    def __init__(self, driver: Driver, reporter: Reporter | None = None) -> None:
        self._driver = driver
        self._report = reporter or Reporter()

    async def begin(self, throw_on_error: bool = True) -> Transaction | None:
        conn = await self._driver.acquire_transactional_connection(throw_on_error)
        if conn is None:
            return None
        return Transaction(conn)

    def _take(self, tx: Transaction | None, action: str) -> Any:
        if tx is None:
            err = TransactionStateError(f"{action}: no transaction handle")
            self._report(err, f"{action}: error")
            raise err
        try:
            return tx.detach()
        except TransactionStateError as e:
            self._report(e, f"{action}: error")
            raise

    async def commit(self, tx: Transaction | None, throw_on_error: bool = True) -> None:
        conn = self._take(tx, "commit transaction")
        await self._driver.commit(conn, throw_on_error)

    async def rollback(self, tx: Transaction | None, throw_on_error: bool = True) -> None:
        conn = self._take(tx, "rollback transaction")
        await self._driver.rollback(conn, throw_on_error)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[Transaction]:
        """
        Scoped transaction: commits when the block exits normally, rolls back
        when it raises. The block may also commit/rollback explicitly.
        """
        tx = await self.begin(throw_on_error=True)
        if tx is None:
            raise TransactionStateError("begin transaction: driver returned no connection")
        try:
            yield tx
        except BaseException:
            if not tx.closed:
                await self.rollback(tx, throw_on_error=False)
            raise
        if not tx.closed:
            await self.commit(tx, throw_on_error=True)
