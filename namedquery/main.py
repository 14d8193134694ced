"""
QueryRunner: the public entry point.

    runner = QueryRunner()
    await runner.init({"connection_info": "postgresql://...", "sql_directory": "sql"})
    rows = await runner.execute("get-one-state", {"code": "AZ"}, True)

    tx = await runner.begin_transaction()
    await runner.execute("insert-row", {"label": "x"}, True, tx)
    await runner.commit_transaction(tx)

    await runner.exit()

``init()`` may be called again to reconfigure; it shuts down the previous pool
and starts a fresh result cache.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from namedquery.core.cache import (
    CacheabilityPolicy,
    CacheStore,
    ResultCache,
    build_cache_store,
)
from namedquery.core.config import QueryOptions, settings
from namedquery.core.errors import NotInitialized, UnknownCacheOperation
from namedquery.core.pool import Driver, PostgresDriver
from namedquery.core.reporting import Reporter
from namedquery.core.transaction import Transaction, TransactionManager
from namedquery.engines import QueryDispatcher, TemplateStore

_logger = logging.getLogger(__name__)


class QueryRunner:
    def __init__(self) -> None:
        self._options: QueryOptions | None = None
        self._driver: Driver | None = None
        self._templates: TemplateStore | None = None
        self._dispatcher: QueryDispatcher | None = None
        self._transactions: TransactionManager | None = None
        self._report = Reporter()

    @property
    def options(self) -> QueryOptions | None:
        return self._options

    async def init(
        self,
        options: QueryOptions | dict[str, Any] | None = None,
        *,
        driver: Driver | None = None,
        cache_store: CacheStore | None = None,
    ) -> None:
        """
        Configure the runner. *driver* and *cache_store* replace the Postgres
        driver and the store chosen by ``options.cache_backend``.
        """
        opts = options if isinstance(options, QueryOptions) else QueryOptions.model_validate(options or {})
        await self.exit()

        reporter = Reporter(opts.reporter_fn)
        if driver is None:
            driver = PostgresDriver(
                opts.connection_info,
                min_size=opts.pool_min_size or 0,
                max_size=opts.pool_max_size or settings.DB_POOL_MAX_SIZE,
                timeout=settings.DB_CONNECT_TIMEOUT,
                reporter=reporter,
            )
        store = cache_store if cache_store is not None else build_cache_store(opts)

        # templates are kept across re-init unless the directory changes
        sql_directory = opts.sql_directory or settings.SQL_DIRECTORY
        if self._templates is None or self._templates.sql_directory != sql_directory:
            self._templates = TemplateStore(sql_directory)

        self._options = opts
        self._report = reporter
        self._driver = driver
        self._dispatcher = QueryDispatcher(
            templates=self._templates,
            driver=driver,
            cache=ResultCache(store, reporter),
            policy=CacheabilityPolicy(opts.is_cacheable_fn),
            reporter=reporter,
            log=opts.log,
            strict_placeholders=bool(opts.strict_placeholders),
        )
        self._transactions = TransactionManager(driver, reporter)
        reporter(None, f"init: cache enabled = {store.enabled()}")

    async def exit(self) -> None:
        """Release every pooled connection. The runner needs ``init()`` again afterwards."""
        driver, self._driver = self._driver, None
        self._dispatcher = None
        self._transactions = None
        if driver is not None:
            await driver.shutdown()

    def _require_dispatcher(self) -> QueryDispatcher:
        if self._dispatcher is None:
            raise NotInitialized("QueryRunner.init() must be called first")
        return self._dispatcher

    def _require_transactions(self) -> TransactionManager:
        if self._transactions is None:
            raise NotInitialized("QueryRunner.init() must be called first")
        return self._transactions

    async def execute(
        self,
        name: str,
        params: dict[str, Any] | None = None,
        throw_on_error: bool = False,
        connection: Transaction | None = None,
    ) -> list[Any]:
        return await self._require_dispatcher().execute(name, params, throw_on_error, connection)

    async def begin_transaction(self, throw_on_error: bool = True) -> Transaction | None:
        return await self._require_transactions().begin(throw_on_error)

    async def commit_transaction(self, tx: Transaction | None, throw_on_error: bool = True) -> None:
        await self._require_transactions().commit(tx, throw_on_error)

    async def rollback_transaction(self, tx: Transaction | None, throw_on_error: bool = True) -> None:
        await self._require_transactions().rollback(tx, throw_on_error)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[Transaction]:
        """``async with runner.transaction() as tx:`` commits on success, rolls back on error."""
        async with self._require_transactions().transaction() as tx:
            yield tx

    def cache(self, command: str) -> list[str] | None:
        """
        Cache management: ``"clear"`` empties the result cache, ``"keys"``
        lists the cached keys. Anything else raises ``UnknownCacheOperation``.
        """
        cache = self._require_dispatcher().cache
        if command == "clear":
            cache.clear()
            return None
        if command == "keys":
            return cache.keys()
        err = UnknownCacheOperation(command)
        self._report(err, "cache: error")
        raise err
