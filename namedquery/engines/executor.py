"""
Execution dispatcher: serve a named query from cache or run it.

execute(name, params, throw_on_error, connection)
  1. cacheable name -> cache lookup; a hit returns without touching the driver
  2. miss -> load template, render, run on the transaction's connection or a
     pooled one
  3. failure -> raise (throw_on_error) or report and return []
  4. success + cacheable name -> store rows under the cache key
"""

import json
import time
from typing import Any

from namedquery.core.cache import CacheabilityPolicy, ResultCache, cache_key
from namedquery.core.config import LogOptions
from namedquery.core.errors import QueryError
from namedquery.core.pool.driver import Driver
from namedquery.core.reporting import Reporter
from namedquery.core.text import abbreviate
from namedquery.core.transaction import Transaction
from namedquery.engines.sql import TemplateStore, render


def _elapsed_ms(start: float) -> int:
    return round((time.perf_counter() - start) * 1000)


def _join_values(values: list[Any]) -> str:
    return " | ".join(str(v) for v in values)


class QueryDispatcher:
    def __init__(
        self,
        *,
        templates: TemplateStore,
        driver: Driver,
        cache: ResultCache,
        policy: CacheabilityPolicy,
        reporter: Reporter | None = None,
        log: LogOptions | None = None,
        strict_placeholders: bool = True,
    ) -> None:
        self.templates = templates
        self.driver = driver
        self.cache = cache
        self.policy = policy
        self._report = reporter or Reporter()
        self._log = log or LogOptions()
        self._strict = strict_placeholders

    async def execute(
        self,
        name: str,
        params: dict[str, Any] | None = None,
        throw_on_error: bool = False,
        connection: Transaction | None = None,
    ) -> list[Any]:
        start = time.perf_counter()

        if self.policy.is_cacheable(name):
            rows = self.cache.get(cache_key(name, params))
            if rows is not None:
                self._report(
                    None,
                    f"execute: from cache, name = {name!r}, elapsed time = {_elapsed_ms(start)}ms",
                )
                if self._log.results:
                    self._report(None, f"execute: results = {json.dumps(rows, default=str)}")
                return rows

        rows = await self._run_template(name, params, throw_on_error, connection)
        self._report(
            None, f"execute: from database, name = {name!r}, elapsed time = {_elapsed_ms(start)}ms"
        )
        return rows

    async def _run_template(
        self,
        name: str,
        params: dict[str, Any] | None,
        throw_on_error: bool,
        connection: Transaction | None,
    ) -> list[Any]:
        text: str | None = None
        values: list[Any] = []
        log_query = self._log.queries and self._log.matches(name)

        try:
            raw = self.templates.load(name)
            text, values = render(raw, params, strict=self._strict)
            conn = connection.connection if connection is not None else None

            if log_query:
                self._report(
                    None,
                    f"query: name = {name!r}, query = \n{text}, substitutions = {_join_values(values)}",
                )
            t0 = time.perf_counter()

            rows = await self.driver.query(text, values, True, conn)

            if log_query:
                self._report(
                    None,
                    f"query: name = {name!r}, {len(rows)} rows returned ({_elapsed_ms(t0)}ms)",
                )
                if self._log.results:
                    self._report(None, f"query: results = {json.dumps(rows, default=str)}")
        except QueryError as e:
            self._report(
                e,
                f"query: name = {name!r}, query = \n{abbreviate(text or '')}, "
                f"substitutions = {_join_values(values)}",
            )
            if throw_on_error:
                raise
            return []

        if self.policy.is_cacheable(name):
            self.cache.set(cache_key(name, params), rows)
        return rows
