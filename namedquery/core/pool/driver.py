"""
Database driver capability consumed by the dispatcher and transaction manager.

``connection`` arguments are driver-native connection objects; the transaction
manager wraps them in ``Transaction`` handles before they reach callers.
"""

from typing import Any, Protocol


class Driver(Protocol):
    async def query(
        self,
        text: str,
        values: list[Any] | None = None,
        throw_on_error: bool = False,
        connection: Any = None,
    ) -> list[Any]: ...

    async def acquire_transactional_connection(self, throw_on_error: bool = True) -> Any: ...

    async def commit(self, connection: Any, throw_on_error: bool = True) -> None: ...

    async def rollback(self, connection: Any, throw_on_error: bool = True) -> None: ...

    async def shutdown(self) -> None: ...
