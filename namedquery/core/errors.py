"""
Exception hierarchy for named-query execution.

Every failure raised by the package derives from ``QueryError`` so callers can
catch one type; the subclasses say which stage of the pipeline failed.
"""


class QueryError(Exception):
    """Base class for all named-query failures."""

    pass


class NotInitialized(QueryError):
    """Raised when the runner is used before ``init()`` (or after ``exit()``)."""

    pass


class TemplateNotFound(QueryError):
    """Raised when ``<name>.sql`` is missing from the SQL directory or cannot be decoded."""

    def __init__(self, name: str, message: str | None = None) -> None:
        self.name = name
        super().__init__(message or f"SQL template not found: {name}")


class SubstitutionIncomplete(QueryError):
    """Raised when a bound placeholder is left in the rendered text."""

    def __init__(self, placeholders: list[str]) -> None:
        self.placeholders = placeholders
        names = ", ".join(f"${p}" for p in placeholders)
        super().__init__(f"No parameter supplied for placeholder(s): {names}")


class ExecutionFailed(QueryError):
    """Raised when the database driver reports a failure."""

    pass


class TransactionStateError(QueryError):
    """Raised on commit/rollback/execute with a missing or closed transaction."""

    pass


class UnknownCacheOperation(QueryError):
    """Raised by ``QueryRunner.cache()`` for an unsupported command."""

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"Unknown cache operation: {command!r}")
