"""
namedquery: run named, file-stored SQL templates against Postgres with
transparent result caching and explicit transactions.
"""

from namedquery.core.config import LogOptions, QueryOptions, Settings, settings
from namedquery.core.errors import (
    ExecutionFailed,
    NotInitialized,
    QueryError,
    SubstitutionIncomplete,
    TemplateNotFound,
    TransactionStateError,
    UnknownCacheOperation,
)
from namedquery.core.text import encode_array
from namedquery.core.transaction import Transaction
from namedquery.main import QueryRunner

__all__ = [
    "ExecutionFailed",
    "LogOptions",
    "NotInitialized",
    "QueryError",
    "QueryOptions",
    "QueryRunner",
    "Settings",
    "SubstitutionIncomplete",
    "TemplateNotFound",
    "Transaction",
    "TransactionStateError",
    "UnknownCacheOperation",
    "encode_array",
    "settings",
]
