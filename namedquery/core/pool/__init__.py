"""
Postgres connection pool and the driver capability built on it.
"""

from .connect import build_conninfo, configure_connection, run_query
from .driver import Driver
from .manager import PostgresDriver

__all__ = [
    "Driver",
    "PostgresDriver",
    "build_conninfo",
    "configure_connection",
    "run_query",
]
