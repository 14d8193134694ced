"""
Configuration: environment defaults (pydantic-settings) and per-init options.

``Settings`` reads ``NAMEDQUERY_*`` variables (and a ``.env`` file).
``QueryOptions`` is what ``QueryRunner.init()`` accepts; any option left unset
falls back to the matching ``Settings`` value.
"""

import re
from collections.abc import Callable
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

CacheBackend = Literal["memory", "redis"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="NAMEDQUERY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    DATABASE_URL: str = Field(default="", description="libpq conninfo or postgresql:// URL")
    DB_POOL_MIN_SIZE: int = Field(default=1, ge=0)
    DB_POOL_MAX_SIZE: int = Field(default=10, ge=1)
    DB_CONNECT_TIMEOUT: float = Field(
        default=30.0, gt=0, description="Seconds to wait for a pooled connection"
    )

    # Templates
    SQL_DIRECTORY: Path = Field(default=Path("sql"))
    STRICT_PLACEHOLDERS: bool = True

    # Result cache
    CACHE_ENABLED: bool = False
    CACHE_BACKEND: CacheBackend = "memory"
    CACHE_ROW_LIMIT: int | None = Field(default=None, ge=1)
    CACHE_KEY_PREFIX: str = "namedquery:"
    REDIS_URL: str = "redis://localhost:6379/0"


settings = Settings()  # type: ignore


class LogOptions(BaseModel):
    """Diagnostic verbosity; ``regex`` limits query logging to matching names."""

    queries: bool = False
    results: bool = False
    regex: str | None = None

    _pattern: re.Pattern[str] | None = PrivateAttr(default=None)

    @field_validator("regex")
    @classmethod
    def _check_regex(cls, v: str | None) -> str | None:
        if v:
            try:
                re.compile(v)
            except re.error as e:
                raise ValueError(f"invalid log regex {v!r}: {e}") from e
        return v

    def model_post_init(self, __context: Any) -> None:
        self._pattern = re.compile(self.regex) if self.regex else None

    def matches(self, name: str) -> bool:
        return self._pattern is None or self._pattern.search(name) is not None


class QueryOptions(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    connection_info: str | dict[str, Any] | None = None
    reporter_fn: Callable[[BaseException | None, str], None] | None = None
    is_cacheable_fn: Callable[[str], bool] | None = None
    log: LogOptions = Field(default_factory=LogOptions)
    sql_directory: Path | None = None
    enable_cache: bool | None = None
    cache_backend: CacheBackend | None = None
    row_limit: int | None = Field(default=None, ge=1)
    pool_min_size: int | None = Field(default=None, ge=0)
    pool_max_size: int | None = Field(default=None, ge=1)
    strict_placeholders: bool | None = None

    @model_validator(mode="after")
    def _fill_from_settings(self) -> "QueryOptions":
        if self.connection_info is None:
            self.connection_info = settings.DATABASE_URL
        if self.sql_directory is None:
            self.sql_directory = settings.SQL_DIRECTORY
        if self.enable_cache is None:
            self.enable_cache = settings.CACHE_ENABLED
        if self.cache_backend is None:
            self.cache_backend = settings.CACHE_BACKEND
        if self.row_limit is None:
            self.row_limit = settings.CACHE_ROW_LIMIT
        if self.pool_min_size is None:
            self.pool_min_size = settings.DB_POOL_MIN_SIZE
        if self.pool_max_size is None:
            self.pool_max_size = settings.DB_POOL_MAX_SIZE
        if self.strict_placeholders is None:
            self.strict_placeholders = settings.STRICT_PLACEHOLDERS
        return self
