"""Runtime configuration helpers sourced from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_DATABASE_URL = "sqlite:///./records.db"
DEFAULT_TABLE_NAME = "records"
DEFAULT_PER_PAGE = 23


@dataclass(frozen=True)
class Settings:
    database_url: str
    secret_key: str
    records_table_name: str
    records_per_page: int
    log_level: str
    app_title: str


def _positive_int(value: str | None, default: int) -> int:
    """Parse a positive integer, falling back to ``default`` on bad input."""
    if value is None:
        return default
    try:
        parsed = int(value.strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Return the cached settings snapshot."""
    return Settings(
        database_url=os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL,
        secret_key=os.getenv("SECRET_KEY") or "change-me",
        records_table_name=(os.getenv("RECORDS_TABLE_NAME") or DEFAULT_TABLE_NAME).strip(),
        records_per_page=_positive_int(os.getenv("RECORDS_PER_PAGE"), DEFAULT_PER_PAGE),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        app_title=os.getenv("APP_TITLE") or "Record Collection",
    )


def records_per_page() -> int:
    return get_settings().records_per_page


def refresh_settings_cache() -> None:
    """Invalidate cached settings (useful for tests)."""
    get_settings.cache_clear()
