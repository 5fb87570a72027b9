"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


@dataclass(frozen=True)
class BulkImportSettings:
    """
    Runtime settings for agency bulk import preview and commit.
    """

    max_rows: int = 1000
    max_slug_attempts: int = 100


@dataclass(frozen=True)
class RateLimitSettings:
    """
    Per-process limits for verification and password reset emails.

    Counters live in process memory, so the effective global cap is the
    number of running instances times these values.
    """

    email_window_seconds: int = 600
    email_max_requests: int = 2
    ip_window_seconds: int = 600
    ip_max_requests: int = 10


@lru_cache(maxsize=1)
def get_bulk_import_settings() -> BulkImportSettings:
    """
    Return cached bulk import settings from environment variables.
    """

    return BulkImportSettings(
        max_rows=max(1, _get_int_env("BULK_IMPORT_MAX_ROWS", 1000)),
        max_slug_attempts=max(2, _get_int_env("BULK_IMPORT_MAX_SLUG_ATTEMPTS", 100)),
    )


@lru_cache(maxsize=1)
def get_rate_limit_settings() -> RateLimitSettings:
    """
    Return cached auth email rate limit settings from environment variables.
    """

    return RateLimitSettings(
        email_window_seconds=max(1, _get_int_env("AUTH_EMAIL_RATE_LIMIT_WINDOW_SECONDS", 600)),
        email_max_requests=max(1, _get_int_env("AUTH_EMAIL_RATE_LIMIT_MAX_REQUESTS", 2)),
        ip_window_seconds=max(1, _get_int_env("AUTH_IP_RATE_LIMIT_WINDOW_SECONDS", 600)),
        ip_max_requests=max(1, _get_int_env("AUTH_IP_RATE_LIMIT_MAX_REQUESTS", 10)),
    )
