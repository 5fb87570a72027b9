"""
Fixed-window request limiter for auth email endpoints.

A key gets `max_requests` allowed calls per window. The window starts on the
first call and resets abruptly once it has elapsed; there is no gradual
decay. Counters live in the injected store, which is process memory by
default: every running instance enforces its own cap and entries are never
evicted.
"""

from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Protocol


@dataclass
class RateLimitEntry:
    count: int
    window_started_at: float
    window_ends_at: float


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    retry_after_seconds: int | None = None


class RateLimitStore(Protocol):
    """
    Key/value storage for window counters.

    Swap for a shared store to get a cross-instance cap without changing
    callers.
    """

    def get(self, key: str) -> RateLimitEntry | None:
        ...

    def put(self, key: str, entry: RateLimitEntry) -> None:
        ...

    def clear(self) -> None:
        ...


class InMemoryRateLimitStore:
    def __init__(self) -> None:
        self._entries: dict[str, RateLimitEntry] = {}

    def get(self, key: str) -> RateLimitEntry | None:
        return self._entries.get(key)

    def put(self, key: str, entry: RateLimitEntry) -> None:
        self._entries[key] = entry

    def clear(self) -> None:
        """Drop every counter. Test isolation only."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


def normalize_rate_limit_key(value: str) -> str:
    return value.strip().lower()


class FixedWindowRateLimiter:
    """
    Counts calls per key and denies once the window's cap is reached.
    """

    def __init__(
        self,
        *,
        max_requests: int,
        window_seconds: float,
        store: RateLimitStore | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._max_requests = max(1, max_requests)
        self._window_seconds = max(1.0, float(window_seconds))
        self._store = store if store is not None else InMemoryRateLimitStore()
        self._clock = clock
        self._lock = threading.Lock()

    @property
    def max_requests(self) -> int:
        return self._max_requests

    @property
    def window_seconds(self) -> float:
        return self._window_seconds

    def check(self, key: str) -> RateLimitDecision:
        """
        Record one call for `key` and decide whether it may proceed.
        """

        normalized = normalize_rate_limit_key(key)
        with self._lock:
            now = self._clock()
            entry = self._store.get(normalized)

            if entry is None or now > entry.window_ends_at:
                entry = RateLimitEntry(
                    count=1,
                    window_started_at=now,
                    window_ends_at=now + self._window_seconds,
                )
                self._store.put(normalized, entry)
                return RateLimitDecision(
                    allowed=True,
                    limit=self._max_requests,
                    remaining=self._max_requests - 1,
                )

            if entry.count < self._max_requests:
                entry.count += 1
                self._store.put(normalized, entry)
                return RateLimitDecision(
                    allowed=True,
                    limit=self._max_requests,
                    remaining=self._max_requests - entry.count,
                )

            retry_after = max(1, math.ceil(entry.window_ends_at - now))
            return RateLimitDecision(
                allowed=False,
                limit=self._max_requests,
                remaining=0,
                retry_after_seconds=retry_after,
            )


@dataclass(frozen=True)
class ThrottleDecision:
    allowed: bool
    retry_after_seconds: int | None = None
    reason: str | None = None


class AuthRequestThrottle:
    """
    Email limiter, optionally followed by a per-IP limiter.

    The IP limiter stops one client cycling through many addresses.
    """

    def __init__(
        self,
        *,
        email_limiter: FixedWindowRateLimiter,
        ip_limiter: FixedWindowRateLimiter | None = None,
    ) -> None:
        self._email_limiter = email_limiter
        self._ip_limiter = ip_limiter

    def check(self, *, email: str, ip: str | None = None) -> ThrottleDecision:
        email_decision = self._email_limiter.check(email)
        if not email_decision.allowed:
            return ThrottleDecision(
                allowed=False,
                retry_after_seconds=email_decision.retry_after_seconds,
                reason="email",
            )

        if self._ip_limiter is not None and ip:
            ip_decision = self._ip_limiter.check(ip)
            if not ip_decision.allowed:
                return ThrottleDecision(
                    allowed=False,
                    retry_after_seconds=ip_decision.retry_after_seconds,
                    reason="ip",
                )

        return ThrottleDecision(allowed=True)
