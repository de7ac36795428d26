"""Paging policy and state definitions.

This module defines the data structures that describe the limits of the
reporting API (URL length budget, per identity quota) and the mutable rate
state owned by a single fetch run.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ...config import (
    BASE_URL_OVERHEAD,
    QUOTA_MAX_REQUESTS,
    QUOTA_WINDOW_SECONDS,
    URL_LENGTH_LIMIT,
)


@dataclass(frozen=True)
class UrlBudget:
    """Request URL length budget.

    Attributes:
        limit: Maximum request URL length accepted by the API
        overhead: Estimated length not reflected in the raw query string
            (protocol, headers)
    """

    limit: int = URL_LENGTH_LIMIT
    overhead: int = BASE_URL_OVERHEAD

    def __post_init__(self) -> None:
        if self.limit <= 0:
            raise ValueError("UrlBudget limit must be positive")
        if self.overhead < 0:
            raise ValueError("UrlBudget overhead cannot be negative")


@dataclass(frozen=True)
class QuotaPolicy:
    """Per identity key request quota.

    Attributes:
        max_requests: Requests allowed per window for one identity key
        window_seconds: Length of the quota window in seconds
    """

    max_requests: int = QUOTA_MAX_REQUESTS
    window_seconds: float = QUOTA_WINDOW_SECONDS

    def __post_init__(self) -> None:
        if self.max_requests <= 0:
            raise ValueError("QuotaPolicy max_requests must be positive")
        if self.window_seconds <= 0:
            raise ValueError("QuotaPolicy window_seconds must be positive")


@dataclass
class RateState:
    """Quota bookkeeping for one fetch run.

    Counters are tracked per identity key while ``window_start`` is a single
    timestamp shared by every key of the run.

    Attributes:
        window_start: Monotonic timestamp of the current throttling window
        counters: Remaining requests per identity key
        throttles: Number of quota sleeps applied during the run
    """

    window_start: float
    counters: dict[str | None, int] = field(default_factory=dict)
    throttles: int = 0

    def register(self, key: str | None, allowance: int) -> None:
        """Start a counter for ``key`` unless it was already seen this run."""
        if key not in self.counters:
            self.counters[key] = allowance

    def consume(self, key: str | None) -> int:
        """Account one request against ``key``; return the remaining count."""
        self.counters[key] -= 1
        return self.counters[key]

    def is_exhausted(self, key: str | None) -> bool:
        return self.counters.get(key) == 0

    def reset(self, key: str | None, allowance: int, now: float) -> None:
        """Refill ``key`` and restart the shared window at ``now``."""
        self.counters[key] = allowance
        self.window_start = now

    def clear(self) -> None:
        self.counters.clear()
