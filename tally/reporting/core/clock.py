"""Clock port used by the fetch loop for quota throttling.

Architecture:
    The fetcher never reads wall-clock time or sleeps directly. It asks a
    ``Clock`` for a monotonic timestamp and awaits ``Clock.sleep``. Tests
    inject a fake clock that advances time without real delays.
"""

from __future__ import annotations

import asyncio
import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Monotonic time source with an awaitable sleep."""

    def now(self) -> float:
        """Return monotonic seconds (microsecond resolution or better)."""
        ...

    async def sleep(self, seconds: float) -> None:
        """Suspend the caller for ``seconds``."""
        ...


class MonotonicClock:
    """Default clock backed by ``time.monotonic`` and ``asyncio.sleep``."""

    def now(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        if seconds > 0:
            await asyncio.sleep(seconds)
