"""Rate-governed page fetching.

This module provides the PageFetcher class that requests every parameter
set in order, follows pagination and throttles itself against the per
identity key quota of the reporting API.
"""

from __future__ import annotations

from collections.abc import Sequence
from time import perf_counter
from typing import Any, Protocol

from pydantic import ValidationError

from ...core.clock import Clock, MonotonicClock
from ...core.exceptions import MalformedResponseError
from ...models import Page, ParameterSet
from .definitions import QuotaPolicy, RateState
from .telemetry import (
    log_fetch_complete,
    log_fetch_error,
    log_page_fetched,
    log_quota_throttled,
)


class Transport(Protocol):
    """Anything that can GET a URL and return the decoded JSON object."""

    async def get(self, url: str, params: dict[str, Any] | None = None) -> dict[str, Any]: ...


class PageFetcher:
    """Fetches all pages for a sequence of parameter sets.

    Requests are issued strictly one after another. Each identity key gets a
    quota counter the first time it is seen in a run; when a counter reaches
    zero the fetcher sleeps out the rest of the quota window, then refills
    the counter and restarts the window. The window start is shared by all
    identity keys of a run.

    There is no retry: the first transport, status or decoding error aborts
    the run and propagates to the caller.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        quota: QuotaPolicy | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize page fetcher.

        Args:
            transport: HTTP transport used for every request
            quota: Per identity key quota (default: API limits from config)
            clock: Monotonic clock used for throttling (default: MonotonicClock)
        """
        self._transport = transport
        self._quota = quota or QuotaPolicy()
        self._clock = clock or MonotonicClock()

    async def fetch(self, parameter_sets: Sequence[ParameterSet]) -> list[Page]:
        """Fetch every page of every parameter set.

        Args:
            parameter_sets: Parameter sets in request order

        Returns:
            Pages in the order they were requested

        Raises:
            InvalidQueryError: The API answered with a non-success status
            MalformedResponseError: A response lacked pagination or total fields
        """
        state = RateState(window_start=self._clock.now())
        pages: list[Page] = []

        try:
            for set_index, parameter_set in enumerate(parameter_sets):
                key = parameter_set.identity_key
                state.register(key, self._quota.max_requests)

                page = await self._request(parameter_set, set_index, state)
                pages.append(page)
                await self._throttle(state, key)

                while page.has_next_page:
                    continuation = parameter_set.with_start_index(page.start_index + 1)
                    page = await self._request(continuation, set_index, state)
                    pages.append(page)
                    await self._throttle(state, key)

            log_fetch_complete(
                total_sets=len(parameter_sets),
                total_pages=len(pages),
                throttles=state.throttles,
            )
        finally:
            state.clear()

        return pages

    async def _request(self, parameter_set: ParameterSet, set_index: int, state: RateState) -> Page:
        """Issue one request and account it against the set's identity key."""
        request_start = perf_counter()
        try:
            data = await self._transport.get(parameter_set.base_url, params=parameter_set.params)
            page = self._parse(data)
        except Exception as e:
            log_fetch_error(
                set_index=set_index,
                start_index=parameter_set.start_index,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise
        latency_ms = (perf_counter() - request_start) * 1000.0

        remaining = state.consume(parameter_set.identity_key)
        log_page_fetched(
            set_index=set_index,
            start_index=page.start_index,
            rows=len(page.rows),
            total_results=page.total_results,
            quota_remaining=remaining,
            latency_ms=latency_ms,
        )
        return page

    @staticmethod
    def _parse(data: Any) -> Page:
        try:
            return Page.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(f"Malformed report page: {e}", payload=data) from e

    async def _throttle(self, state: RateState, key: str | None) -> None:
        """Sleep out the quota window once ``key`` has no requests left."""
        if not state.is_exhausted(key):
            return

        elapsed = self._clock.now() - state.window_start
        remaining = self._quota.window_seconds - elapsed
        if remaining > 0:
            log_quota_throttled(identity_key=key, sleep_seconds=remaining)
            await self._clock.sleep(remaining)
            state.throttles += 1

        state.reset(key, self._quota.max_requests, self._clock.now())
