"""Shared fixtures for unit tests."""

from __future__ import annotations

from typing import Any

import pytest


class FakeClock:
    """Clock whose time only moves when advanced or slept."""

    def __init__(self, start: float = 1000.0) -> None:
        self.current = start
        self.sleeps: list[float] = []

    def now(self) -> float:
        return self.current

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.current += seconds

    def advance(self, seconds: float) -> None:
        self.current += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


def build_page_payload(
    *,
    start_index: int = 1,
    max_results: int = 10,
    total_results: int = 0,
    rows: list[Any] | None = None,
    totals: dict[str, Any] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Response body in the reporting API's JSON shape."""
    payload: dict[str, Any] = {
        "kind": "analytics#gaData",
        "query": {"start-index": start_index, "max-results": max_results},
        "totalResults": total_results,
        "totalsForAllResults": totals if totals is not None else {"ga:pageviews": "0"},
        **extra,
    }
    if rows is not None:
        payload["rows"] = rows
    return payload


@pytest.fixture
def page_payload():
    """Factory for response bodies."""
    return build_page_payload
