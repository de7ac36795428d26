"""Structured logging for paging operations.

This module provides telemetry hooks for planning, fetching and merging,
emitting structured log records with ``extra`` payloads.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_query_plan(
    *,
    total_sets: int,
    total_filters: int,
    baseline_length: int,
) -> None:
    """Log parameter set planning.

    Args:
        total_sets: Number of parameter sets produced
        total_filters: Number of filter predicates packed across the sets
        baseline_length: Estimated request length without filters
    """
    logger.info(
        "query_plan_created",
        extra={
            "total_sets": total_sets,
            "total_filters": total_filters,
            "baseline_length": baseline_length,
        },
    )


def log_oversized_filter(*, filter_length: int, limit: int) -> None:
    """Log a single filter that alone exceeds the URL budget."""
    logger.warning(
        "filter_exceeds_url_budget",
        extra={"filter_length": filter_length, "limit": limit},
    )


def log_page_fetched(
    *,
    set_index: int,
    start_index: int,
    rows: int,
    total_results: int,
    quota_remaining: int,
    latency_ms: float | None = None,
) -> None:
    """Log a fetched page.

    Args:
        set_index: Zero-based index of the parameter set
        start_index: Echoed start index of the page
        rows: Number of rows on the page
        total_results: Total result count reported by the API
        quota_remaining: Remaining quota for the page's identity key
        latency_ms: Request latency in milliseconds (optional)
    """
    logger.debug(
        "page_fetched",
        extra={
            "set_index": set_index,
            "start_index": start_index,
            "rows": rows,
            "total_results": total_results,
            "quota_remaining": quota_remaining,
            "latency_ms": latency_ms,
        },
    )


def log_quota_throttled(*, identity_key: str | None, sleep_seconds: float) -> None:
    logger.info(
        "quota_throttled",
        extra={"identity_key": identity_key, "sleep_seconds": sleep_seconds},
    )


def log_fetch_complete(*, total_sets: int, total_pages: int, throttles: int) -> None:
    logger.info(
        "fetch_run_complete",
        extra={
            "total_sets": total_sets,
            "total_pages": total_pages,
            "throttles": throttles,
        },
    )


def log_fetch_error(
    *,
    set_index: int,
    start_index: int,
    error_type: str,
    error_message: str,
) -> None:
    """Log a fatal fetch error.

    Args:
        set_index: Zero-based index of the parameter set that failed
        start_index: Start index of the failing request
        error_type: Exception class name
        error_message: Error message
    """
    logger.error(
        "fetch_error",
        extra={
            "set_index": set_index,
            "start_index": start_index,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_pages_merged(*, total_pages: int, total_rows: int, metrics: int) -> None:
    logger.info(
        "pages_merged",
        extra={"total_pages": total_pages, "total_rows": total_rows, "metrics": metrics},
    )
